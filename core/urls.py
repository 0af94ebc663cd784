"""
URL configuration for VetConnect.

The `urlpatterns` list routes URLs to views. For more information please see:
    https://docs.djangoproject.com/en/5.2/topics/http/urls/
"""
from django.contrib import admin
from django.urls import path, include

urlpatterns = [
    path('admin/', admin.site.urls),
    path('api/auth/', include('accounts.urls')),
    path('api/veterinarians/', include('accounts.veterinarian_urls')),
    path('api/appointments/', include('appointments.urls')),
    path('api/admin/', include('accounts.admin_urls')),
    path('api/admin/', include('alerts.urls')),
    path('api/dashboard/', include('dashboards.urls')),
]

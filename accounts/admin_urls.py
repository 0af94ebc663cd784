"""
Admin URL Configuration (users and statistics)
"""

from django.urls import path
from .admin_views import (
    AdminFarmerListView,
    AdminFarmerDetailView,
    AdminVeterinarianListView,
    AdminStatsView,
)

urlpatterns = [
    path('stats/', AdminStatsView.as_view(), name='admin-stats'),
    path('farmers/', AdminFarmerListView.as_view(), name='admin-farmer-list'),
    path('farmers/<uuid:farmer_id>/', AdminFarmerDetailView.as_view(), name='admin-farmer-detail'),
    path('veterinarians/', AdminVeterinarianListView.as_view(), name='admin-veterinarian-list'),
]

from django.urls import path

from .views import FarmerDashboardView

app_name = 'dashboards'

urlpatterns = [
    path('farmer/', FarmerDashboardView.as_view(), name='farmer-dashboard'),
]

"""
Dashboard API Views
"""
from rest_framework.response import Response
from rest_framework.views import APIView

from accounts.permissions import IsFarmer
from appointments.serializers import AppointmentSerializer

from .services import FarmerDashboardService


class FarmerDashboardView(APIView):
    """
    Farmer Dashboard API Endpoint

    GET /api/dashboard/farmer/

    Returns farmer-specific metrics:
    - Livestock counts (total, healthy, sick, by type)
    - Open appointments in the next 7 days
    - The next 5 appointments
    - Number of SMS alerts received

    Permission: Farmer only
    """
    permission_classes = [IsFarmer]

    def get(self, request):
        service = FarmerDashboardService(request.user)

        upcoming = service.get_upcoming_appointments()
        return Response({
            'success': True,
            'data': {
                'livestockStats': service.get_livestock_stats(),
                'appointmentsThisWeek': service.get_appointments_this_week(),
                'upcomingAppointments': AppointmentSerializer(upcoming, many=True).data,
                'alertsReceived': service.get_alerts_received(),
            }
        })

"""
Admin API Views

Provides administrative endpoints for:
- Farmer and veterinarian listings (audience building for alerts)
- Farmer deactivation
- Platform statistics
"""
import logging

from rest_framework.views import APIView
from rest_framework.response import Response

from alerts.models import Alert
from core.exceptions import NotFoundError
from alerts.serializers import AlertSummarySerializer

from .permissions import IsAdmin
from .serializers import FarmerSerializer, VeterinarianSerializer
from .services import UserDirectory

logger = logging.getLogger(__name__)


class AdminFarmerListView(APIView):
    """
    GET /api/admin/farmers/

    Active farmers, newest first.

    Query params:
        district: exact district match
        sector: exact sector match
    """
    permission_classes = [IsAdmin]

    def get(self, request):
        farmers = UserDirectory.farmers().order_by('-date_joined')

        district = request.query_params.get('district')
        if district:
            farmers = farmers.filter(district=district)

        sector = request.query_params.get('sector')
        if sector:
            farmers = farmers.filter(sector=sector)

        data = FarmerSerializer(farmers, many=True).data
        return Response({
            'success': True,
            'count': len(data),
            'data': data
        })


class AdminFarmerDetailView(APIView):
    """
    DELETE /api/admin/farmers/<id>/

    Deactivates the farmer. The row is kept because alerts and appointments
    reference it.
    """
    permission_classes = [IsAdmin]

    def delete(self, request, farmer_id):
        farmer = UserDirectory.get_by_id(farmer_id)
        if not farmer.is_farmer:
            raise NotFoundError('Farmer not found')

        farmer.is_active = False
        farmer.save(update_fields=['is_active', 'updated_at'])
        logger.info(f"Admin {request.user.email} deactivated farmer {farmer.email}")

        return Response({
            'success': True,
            'message': 'Farmer deactivated successfully'
        })


class AdminVeterinarianListView(APIView):
    """
    GET /api/admin/veterinarians/

    Active veterinarians, newest first.
    """
    permission_classes = [IsAdmin]

    def get(self, request):
        vets = UserDirectory.veterinarians().order_by('-date_joined')
        data = VeterinarianSerializer(vets, many=True).data
        return Response({
            'success': True,
            'count': len(data),
            'data': data
        })


class AdminStatsView(APIView):
    """
    GET /api/admin/stats/

    Headline counts for the admin dashboard plus the five latest alerts.
    """
    permission_classes = [IsAdmin]

    RECENT_ALERT_COUNT = 5

    def get(self, request):
        recent_alerts = (
            Alert.objects.select_related('sender')
            .order_by('-created_at')[:self.RECENT_ALERT_COUNT]
        )

        return Response({
            'success': True,
            'data': {
                'totalFarmers': UserDirectory.farmers().count(),
                'totalVets': UserDirectory.veterinarians().count(),
                'totalAlerts': Alert.objects.count(),
                'recentAlerts': AlertSummarySerializer(recent_alerts, many=True).data,
            }
        })

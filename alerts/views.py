"""
Admin SMS Alert Views

    POST /api/admin/broadcast/              targetType: all | individual | district | sector
    POST /api/admin/send-broadcast-alert/   every active farmer
    POST /api/admin/send-individual-alert/  explicit farmerIds
    GET  /api/admin/alerts/                 paginated history (page, limit)
"""
import logging
import math

from django.db.models import Count
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from accounts.permissions import IsAdmin
from accounts.policies import AlertPolicy
from core.exceptions import AuthorizationError, ValidationError
from core.sms_service import build_sms_gateway

from .models import Alert
from .serializers import (
    AlertSerializer,
    BroadcastAllRequestSerializer,
    BroadcastRequestSerializer,
    IndividualAlertRequestSerializer,
)
from .services import AlertDispatchService

logger = logging.getLogger(__name__)


class AlertDispatchView(APIView):
    """Validate the request, dispatch the alert and report delivery counts."""
    permission_classes = [IsAdmin]
    request_serializer_class = None
    success_message = 'Alert sent'

    def post(self, request):
        serializer = self.request_serializer_class(data=request.data)
        serializer.is_valid(raise_exception=True)

        service = AlertDispatchService(build_sms_gateway())
        result = service.dispatch(
            serializer.validated_data['message'],
            serializer.get_audience(),
            request.user,
        )

        return Response({
            'success': True,
            'message': self.success_message,
            'data': result.as_dict()
        }, status=status.HTTP_201_CREATED)


class BroadcastAlertView(AlertDispatchView):
    request_serializer_class = BroadcastRequestSerializer
    success_message = 'Broadcast alert sent'


class SendBroadcastAlertView(AlertDispatchView):
    request_serializer_class = BroadcastAllRequestSerializer
    success_message = 'Broadcast alert sent'


class SendIndividualAlertView(AlertDispatchView):
    request_serializer_class = IndividualAlertRequestSerializer
    success_message = 'Individual alerts sent'


class AlertHistoryView(APIView):
    """
    GET /api/admin/alerts/?page=1&limit=10

    Alert history, newest first.
    """
    permission_classes = [IsAdmin]

    DEFAULT_LIMIT = 10
    MAX_LIMIT = 100

    @staticmethod
    def _positive_int(value, name, default):
        if value in (None, ''):
            return default
        try:
            number = int(value)
        except (TypeError, ValueError):
            raise ValidationError(f"'{name}' must be a positive integer")
        if number < 1:
            raise ValidationError(f"'{name}' must be a positive integer")
        return number

    def get(self, request):
        page = self._positive_int(request.query_params.get('page'), 'page', 1)
        limit = min(
            self._positive_int(request.query_params.get('limit'), 'limit', self.DEFAULT_LIMIT),
            self.MAX_LIMIT
        )

        queryset = AlertPolicy.scope(request.user, Alert.objects.all())
        if queryset is None:
            raise AuthorizationError('Admin access required')

        total = queryset.count()
        offset = (page - 1) * limit
        alerts = (
            queryset.select_related('sender')
            .prefetch_related('deliveries')
            .annotate(recipient_count=Count('deliveries'))
            .order_by('-created_at')[offset:offset + limit]
        )

        return Response({
            'success': True,
            'data': AlertSerializer(alerts, many=True).data,
            'pagination': {
                'total': total,
                'page': page,
                'pages': math.ceil(total / limit) if total else 0,
            }
        })

"""
Appointment API Views

    GET    /api/appointments/                  caller's appointments
    POST   /api/appointments/                  book (farmers)
    GET    /api/appointments/<id>/             detail (parties only)
    PUT    /api/appointments/<id>/             role-scoped partial update
    DELETE /api/appointments/<id>/             delete (parties only)
    PUT    /api/appointments/<id>/confirm/     confirm (assigned vet)
    PUT    /api/appointments/<id>/complete/    complete (assigned vet)
"""
import logging

from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from accounts.policies import AppointmentPolicy
from core.exceptions import AuthorizationError, ValidationError

from .serializers import (
    AppointmentSerializer,
    AppointmentCreateSerializer,
    AppointmentCompleteSerializer,
    to_model_changes,
)
from .services import AppointmentLifecycleService

logger = logging.getLogger(__name__)


class AppointmentServiceMixin:
    service_class = AppointmentLifecycleService

    def get_service(self):
        return self.service_class()


class AppointmentListCreateView(AppointmentServiceMixin, APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request):
        appointments = self.get_service().list_for(request.user)
        data = AppointmentSerializer(appointments, many=True).data
        return Response({
            'success': True,
            'count': len(data),
            'data': data
        })

    def post(self, request):
        if not AppointmentPolicy.can_create(request.user):
            raise AuthorizationError('Only farmers can book appointments')

        serializer = AppointmentCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        payload = serializer.validated_data

        appointment = self.get_service().create(
            farmer=request.user,
            livestock_id=payload['livestockId'],
            vet_id=payload['vetId'],
            date=payload['date'],
            time=payload['time'],
            reason=payload['reason'],
            notes=payload['notes'],
            location=payload['location'],
        )

        return Response({
            'success': True,
            'message': 'Appointment booked successfully',
            'data': AppointmentSerializer(appointment).data
        }, status=status.HTTP_201_CREATED)


class AppointmentDetailView(AppointmentServiceMixin, APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request, appointment_id):
        appointment = self.get_service().get_for(request.user, appointment_id)
        return Response({
            'success': True,
            'data': AppointmentSerializer(appointment).data
        })

    def put(self, request, appointment_id):
        if not hasattr(request.data, 'items'):
            raise ValidationError('Request body must be a JSON object')

        appointment = self.get_service().update(
            request.user, appointment_id, to_model_changes(request.data)
        )
        return Response({
            'success': True,
            'message': 'Appointment updated successfully',
            'data': AppointmentSerializer(appointment).data
        })

    patch = put

    def delete(self, request, appointment_id):
        self.get_service().delete(request.user, appointment_id)
        return Response({
            'success': True,
            'message': 'Appointment deleted successfully'
        })


class AppointmentConfirmView(AppointmentServiceMixin, APIView):
    permission_classes = [IsAuthenticated]

    def put(self, request, appointment_id):
        appointment = self.get_service().confirm(request.user, appointment_id)
        return Response({
            'success': True,
            'message': 'Appointment confirmed successfully',
            'data': AppointmentSerializer(appointment).data
        })

    patch = put


class AppointmentCompleteView(AppointmentServiceMixin, APIView):
    permission_classes = [IsAuthenticated]

    def put(self, request, appointment_id):
        if not AppointmentPolicy.is_veterinarian(request.user):
            raise AuthorizationError('Only veterinarians can complete appointments')

        serializer = AppointmentCompleteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        outcome = serializer.validated_data

        appointment = self.get_service().complete(
            request.user,
            appointment_id,
            diagnosis=outcome['diagnosis'],
            treatment=outcome['treatment'],
            medications=outcome['medications'],
            follow_up_date=outcome['followUpDate'],
        )
        return Response({
            'success': True,
            'message': 'Appointment completed successfully',
            'data': AppointmentSerializer(appointment).data
        })

    patch = put

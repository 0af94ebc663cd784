"""
Appointment Lifecycle Service

Booking, confirmation, completion, role-scoped updates and deletion of
appointments. Authorization is delegated to ``AppointmentPolicy`` and status
changes to ``appointments.state_machine``.

Every mutation locks the appointment row for the duration of its
transaction. There is no version check between requests, so two parties
editing the same appointment one after the other both succeed and the later
write wins.
"""
import logging

from django.conf import settings
from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import transaction

from accounts.policies import AppointmentPolicy
from accounts.services import UserDirectory
from core.exceptions import (
    AuthorizationError,
    InvalidStatusTransition,
    NotFoundError,
    ValidationError,
)
from livestock.services import LivestockRegistry

from .models import Appointment
from .state_machine import validate_status_transition

logger = logging.getLogger(__name__)

COMPLETION_FIELDS = ('diagnosis', 'treatment', 'medications', 'follow_up_date')


class AppointmentLifecycleService:
    """
    Service for the appointment state machine and its authorization rules.
    """

    # ==================================================================
    # READS
    # ==================================================================

    def list_for(self, user):
        """Appointments the caller is a party to, newest date first."""
        queryset = AppointmentPolicy.scope(user, Appointment.objects.all())
        if queryset is None:
            raise AuthorizationError('Not authorized')
        return queryset.order_by('-date', 'time')

    def get_for(self, user, appointment_id):
        appointment = self._get(Appointment.objects.all(), appointment_id)
        if not AppointmentPolicy.can_view(user, appointment):
            raise AuthorizationError('Not authorized to access this appointment')
        return appointment

    # ==================================================================
    # MUTATIONS
    # ==================================================================

    @transaction.atomic
    def create(self, farmer, livestock_id, vet_id, date, time, reason, notes='', location=None):
        """
        Book an appointment for one of the farmer's animals.

        The livestock must belong to ``farmer`` and ``vet_id`` must name an
        active veterinarian. Nothing is written if either check fails.
        """
        if not AppointmentPolicy.can_create(farmer):
            raise AuthorizationError('Only farmers can book appointments')

        livestock = LivestockRegistry.get_owned(livestock_id, farmer)
        vet = UserDirectory.get_veterinarian(vet_id)

        appointment = Appointment(
            farmer=farmer,
            farmer_name=farmer.get_full_name(),
            farmer_phone=farmer.phone,
            vet=vet,
            vet_name=vet.get_full_name(),
            vet_specialty=vet.specialty,
            vet_phone=vet.phone,
            vet_email=vet.email,
            livestock=livestock,
            livestock_name=livestock.name,
            livestock_type=livestock.type,
            date=date,
            time=time,
            reason=reason,
            notes=notes or '',
            location=location or vet.location,
            status=Appointment.Status.PENDING,
        )
        self._validate(appointment)
        appointment.save()

        logger.info(
            f"Appointment {appointment.id} booked by farmer {farmer.email} "
            f"with vet {vet.email} on {appointment.date} {appointment.time}"
        )
        self._notify(appointment, 'booked', recipient='vet')
        return appointment

    @transaction.atomic
    def confirm(self, user, appointment_id):
        """
        Confirm a pending appointment. Confirming an already confirmed
        appointment changes nothing; completed or cancelled appointments
        cannot be confirmed.
        """
        if not AppointmentPolicy.is_veterinarian(user):
            raise AuthorizationError('Only veterinarians can confirm appointments')

        appointment = self._get_locked(appointment_id)
        if not AppointmentPolicy.can_confirm(user, appointment):
            raise AuthorizationError('Not authorized to confirm this appointment')

        if appointment.is_terminal:
            raise InvalidStatusTransition(
                f"Cannot confirm an appointment that is already {appointment.status}"
            )

        previous_status = appointment.status
        validate_status_transition(previous_status, Appointment.Status.CONFIRMED)

        if previous_status != Appointment.Status.CONFIRMED:
            appointment.status = Appointment.Status.CONFIRMED
            appointment.save(update_fields=['status', 'updated_at'])
            logger.info(f"Appointment {appointment.id} confirmed by {user.email}")
            self._notify(appointment, 'confirmed', recipient='farmer')

        return appointment

    @transaction.atomic
    def complete(self, user, appointment_id, diagnosis='', treatment='',
                 medications=None, follow_up_date=None):
        """
        Complete a confirmed appointment and record the visit outcome.
        """
        if not AppointmentPolicy.is_veterinarian(user):
            raise AuthorizationError('Only veterinarians can complete appointments')

        appointment = self._get_locked(appointment_id)
        if not AppointmentPolicy.can_complete(user, appointment):
            raise AuthorizationError('Not authorized to complete this appointment')

        if appointment.is_terminal:
            raise InvalidStatusTransition(
                f"Cannot complete an appointment that is already {appointment.status}"
            )
        validate_status_transition(appointment.status, Appointment.Status.COMPLETED)

        appointment.status = Appointment.Status.COMPLETED
        appointment.diagnosis = diagnosis or ''
        appointment.treatment = treatment or ''
        appointment.medications = medications if medications is not None else []
        appointment.follow_up_date = follow_up_date
        self._validate(appointment)
        appointment.save()

        logger.info(f"Appointment {appointment.id} completed by {user.email}")
        self._notify(appointment, 'completed', recipient='farmer')
        return appointment

    @transaction.atomic
    def update(self, user, appointment_id, changes):
        """
        Apply a partial update.

        ``changes`` maps model field names to new values. A farmer may only
        change ``notes`` and cancel; a veterinarian may reschedule, edit
        details and record completion fields. Any other key is rejected
        and nothing is written.
        """
        appointment = self._get_locked(appointment_id)
        if not AppointmentPolicy.can_edit(user, appointment):
            raise AuthorizationError('Not authorized to update this appointment')

        editable = set(AppointmentPolicy.editable_fields(user, appointment))
        farmer_update = AppointmentPolicy.is_farmer(user)

        rejected = sorted(set(changes) - editable)
        if farmer_update:
            new_status = changes.get('status')
            if rejected or (new_status and new_status != AppointmentPolicy.FARMER_ALLOWED_STATUS):
                raise ValidationError('Farmers can only update notes or cancel appointments')
        elif rejected:
            raise ValidationError(f"These fields cannot be updated: {', '.join(rejected)}")

        previous_status = appointment.status
        target_status = changes.get('status') or previous_status
        validate_status_transition(previous_status, target_status)

        touched_completion = [field for field in COMPLETION_FIELDS if field in changes]
        if touched_completion and target_status != Appointment.Status.COMPLETED:
            raise ValidationError(
                'Completion details can only be recorded on completed appointments',
                errors={field: ['Appointment is not completed.'] for field in touched_completion}
            )

        for field, value in changes.items():
            if field == 'status' and not value:
                continue
            if field == 'medications' and value is None:
                value = []
            if field in ('notes', 'diagnosis', 'treatment') and value is None:
                value = ''
            setattr(appointment, field, value)

        self._validate(appointment)
        appointment.save()

        logger.info(
            f"Appointment {appointment.id} updated by {user.email}: {', '.join(sorted(changes)) or 'no changes'}"
        )

        if appointment.status != previous_status:
            if appointment.status == Appointment.Status.CANCELLED:
                other_party = 'vet' if farmer_update else 'farmer'
                self._notify(appointment, 'cancelled', recipient=other_party)
            elif appointment.status in (Appointment.Status.CONFIRMED, Appointment.Status.COMPLETED):
                self._notify(appointment, appointment.status, recipient='farmer')

        return appointment

    @transaction.atomic
    def delete(self, user, appointment_id):
        appointment = self._get_locked(appointment_id)
        if not AppointmentPolicy.can_delete(user, appointment):
            raise AuthorizationError('Not authorized to delete this appointment')

        appointment_pk = appointment.pk
        appointment.delete()
        logger.info(f"Appointment {appointment_pk} deleted by {user.email}")

    # ==================================================================
    # HELPERS
    # ==================================================================

    @staticmethod
    def _get(queryset, appointment_id):
        try:
            return queryset.get(pk=appointment_id)
        except (Appointment.DoesNotExist, DjangoValidationError, ValueError):
            raise NotFoundError('Appointment not found')

    def _get_locked(self, appointment_id):
        return self._get(Appointment.objects.select_for_update(), appointment_id)

    @staticmethod
    def _validate(appointment):
        """Run model validation, converting field errors to a 400."""
        medications = appointment.medications
        if not isinstance(medications, list) or not all(isinstance(item, str) for item in medications):
            raise ValidationError(
                'Validation failed',
                errors={'medications': ['Must be a list of strings.']}
            )

        try:
            appointment.full_clean(exclude=['farmer', 'vet', 'livestock'])
        except DjangoValidationError as e:
            raise ValidationError('Validation failed', errors=e.message_dict)

    @staticmethod
    def _notify(appointment, event, recipient):
        """Queue an SMS about ``event`` once the transaction commits."""
        if not getattr(settings, 'APPOINTMENT_SMS_NOTIFICATIONS', False):
            return

        from .tasks import notify_appointment_event

        appointment_id = str(appointment.id)
        transaction.on_commit(
            lambda: notify_appointment_event.delay(appointment_id, event, recipient)
        )

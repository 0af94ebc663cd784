"""
Celery tasks for appointment notifications.
"""
from celery import shared_task
from django.conf import settings
import logging

logger = logging.getLogger(__name__)


def build_event_message(appointment, event):
    """SMS text for an appointment event, cut to one segment."""
    when = f"{appointment.date:%d %b %Y} at {appointment.time}"
    messages = {
        'booked': (
            f"VetConnect: {appointment.farmer_name} booked a {appointment.get_reason_display().lower()} "
            f"visit for {appointment.livestock_name} on {when}."
        ),
        'confirmed': (
            f"VetConnect: {appointment.vet_name} confirmed your appointment for "
            f"{appointment.livestock_name} on {when}."
        ),
        'completed': (
            f"VetConnect: Your visit for {appointment.livestock_name} with "
            f"{appointment.vet_name} is complete. Check the app for treatment details."
        ),
        'cancelled': (
            f"VetConnect: The appointment for {appointment.livestock_name} on {when} was cancelled."
        ),
    }
    return messages[event][:getattr(settings, 'SMS_MAX_LENGTH', 160)]


@shared_task(bind=True, max_retries=3)
def notify_appointment_event(self, appointment_id: str, event: str, recipient: str):
    """
    Text the farmer or the vet about an appointment event.

    Phone numbers come from the booking snapshot.
    """
    from core.sms_service import build_sms_gateway
    from .models import Appointment

    try:
        appointment = Appointment.objects.get(pk=appointment_id)
    except Appointment.DoesNotExist:
        logger.warning(f"Appointment {appointment_id} no longer exists; skipping {event} SMS")
        return None

    phone = appointment.vet_phone if recipient == 'vet' else appointment.farmer_phone
    if not phone:
        logger.info(f"No {recipient} phone on appointment {appointment_id}; skipping {event} SMS")
        return None

    result = build_sms_gateway().send(phone, build_event_message(appointment, event))
    if result.success:
        logger.info(f"Appointment {event} SMS sent to {result.phone}")
        return result.as_dict()

    logger.error(f"Appointment {event} SMS to {result.phone} failed: {result.error}")
    if self.request.retries >= self.max_retries:
        return result.as_dict()
    raise self.retry(
        exc=RuntimeError(result.error),
        countdown=60 * (2 ** self.request.retries)
    )

"""
Alert Dispatch Service

Sends an admin SMS to an audience of farmers and records the outcome:

1. Validate the message (non-empty, single SMS segment)
2. Resolve the audience to farmers with a phone number
3. Send through the injected gateway, in audience order
4. Persist one immutable Alert with a delivery row per recipient

A failed delivery is recorded against its recipient and never stops the
rest of the batch. No database lock is held while the gateway is sending.
"""
import logging
from dataclasses import dataclass, field
from typing import List

from django.conf import settings
from django.db import transaction

from accounts.policies import AlertPolicy
from core.exceptions import AuthorizationError, NotFoundError, ValidationError

from .audience import AudienceSelector, resolve_audience
from .models import Alert, AlertRecipient

logger = logging.getLogger(__name__)


@dataclass
class DispatchResult:
    alert_id: str
    total_recipients: int
    success_count: int
    failure_count: int
    failed_recipients: List[dict] = field(default_factory=list)

    def as_dict(self):
        return {
            'alertId': self.alert_id,
            'totalRecipients': self.total_recipients,
            'successCount': self.success_count,
            'failureCount': self.failure_count,
            'failedRecipients': self.failed_recipients,
        }


class AlertDispatchService:
    """
    Dispatch admin SMS alerts through an ``SMSGateway``.

    Usage:
        service = AlertDispatchService(build_sms_gateway())
        result = service.dispatch(message, AudienceSelector.district('Gasabo'), request.user)
    """

    def __init__(self, gateway, max_length=None):
        self.gateway = gateway
        self.max_length = max_length or getattr(settings, 'SMS_MAX_LENGTH', 160)

    def validate_message(self, message):
        """Return the trimmed message or raise ValidationError."""
        message = (message or '').strip()
        if not message:
            raise ValidationError('Alert message is required')

        if len(message) > self.max_length:
            raise ValidationError(
                f'Message cannot exceed {self.max_length} characters (SMS limit)',
                errors={'message': [f'{len(message)} characters; the limit is {self.max_length}.']}
            )
        return message

    def dispatch(self, message, audience: AudienceSelector, sender) -> DispatchResult:
        if not AlertPolicy.can_create(sender):
            raise AuthorizationError('Admin access required')

        message = self.validate_message(message)
        recipients = resolve_audience(audience)

        if not recipients:
            if audience.mode == AudienceSelector.ALL:
                raise NotFoundError('No active farmers found')
            raise NotFoundError('No valid farmers found for the selected audience')

        logger.info(
            f"Dispatching {audience.alert_type} alert from {sender.email} "
            f"to {len(recipients)} farmer(s) [{audience.describe()}] via {self.gateway.name}"
        )

        results = self.gateway.send_bulk([farmer.phone for farmer in recipients], message)
        if len(results) != len(recipients):
            raise RuntimeError(
                f"Gateway {self.gateway.name} returned {len(results)} results "
                f"for {len(recipients)} recipients"
            )

        deliveries = []
        failed_recipients = []
        for position, (farmer, result) in enumerate(zip(recipients, results)):
            error = ''
            if result.success:
                status = AlertRecipient.DeliveryStatus.DELIVERED
            else:
                status = AlertRecipient.DeliveryStatus.FAILED
                error = result.error or 'Unknown error'
                failed_recipients.append({
                    'userId': str(farmer.pk),
                    'phone': result.phone,
                    'error': error,
                })
            deliveries.append(AlertRecipient(
                user=farmer,
                position=position,
                phone=result.phone,
                status=status,
                error=error[:255],
            ))

        failure_count = len(failed_recipients)
        success_count = len(deliveries) - failure_count

        with transaction.atomic():
            alert = Alert.objects.create(
                message=message,
                sender=sender,
                alert_type=audience.alert_type,
                status=Alert.Status.SENT,
                success_count=success_count,
                failure_count=failure_count,
                audience=audience.describe(),
            )
            for delivery in deliveries:
                delivery.alert = alert
            AlertRecipient.objects.bulk_create(deliveries)

        logger.info(
            f"Alert {alert.id} sent: {success_count} delivered, {failure_count} failed"
        )

        return DispatchResult(
            alert_id=str(alert.id),
            total_recipients=len(deliveries),
            success_count=success_count,
            failure_count=failure_count,
            failed_recipients=failed_recipients,
        )

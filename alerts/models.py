"""
Alert Models

An Alert records one admin SMS dispatch: the message, who sent it, every
farmer it was addressed to and how delivery went for each of them. Alerts
are write-once; saving an existing row raises ``ImmutableRecordError``.
"""
from django.conf import settings
from django.db import models
import uuid


class ImmutableRecordError(Exception):
    """Raised when code tries to modify a dispatched alert."""
    pass


class ImmutableModel(models.Model):
    """Model whose rows can be inserted but never updated."""

    class Meta:
        abstract = True

    def save(self, *args, **kwargs):
        if not self._state.adding:
            raise ImmutableRecordError(
                f"{self.__class__.__name__} {self.pk} cannot be modified once created"
            )
        super().save(*args, **kwargs)


class Alert(ImmutableModel):
    """A broadcast or individual SMS alert sent by an administrator."""

    class AlertType(models.TextChoices):
        BROADCAST = 'broadcast', 'Broadcast'
        INDIVIDUAL = 'individual', 'Individual'

    class Status(models.TextChoices):
        PENDING = 'pending', 'Pending'
        SENT = 'sent', 'Sent'
        FAILED = 'failed', 'Failed'

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    message = models.CharField(max_length=160)
    sender = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='sent_alerts'
    )
    recipients = models.ManyToManyField(
        settings.AUTH_USER_MODEL,
        through='AlertRecipient',
        related_name='received_alerts'
    )
    alert_type = models.CharField(max_length=20, choices=AlertType.choices, db_index=True)
    status = models.CharField(max_length=20, choices=Status.choices, default=Status.PENDING)
    success_count = models.PositiveIntegerField(default=0)
    failure_count = models.PositiveIntegerField(default=0)

    # Audience description, e.g. "district=Gasabo"
    audience = models.CharField(max_length=255, blank=True, default='')

    created_at = models.DateTimeField(auto_now_add=True, db_index=True)

    class Meta:
        db_table = 'alerts'
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.get_alert_type_display()} alert {self.created_at:%Y-%m-%d %H:%M} ({self.success_count}/{self.total_recipients})"

    @property
    def total_recipients(self):
        return self.success_count + self.failure_count

    @property
    def failed_recipients(self):
        """Failure detail, in dispatch order."""
        return [
            {
                'userId': str(delivery.user_id),
                'phone': delivery.phone,
                'error': delivery.error,
            }
            for delivery in self.deliveries.all()
            if delivery.status == AlertRecipient.DeliveryStatus.FAILED
        ]


class AlertRecipient(ImmutableModel):
    """Delivery outcome for one farmer of an alert."""

    class DeliveryStatus(models.TextChoices):
        DELIVERED = 'delivered', 'Delivered'
        FAILED = 'failed', 'Failed'

    alert = models.ForeignKey(Alert, on_delete=models.CASCADE, related_name='deliveries')
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name='alert_deliveries'
    )
    position = models.PositiveIntegerField(help_text="Order in which the recipient was attempted")
    phone = models.CharField(max_length=32, help_text="Normalized number the SMS was sent to")
    status = models.CharField(max_length=20, choices=DeliveryStatus.choices)
    error = models.CharField(max_length=255, blank=True, default='')

    class Meta:
        db_table = 'alert_recipients'
        ordering = ['position']
        constraints = [
            models.UniqueConstraint(fields=['alert', 'position'], name='unique_alert_position'),
        ]

    def __str__(self):
        return f"{self.phone} ({self.status})"

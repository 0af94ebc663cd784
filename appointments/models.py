"""
Appointment Models

A farmer books a veterinarian for one of their animals. Display fields of
the farmer, vet and animal are copied onto the appointment when it is booked
and are not updated afterwards, so the record shows what both parties saw at
booking time even if profiles change later.
"""
from django.conf import settings
from django.db import models
import uuid


class Appointment(models.Model):
    """A veterinary visit booked by a farmer."""

    class Status(models.TextChoices):
        PENDING = 'pending', 'Pending'
        CONFIRMED = 'confirmed', 'Confirmed'
        COMPLETED = 'completed', 'Completed'
        CANCELLED = 'cancelled', 'Cancelled'

    class Reason(models.TextChoices):
        ROUTINE_CHECKUP = 'routine-checkup', 'Routine Checkup'
        VACCINATION = 'vaccination', 'Vaccination'
        ILLNESS = 'illness', 'Illness'
        INJURY = 'injury', 'Injury'
        PREGNANCY = 'pregnancy', 'Pregnancy'
        OTHER = 'other', 'Other'

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    # Parties
    farmer = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='farmer_appointments'
    )
    vet = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='vet_appointments'
    )
    livestock = models.ForeignKey(
        'livestock.Livestock',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='appointments'
    )

    # Snapshot taken at booking time
    farmer_name = models.CharField(max_length=255)
    farmer_phone = models.CharField(max_length=20, blank=True, default='')
    vet_name = models.CharField(max_length=255)
    vet_specialty = models.CharField(max_length=100, blank=True, default='')
    vet_phone = models.CharField(max_length=20, blank=True, default='')
    vet_email = models.EmailField(blank=True, default='')
    livestock_name = models.CharField(max_length=100)
    livestock_type = models.CharField(max_length=20)

    # Visit details
    date = models.DateField()
    time = models.CharField(max_length=50, help_text="Slot label, e.g. '09:00' or 'Morning'")
    reason = models.CharField(max_length=20, choices=Reason.choices)
    notes = models.TextField(blank=True, default='')
    status = models.CharField(
        max_length=20,
        choices=Status.choices,
        default=Status.PENDING,
        db_index=True
    )
    location = models.CharField(max_length=200)

    # Filled in when the visit is completed
    diagnosis = models.TextField(blank=True, default='')
    treatment = models.TextField(blank=True, default='')
    medications = models.JSONField(default=list, blank=True)
    follow_up_date = models.DateField(null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'appointments'
        ordering = ['-date', 'time']
        indexes = [
            models.Index(fields=['farmer', '-date'], name='appt_farmer_date_idx'),
            models.Index(fields=['vet', '-date'], name='appt_vet_date_idx'),
        ]

    def __str__(self):
        return f"{self.livestock_name} with {self.vet_name} on {self.date} {self.time} ({self.status})"

    @property
    def is_terminal(self):
        return self.status in (self.Status.COMPLETED, self.Status.CANCELLED)

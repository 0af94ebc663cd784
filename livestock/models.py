"""
Livestock Registry Models

Every animal belongs to exactly one farmer.
"""
from django.conf import settings
from django.db import models
from django.utils import timezone
import uuid


class Livestock(models.Model):
    """An animal owned by a farmer."""

    class LivestockType(models.TextChoices):
        CATTLE = 'Cattle', 'Cattle'
        GOAT = 'Goat', 'Goat'
        SHEEP = 'Sheep', 'Sheep'
        PIG = 'Pig', 'Pig'
        CHICKEN = 'Chicken', 'Chicken'
        OTHER = 'Other', 'Other'

    class HealthStatus(models.TextChoices):
        HEALTHY = 'healthy', 'Healthy'
        SICK = 'sick', 'Sick'
        UNDER_TREATMENT = 'under-treatment', 'Under Treatment'
        RECOVERING = 'recovering', 'Recovering'

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    farmer = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='livestock',
        limit_choices_to={'role': 'farmer'},
        help_text="Owning farmer"
    )

    name = models.CharField(max_length=100)
    type = models.CharField(max_length=20, choices=LivestockType.choices)
    breed = models.CharField(max_length=100, blank=True, default='')
    age = models.CharField(max_length=50, blank=True, default='')
    weight = models.CharField(max_length=50, blank=True, default='')
    health_status = models.CharField(
        max_length=20,
        choices=HealthStatus.choices,
        default=HealthStatus.HEALTHY,
        db_index=True
    )
    last_checkup = models.DateTimeField(default=timezone.now)
    notes = models.TextField(blank=True, default='')
    tag_number = models.CharField(
        max_length=50,
        unique=True,
        null=True,
        blank=True,
        help_text="Ear tag or other identifier (optional, unique when set)"
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'livestock'
        verbose_name = 'Livestock'
        verbose_name_plural = 'Livestock'
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.name} ({self.type})"

    def save(self, *args, **kwargs):
        # Blank tags must be NULL so the unique constraint ignores them
        if not self.tag_number:
            self.tag_number = None
        self.name = self.name.strip()
        super().save(*args, **kwargs)

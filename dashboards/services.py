"""
Farmer Dashboard Service

Summarises a farmer's own records for the dashboard landing page:
- Livestock counts by type and health
- Open appointments in the coming week
- Next upcoming appointments
- SMS alerts received
"""
from datetime import timedelta

from django.db.models import Count, Q
from django.utils import timezone

from alerts.models import Alert
from appointments.models import Appointment
from livestock.models import Livestock


class FarmerDashboardService:
    """Service for farmer dashboard data"""

    WEEK = timedelta(days=7)
    UPCOMING_LIMIT = 5

    def __init__(self, farmer, today=None):
        self.farmer = farmer
        self.today = today or timezone.localdate()

    def get_livestock_stats(self):
        """
        Count the farmer's animals.

        ``sick`` covers both sick and under-treatment animals; recovering
        animals count towards neither ``healthy`` nor ``sick``.
        """
        livestock = Livestock.objects.filter(farmer=self.farmer)

        totals = livestock.aggregate(
            total=Count('id'),
            healthy=Count('id', filter=Q(health_status=Livestock.HealthStatus.HEALTHY)),
            sick=Count('id', filter=Q(health_status__in=[
                Livestock.HealthStatus.SICK,
                Livestock.HealthStatus.UNDER_TREATMENT,
            ])),
        )

        by_type = livestock.order_by().values('type').annotate(count=Count('id'))
        totals['byType'] = {row['type']: row['count'] for row in by_type}
        return totals

    def get_appointments_this_week(self):
        """Pending or confirmed appointments dated today through seven days out."""
        return Appointment.objects.filter(
            farmer=self.farmer,
            date__gte=self.today,
            date__lte=self.today + self.WEEK,
            status__in=[Appointment.Status.PENDING, Appointment.Status.CONFIRMED],
        ).count()

    def get_upcoming_appointments(self, limit=None):
        return list(
            Appointment.objects.filter(farmer=self.farmer, date__gte=self.today)
            .order_by('date', 'time')[:limit or self.UPCOMING_LIMIT]
        )

    def get_alerts_received(self):
        return Alert.objects.filter(
            recipients=self.farmer,
            status=Alert.Status.SENT,
        ).distinct().count()

"""
Alert Authorization Policy

Only administrators send SMS alerts or read alert history.
"""

from .base_policy import BasePolicy


class AlertPolicy(BasePolicy):
    """Authorization policy for Alert model."""

    @classmethod
    def scope(cls, user, queryset):
        if cls.is_admin(user):
            return queryset
        return None

    @classmethod
    def can_view(cls, user, alert):
        return cls.is_admin(user)

    @classmethod
    def can_create(cls, user, resource_class=None):
        return cls.is_admin(user)

    @classmethod
    def can_edit(cls, user, alert):
        # Alerts are immutable once dispatched
        return False

    @classmethod
    def can_delete(cls, user, alert):
        return False

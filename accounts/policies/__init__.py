"""
Authorization policies.

One policy class per protected resource; services ask the policy before
reading or mutating a row.
"""

from .base_policy import BasePolicy
from .appointment_policy import AppointmentPolicy
from .alert_policy import AlertPolicy

__all__ = ['BasePolicy', 'AppointmentPolicy', 'AlertPolicy']

"""
User directory lookups shared by the appointment and alert services.
"""
import logging

from django.contrib.auth import get_user_model
from django.core.exceptions import ValidationError as DjangoValidationError

from core.exceptions import NotFoundError

logger = logging.getLogger(__name__)

User = get_user_model()


class UserDirectory:
    """Identity and role lookups."""

    @staticmethod
    def get_by_id(user_id):
        try:
            return User.objects.get(pk=user_id)
        except (User.DoesNotExist, DjangoValidationError, ValueError):
            raise NotFoundError('User not found')

    @staticmethod
    def get_by_email(email):
        try:
            return User.objects.get(email__iexact=email)
        except User.DoesNotExist:
            raise NotFoundError('User not found')

    @staticmethod
    def get_veterinarian(user_id):
        """Return an active veterinarian or raise NotFoundError."""
        try:
            return User.objects.get(
                pk=user_id,
                role=User.UserRole.VETERINARIAN,
                is_active=True
            )
        except (User.DoesNotExist, DjangoValidationError, ValueError):
            raise NotFoundError('Veterinarian not found')

    @staticmethod
    def farmers():
        """Active farmers in a stable order (oldest account first)."""
        return User.objects.filter(
            role=User.UserRole.FARMER,
            is_active=True
        ).order_by('date_joined', 'id')

    @staticmethod
    def veterinarians():
        return User.objects.filter(
            role=User.UserRole.VETERINARIAN,
            is_active=True
        )

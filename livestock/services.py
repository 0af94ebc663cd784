"""
Ownership-checked livestock lookups.
"""
from django.core.exceptions import ValidationError as DjangoValidationError

from core.exceptions import AuthorizationError, NotFoundError

from .models import Livestock


class LivestockRegistry:

    @staticmethod
    def get(livestock_id):
        try:
            return Livestock.objects.get(pk=livestock_id)
        except (Livestock.DoesNotExist, DjangoValidationError, ValueError):
            raise NotFoundError('Livestock not found')

    @classmethod
    def get_owned(cls, livestock_id, farmer):
        """
        Return the animal if ``farmer`` owns it.

        Raises:
            NotFoundError: no such livestock
            AuthorizationError: owned by another farmer
        """
        livestock = cls.get(livestock_id)
        if livestock.farmer_id != farmer.pk:
            raise AuthorizationError('Not authorized to book appointment for this livestock')
        return livestock

    @staticmethod
    def for_farmer(farmer):
        return Livestock.objects.filter(farmer=farmer)

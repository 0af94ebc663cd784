"""
Appointment Authorization Policy

Farmer and veterinarian are joint stakeholders in an appointment. Nobody
else, admins included, can read or change it.
"""

from .base_policy import BasePolicy


class AppointmentPolicy(BasePolicy):
    """Authorization policy for Appointment model."""

    FARMER_EDITABLE_FIELDS = ['notes', 'status']
    VET_EDITABLE_FIELDS = [
        'date', 'time', 'reason', 'notes', 'status', 'location',
        'diagnosis', 'treatment', 'medications', 'follow_up_date',
    ]

    # Farmers may change status only to this value
    FARMER_ALLOWED_STATUS = 'cancelled'

    @staticmethod
    def is_farmer_party(user, appointment):
        return appointment.farmer_id == user.pk

    @staticmethod
    def is_vet_party(user, appointment):
        return appointment.vet_id == user.pk

    @classmethod
    def is_party(cls, user, appointment):
        return cls.is_farmer_party(user, appointment) or cls.is_vet_party(user, appointment)

    @classmethod
    def scope(cls, user, queryset):
        """
        Farmers see appointments they booked, veterinarians see appointments
        booked with them. Returns None for every other role.
        """
        if cls.is_farmer(user):
            return queryset.filter(farmer=user)
        if cls.is_veterinarian(user):
            return queryset.filter(vet=user)
        return None

    @classmethod
    def can_view(cls, user, appointment):
        return cls.is_party(user, appointment)

    @classmethod
    def can_create(cls, user, resource_class=None):
        """Only farmers book appointments."""
        return cls.is_farmer(user)

    @classmethod
    def can_edit(cls, user, appointment):
        return cls.is_party(user, appointment)

    @classmethod
    def can_delete(cls, user, appointment):
        return cls.is_party(user, appointment)

    @classmethod
    def can_confirm(cls, user, appointment):
        return cls.is_veterinarian(user) and cls.is_vet_party(user, appointment)

    @classmethod
    def can_complete(cls, user, appointment):
        return cls.is_veterinarian(user) and cls.is_vet_party(user, appointment)

    @classmethod
    def editable_fields(cls, user, appointment):
        # A farmer who booked the appointment gets the restricted set
        if cls.is_farmer(user) and cls.is_farmer_party(user, appointment):
            return list(cls.FARMER_EDITABLE_FIELDS)
        if cls.is_vet_party(user, appointment):
            return list(cls.VET_EDITABLE_FIELDS)
        return []

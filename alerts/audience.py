"""
Alert audiences.

An ``AudienceSelector`` names who an alert is for; ``resolve_audience``
turns it into the list of farmers that will be texted. Only active farmers
with a phone number are returned, oldest account first, so the send order of
a dispatch is stable.
"""
import uuid
from dataclasses import dataclass, field
from typing import Tuple

from accounts.services import UserDirectory
from core.exceptions import ValidationError


@dataclass(frozen=True)
class AudienceSelector:
    mode: str
    farmer_ids: Tuple[uuid.UUID, ...] = field(default_factory=tuple)
    value: str = ''

    ALL = 'all'
    FARMER = 'farmer'
    FARMERS = 'farmers'
    DISTRICT = 'district'
    SECTOR = 'sector'

    MODES = (ALL, FARMER, FARMERS, DISTRICT, SECTOR)

    @classmethod
    def all(cls):
        return cls(cls.ALL)

    @classmethod
    def farmer(cls, farmer_id):
        return cls(cls.FARMER, farmer_ids=(farmer_id,) if farmer_id else ())

    @classmethod
    def farmers(cls, farmer_ids):
        return cls(cls.FARMERS, farmer_ids=tuple(farmer_ids or ()))

    @classmethod
    def district(cls, name):
        return cls(cls.DISTRICT, value=(name or '').strip())

    @classmethod
    def sector(cls, name):
        return cls(cls.SECTOR, value=(name or '').strip())

    @property
    def alert_type(self):
        if self.mode in (self.FARMER, self.FARMERS):
            return 'individual'
        return 'broadcast'

    def describe(self):
        if self.mode in (self.DISTRICT, self.SECTOR):
            return f"{self.mode}={self.value}"
        if self.mode in (self.FARMER, self.FARMERS):
            return f"{self.mode}:{len(self.farmer_ids)}"
        return self.mode

    def validate(self):
        if self.mode not in self.MODES:
            raise ValidationError(f"Unknown audience: {self.mode}")

        if self.mode == self.FARMER and not self.farmer_ids:
            raise ValidationError('A farmer must be selected')

        if self.mode == self.FARMERS and not self.farmer_ids:
            raise ValidationError('At least one farmer ID is required')

        if self.mode == self.DISTRICT and not self.value:
            raise ValidationError('A district must be selected')

        if self.mode == self.SECTOR and not self.value:
            raise ValidationError('A sector must be selected')

        for farmer_id in self.farmer_ids:
            try:
                uuid.UUID(str(farmer_id))
            except ValueError:
                raise ValidationError(f"Invalid farmer ID: {farmer_id}")


def resolve_audience(selector):
    """Return the farmers to text for ``selector``, in send order."""
    selector.validate()

    farmers = UserDirectory.farmers().exclude(phone='')

    if selector.mode in (AudienceSelector.FARMER, AudienceSelector.FARMERS):
        farmers = farmers.filter(pk__in=[str(farmer_id) for farmer_id in selector.farmer_ids])
    elif selector.mode == AudienceSelector.DISTRICT:
        farmers = farmers.filter(district=selector.value)
    elif selector.mode == AudienceSelector.SECTOR:
        farmers = farmers.filter(sector=selector.value)

    return [farmer for farmer in farmers if farmer.phone.strip()]

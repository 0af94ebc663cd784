"""
Role Profiles

Each user role carries its own set of required fields. Instead of checking
field presence ad hoc wherever a user is created or read, a user is turned
into exactly one of the profile types below:

    FarmerProfile        district, sector
    VeterinarianProfile  specialty, license_number, location, rating
    AdminProfile         no extra fields

``build_profile`` raises ``MissingRoleFields`` when the role's required
fields are blank, so an invalid combination cannot be constructed.
"""
from dataclasses import dataclass
from decimal import Decimal
from typing import ClassVar, Optional, Tuple, Union


class MissingRoleFields(ValueError):
    """Raised when a user lacks the fields its role requires."""

    def __init__(self, role, fields):
        self.role = role
        self.fields = tuple(fields)
        super().__init__(
            f"Role '{role}' requires: {', '.join(self.fields)}"
        )


@dataclass(frozen=True)
class FarmerProfile:
    district: str
    sector: str

    role = 'farmer'
    required_fields: ClassVar[Tuple[str, ...]] = ('district', 'sector')


@dataclass(frozen=True)
class VeterinarianProfile:
    specialty: str
    license_number: str
    location: str
    rating: Optional[Decimal] = None

    role = 'veterinarian'
    required_fields: ClassVar[Tuple[str, ...]] = ('specialty', 'license_number', 'location')


@dataclass(frozen=True)
class AdminProfile:
    role = 'admin'
    required_fields: ClassVar[Tuple[str, ...]] = ()


RoleProfile = Union[FarmerProfile, VeterinarianProfile, AdminProfile]

PROFILE_TYPES = {
    FarmerProfile.role: FarmerProfile,
    VeterinarianProfile.role: VeterinarianProfile,
    AdminProfile.role: AdminProfile,
}


def required_fields_for(role):
    """Return the field names a role requires (empty for unknown roles)."""
    profile_type = PROFILE_TYPES.get(role)
    return profile_type.required_fields if profile_type else ()


def _blank(value):
    return value is None or (isinstance(value, str) and not value.strip())


def build_profile(role, **fields) -> RoleProfile:
    """
    Build the profile for ``role`` from keyword fields.

    Unknown keys are ignored so callers can pass a whole user payload.
    """
    profile_type = PROFILE_TYPES.get(role)
    if profile_type is None:
        raise ValueError(f"Unknown role: {role}")

    missing = [name for name in profile_type.required_fields if _blank(fields.get(name))]
    if missing:
        raise MissingRoleFields(role, missing)

    if profile_type is FarmerProfile:
        return FarmerProfile(district=fields['district'].strip(), sector=fields['sector'].strip())
    if profile_type is VeterinarianProfile:
        return VeterinarianProfile(
            specialty=fields['specialty'].strip(),
            license_number=fields['license_number'].strip(),
            location=fields['location'].strip(),
            rating=fields.get('rating'),
        )
    return AdminProfile()


def profile_for_user(user) -> RoleProfile:
    """Build the profile from a ``User`` instance."""
    return build_profile(
        user.role,
        district=user.district,
        sector=user.sector,
        specialty=user.specialty,
        license_number=user.license_number,
        location=user.location,
        rating=user.rating,
    )

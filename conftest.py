"""
Shared pytest fixtures.
"""
import datetime

import pytest
from django.contrib.auth import get_user_model
from django.core.cache import cache
from rest_framework.test import APIClient

from core.exceptions import UpstreamDeliveryError
from core.sms_service import SMSGateway, SMSResult

User = get_user_model()


class FakeSMSGateway(SMSGateway):
    """In-memory gateway; numbers in ``failing`` are rejected by the 'provider'."""

    name = 'fake'

    def __init__(self, failing=()):
        super().__init__(country_code='+250', throttle_seconds=0)
        self.failing = {self.normalize(phone) for phone in failing}
        self.sent = []

    def fail_for(self, phone):
        self.failing.add(self.normalize(phone))

    def _deliver(self, phone, message):
        self.sent.append((phone, message))
        if phone in self.failing:
            raise UpstreamDeliveryError('Invalid phone number', phone=phone)
        return SMSResult(success=True, phone=phone, status='Success', message_id=f'FAKE-{len(self.sent)}')


@pytest.fixture(autouse=True)
def clear_cache():
    """Clear cache before and after each test to prevent pollution."""
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def api_client():
    """API client for making requests."""
    return APIClient()


@pytest.fixture
def sms_gateway():
    return FakeSMSGateway()


@pytest.fixture
def make_farmer(db):
    """Factory for farmer accounts."""
    counter = {'n': 0}

    def _make(district='Gasabo', sector='Kimironko', phone=None, **extra):
        counter['n'] += 1
        n = counter['n']
        return User.objects.create_user(
            email=extra.pop('email', f'farmer{n}@example.rw'),
            password='testpass123',
            first_name=extra.pop('first_name', 'Farmer'),
            last_name=extra.pop('last_name', str(n)),
            role=User.UserRole.FARMER,
            phone=f'07880000{n:02d}' if phone is None else phone,
            district=district,
            sector=sector,
            **extra
        )

    return _make


@pytest.fixture
def farmer(make_farmer):
    return make_farmer(
        email='jean@example.rw', first_name='Jean', last_name='Uwimana', phone='0788123456'
    )


@pytest.fixture
def other_farmer(make_farmer):
    return make_farmer(
        email='alice@example.rw', first_name='Alice', last_name='Mukamana',
        district='Kicukiro', sector='Niboye', phone='0788654321'
    )


@pytest.fixture
def vet(db):
    return User.objects.create_user(
        email='dr.kamali@example.rw',
        password='testpass123',
        first_name='Eric',
        last_name='Kamali',
        role=User.UserRole.VETERINARIAN,
        phone='+250722111222',
        specialty='Large Animals',
        license_number='RVC-0001',
        location='Gasabo, Kigali',
        rating='4.50',
    )


@pytest.fixture
def other_vet(db):
    return User.objects.create_user(
        email='dr.uwase@example.rw',
        password='testpass123',
        first_name='Grace',
        last_name='Uwase',
        role=User.UserRole.VETERINARIAN,
        phone='0733222333',
        specialty='Poultry',
        license_number='RVC-0002',
        location='Musanze',
        rating='4.90',
    )


@pytest.fixture
def admin_user(db):
    return User.objects.create_user(
        email='admin@vetconnect.rw',
        password='testpass123',
        first_name='System',
        last_name='Administrator',
        role=User.UserRole.ADMIN,
        is_staff=True,
    )


@pytest.fixture
def livestock(farmer):
    from livestock.models import Livestock
    return Livestock.objects.create(
        farmer=farmer, name='Bella', type=Livestock.LivestockType.CATTLE, breed='Ankole'
    )


@pytest.fixture
def other_livestock(other_farmer):
    from livestock.models import Livestock
    return Livestock.objects.create(
        farmer=other_farmer, name='Kaki', type=Livestock.LivestockType.GOAT
    )


@pytest.fixture
def appointment_date():
    return datetime.date(2026, 11, 3)


@pytest.fixture
def appointment(farmer, vet, livestock, appointment_date):
    """Pending appointment booked by ``farmer`` with ``vet``."""
    from appointments.services import AppointmentLifecycleService
    return AppointmentLifecycleService().create(
        farmer=farmer,
        livestock_id=livestock.id,
        vet_id=vet.id,
        date=appointment_date,
        time='09:00',
        reason='vaccination',
        notes='Due for FMD vaccine',
    )

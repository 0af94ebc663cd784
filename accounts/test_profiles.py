"""
Tests for role profiles, registration, login and the veterinarian directory.
"""
import pytest
from django.contrib.auth import get_user_model
from django.core.exceptions import ValidationError as DjangoValidationError
from rest_framework import status

from accounts.profiles import (
    AdminProfile,
    FarmerProfile,
    MissingRoleFields,
    VeterinarianProfile,
    build_profile,
)

User = get_user_model()


class TestBuildProfile:

    def test_farmer(self):
        profile = build_profile('farmer', district='Gasabo', sector='Kimironko', specialty='ignored')
        assert profile == FarmerProfile(district='Gasabo', sector='Kimironko')

    def test_farmer_missing_sector(self):
        with pytest.raises(MissingRoleFields) as excinfo:
            build_profile('farmer', district='Gasabo', sector='  ')
        assert excinfo.value.fields == ('sector',)

    def test_veterinarian_missing_license(self):
        with pytest.raises(MissingRoleFields) as excinfo:
            build_profile('veterinarian', specialty='Poultry', location='Musanze')
        assert excinfo.value.fields == ('license_number',)

    def test_veterinarian(self):
        profile = build_profile(
            'veterinarian', specialty='Poultry', license_number='RVC-9', location='Musanze'
        )
        assert isinstance(profile, VeterinarianProfile)
        assert profile.license_number == 'RVC-9'

    def test_admin_needs_nothing(self):
        assert build_profile('admin') == AdminProfile()

    def test_unknown_role(self):
        with pytest.raises(ValueError):
            build_profile('auditor')


@pytest.mark.django_db
class TestUserRoleFields:

    def test_create_user_rejects_farmer_without_location(self):
        with pytest.raises(MissingRoleFields):
            User.objects.create_user(email='x@example.rw', password='pw', role='farmer')
        assert not User.objects.filter(email='x@example.rw').exists()

    def test_clean_reports_missing_fields(self, vet):
        vet.license_number = ''
        with pytest.raises(DjangoValidationError) as excinfo:
            vet.clean()
        assert 'license_number' in excinfo.value.message_dict

    def test_profile_property(self, farmer):
        assert farmer.profile == FarmerProfile(district='Gasabo', sector='Kimironko')

    def test_username_defaults_to_email(self, farmer):
        assert farmer.username == farmer.email


@pytest.mark.django_db
class TestRegistration:

    URL = '/api/auth/register/'

    def test_farmer_registers(self, api_client):
        response = api_client.post(self.URL, {
            'name': 'Jean Bosco Niyonzima',
            'email': 'jb@example.rw',
            'password': 'Str0ng-pass-123',
            'phone': '0788111222',
            'role': 'farmer',
            'district': 'Gasabo',
            'sector': 'Remera',
        }, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['success'] is True
        assert response.data['data']['user']['name'] == 'Jean Bosco Niyonzima'
        assert response.data['data']['tokens']['access']

        user = User.objects.get(email='jb@example.rw')
        assert user.first_name == 'Jean'
        assert user.last_name == 'Bosco Niyonzima'

    def test_veterinarian_requires_license(self, api_client):
        response = api_client.post(self.URL, {
            'name': 'Dr Who',
            'email': 'drwho@example.rw',
            'password': 'Str0ng-pass-123',
            'role': 'veterinarian',
            'specialty': 'Poultry',
            'location': 'Huye',
        }, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['success'] is False
        assert 'licenseNumber' in response.data['errors']

    def test_admin_role_cannot_self_register(self, api_client):
        response = api_client.post(self.URL, {
            'name': 'Sneaky',
            'email': 'sneaky@example.rw',
            'password': 'Str0ng-pass-123',
            'role': 'admin',
        }, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'role' in response.data['errors']

    def test_duplicate_email(self, api_client, farmer):
        response = api_client.post(self.URL, {
            'name': 'Copy Cat',
            'email': farmer.email.upper(),
            'password': 'Str0ng-pass-123',
            'district': 'Gasabo',
            'sector': 'Remera',
        }, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'email' in response.data['errors']


@pytest.mark.django_db
class TestLogin:

    URL = '/api/auth/login/'

    def test_login_returns_tokens(self, api_client, farmer):
        response = api_client.post(
            self.URL, {'email': farmer.email, 'password': 'testpass123'}, format='json'
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.data['success'] is True
        assert response.data['data']['tokens']['access']
        assert response.data['data']['user']['role'] == 'farmer'

    def test_bearer_token_authenticates(self, api_client, farmer):
        login = api_client.post(
            self.URL, {'email': farmer.email, 'password': 'testpass123'}, format='json'
        )
        access = login.data['data']['tokens']['access']

        api_client.credentials(HTTP_AUTHORIZATION=f'Bearer {access}')
        response = api_client.get('/api/auth/profile/')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['data']['email'] == farmer.email

    def test_wrong_password(self, api_client, farmer):
        response = api_client.post(
            self.URL, {'email': farmer.email, 'password': 'nope'}, format='json'
        )

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.data['success'] is False

    def test_invalid_token_is_rejected(self, api_client):
        api_client.credentials(HTTP_AUTHORIZATION='Bearer not-a-token')
        response = api_client.get('/api/appointments/')

        assert response.status_code == status.HTTP_401_UNAUTHORIZED


@pytest.mark.django_db
class TestProfileUpdate:

    def test_farmer_cannot_blank_district(self, api_client, farmer):
        api_client.force_authenticate(user=farmer)
        response = api_client.patch('/api/auth/profile/', {'district': ''}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        farmer.refresh_from_db()
        assert farmer.district == 'Gasabo'

    def test_phone_update(self, api_client, farmer):
        api_client.force_authenticate(user=farmer)
        response = api_client.patch('/api/auth/profile/', {'phone': '0788999000'}, format='json')

        assert response.status_code == status.HTTP_200_OK
        farmer.refresh_from_db()
        assert farmer.phone == '0788999000'


@pytest.mark.django_db
class TestVeterinarianDirectory:

    URL = '/api/veterinarians/'

    def test_ordered_by_rating(self, api_client, farmer, vet, other_vet):
        api_client.force_authenticate(user=farmer)
        response = api_client.get(self.URL)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['count'] == 2
        assert [v['id'] for v in response.data['data']] == [str(other_vet.id), str(vet.id)]

    def test_district_matches_location(self, api_client, farmer, vet, other_vet):
        api_client.force_authenticate(user=farmer)
        response = api_client.get(self.URL, {'district': 'gasabo'})

        assert [v['id'] for v in response.data['data']] == [str(vet.id)]

    def test_search(self, api_client, farmer, vet, other_vet):
        api_client.force_authenticate(user=farmer)
        response = api_client.get(self.URL, {'search': 'poultry'})

        assert [v['id'] for v in response.data['data']] == [str(other_vet.id)]

    def test_inactive_vets_hidden(self, api_client, farmer, vet):
        vet.is_active = False
        vet.save()
        api_client.force_authenticate(user=farmer)

        response = api_client.get(self.URL)

        assert response.data['count'] == 0

    def test_requires_authentication(self, api_client):
        response = api_client.get(self.URL)
        assert response.status_code == status.HTTP_401_UNAUTHORIZED


@pytest.mark.django_db
class TestChangePassword:

    URL = '/api/auth/change-password/'

    def test_changes_password(self, api_client, vet):
        api_client.force_authenticate(user=vet)

        response = api_client.post(self.URL, {
            'currentPassword': 'testpass123',
            'newPassword': 'Kigali-rain-2026',
        }, format='json')

        assert response.status_code == status.HTTP_200_OK
        vet.refresh_from_db()
        assert vet.check_password('Kigali-rain-2026')

    def test_wrong_current_password(self, api_client, vet):
        api_client.force_authenticate(user=vet)

        response = api_client.post(self.URL, {
            'currentPassword': 'guess',
            'newPassword': 'Kigali-rain-2026',
        }, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'currentPassword' in response.data['errors']

    def test_weak_new_password(self, api_client, vet):
        api_client.force_authenticate(user=vet)

        response = api_client.post(self.URL, {
            'currentPassword': 'testpass123',
            'newPassword': '123',
        }, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'newPassword' in response.data['errors']


@pytest.mark.django_db
class TestVeterinarianDetail:

    URL = '/api/veterinarians/'

    def test_detail(self, api_client, farmer, vet):
        api_client.force_authenticate(user=farmer)

        response = api_client.get(f'{self.URL}{vet.id}/')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['data']['licenseNumber'] == 'RVC-0001'

    def test_detail_of_farmer_is_404(self, api_client, farmer):
        api_client.force_authenticate(user=farmer)

        response = api_client.get(f'{self.URL}{farmer.id}/')

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_facets(self, api_client, farmer, vet, other_vet):
        api_client.force_authenticate(user=farmer)

        response = api_client.get(f'{self.URL}facets/')

        assert response.data['data'] == {
            'specialties': ['Large Animals', 'Poultry'],
            'locations': ['Gasabo, Kigali', 'Musanze'],
        }

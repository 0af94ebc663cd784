"""
Tests for the admin user listings and farmer deactivation.
"""
import pytest
from rest_framework import status

from alerts.audience import AudienceSelector, resolve_audience

pytestmark = pytest.mark.django_db


@pytest.fixture
def admin_client(api_client, admin_user):
    api_client.force_authenticate(user=admin_user)
    return api_client


class TestAdminFarmerList:

    def test_lists_active_farmers_newest_first(self, admin_client, farmer, other_farmer, vet):
        response = admin_client.get('/api/admin/farmers/')

        assert response.status_code == status.HTTP_200_OK
        assert [f['id'] for f in response.data['data']] == [str(other_farmer.id), str(farmer.id)]

    def test_district_filter(self, admin_client, farmer, other_farmer):
        response = admin_client.get('/api/admin/farmers/', {'district': 'Kicukiro'})

        assert response.data['count'] == 1
        assert response.data['data'][0]['email'] == other_farmer.email

    def test_vet_forbidden(self, api_client, vet):
        api_client.force_authenticate(user=vet)
        response = api_client.get('/api/admin/farmers/')
        assert response.status_code == status.HTTP_403_FORBIDDEN


class TestFarmerDeactivation:

    def test_deactivated_farmer_leaves_audience(self, admin_client, farmer):
        response = admin_client.delete(f'/api/admin/farmers/{farmer.id}/')

        assert response.status_code == status.HTTP_200_OK
        farmer.refresh_from_db()
        assert farmer.is_active is False
        assert resolve_audience(AudienceSelector.all()) == []

    def test_vet_id_is_not_a_farmer(self, admin_client, vet):
        response = admin_client.delete(f'/api/admin/farmers/{vet.id}/')

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.data['message'] == 'Farmer not found'
        vet.refresh_from_db()
        assert vet.is_active is True


class TestAdminVeterinarianList:

    def test_lists_vets(self, admin_client, vet, other_vet, farmer):
        response = admin_client.get('/api/admin/veterinarians/')

        assert response.data['count'] == 2
        assert {v['licenseNumber'] for v in response.data['data']} == {'RVC-0001', 'RVC-0002'}

"""
End-to-end appointment flow over the HTTP API.

A farmer registers an animal's visit with a veterinarian found through the
directory; the vet confirms and completes it; both sides then see the same
record. Authentication goes through the real login endpoint.
"""
import pytest
from rest_framework import status
from rest_framework.test import APIClient

from livestock.models import Livestock

pytestmark = pytest.mark.django_db


def login(email, password='testpass123'):
    client = APIClient()
    response = client.post('/api/auth/login/', {'email': email, 'password': password}, format='json')
    assert response.status_code == status.HTTP_200_OK
    client.credentials(HTTP_AUTHORIZATION=f"Bearer {response.data['data']['tokens']['access']}")
    return client


class TestAppointmentBookingFlow:

    def test_book_confirm_complete(self, farmer, vet, other_vet):
        goat = Livestock.objects.create(farmer=farmer, name='Mpanda', type=Livestock.LivestockType.GOAT)
        farmer_client = login(farmer.email)
        vet_client = login(vet.email)

        directory = farmer_client.get('/api/veterinarians/', {'district': 'Gasabo'})
        assert [v['id'] for v in directory.data['data']] == [str(vet.id)]

        booked = farmer_client.post('/api/appointments/', {
            'livestockId': str(goat.id),
            'vetId': directory.data['data'][0]['id'],
            'date': '2026-11-10',
            'time': 'Morning',
            'reason': 'illness',
            'notes': 'Coughing since Sunday',
        }, format='json')
        assert booked.status_code == status.HTTP_201_CREATED
        appointment_id = booked.data['data']['id']

        # Another vet cannot act on it
        intruder = login(other_vet.email)
        response = intruder.put(f'/api/appointments/{appointment_id}/confirm/')
        assert response.status_code == status.HTTP_403_FORBIDDEN

        response = vet_client.put(f'/api/appointments/{appointment_id}/confirm/')
        assert response.data['data']['status'] == 'confirmed'

        response = vet_client.put(f'/api/appointments/{appointment_id}/complete/', {
            'diagnosis': 'Respiratory infection',
            'treatment': 'Antibiotics for five days',
            'medications': ['Oxytetracycline'],
        }, format='json')
        assert response.status_code == status.HTTP_200_OK

        seen_by_farmer = farmer_client.get(f'/api/appointments/{appointment_id}/')
        assert seen_by_farmer.data['data']['status'] == 'completed'
        assert seen_by_farmer.data['data']['diagnosis'] == 'Respiratory infection'
        assert seen_by_farmer.data['data']['livestockName'] == 'Mpanda'

        # Completed visits stay completed
        response = farmer_client.put(
            f'/api/appointments/{appointment_id}/', {'status': 'cancelled'}, format='json'
        )
        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_farmer_cancels_pending_visit(self, farmer, vet, livestock):
        farmer_client = login(farmer.email)

        booked = farmer_client.post('/api/appointments/', {
            'livestockId': str(livestock.id),
            'vetId': str(vet.id),
            'date': '2026-11-12',
            'time': '11:30',
            'reason': 'pregnancy',
        }, format='json')
        appointment_id = booked.data['data']['id']

        response = farmer_client.put(
            f'/api/appointments/{appointment_id}/', {'status': 'cancelled'}, format='json'
        )
        assert response.data['data']['status'] == 'cancelled'

        vet_client = login(vet.email)
        response = vet_client.put(f'/api/appointments/{appointment_id}/confirm/')
        assert response.status_code == status.HTTP_400_BAD_REQUEST

import pytest
from django.urls import reverse
from rest_framework import status

from apps.reservations.services import create_reservation, confirm_reservation


def _reserve(parcels, email='fan@example.com'):
    return create_reservation(parcels=parcels, buyer_name='Fan', buyer_email=email)


@pytest.mark.django_db
class TestParcelStatus:
    """Tests for GET /api/parcels/status/"""

    def test_empty_when_nothing_reserved(self, api_client):
        response = api_client.get(reverse('parcels:status'))

        assert response.status_code == status.HTTP_200_OK
        assert response.data == {'sold': [], 'reserved': []}

    def test_lists_sold_and_reserved(self, api_client):
        paid = _reserve(['kickoff'])
        confirm_reservation(paid.id)
        _reserve(['field-0-0', 'field-0-1'], email='other@example.com')

        response = api_client.get(reverse('parcels:status'))

        assert response.data['sold'] == ['kickoff']
        assert response.data['reserved'] == ['field-0-0', 'field-0-1']

    def test_not_cached(self, api_client):
        response = api_client.get(reverse('parcels:status'))
        assert 'no-store' in response['Cache-Control']


@pytest.mark.django_db
class TestParcelSummary:
    """Tests for GET /api/parcels/summary/"""

    def test_all_available_initially(self, api_client):
        response = api_client.get(reverse('parcels:summary'))

        assert response.status_code == status.HTTP_200_OK
        assert response.data == {
            'available': {'goal': 10, 'penalty': 2, 'kickoff': 1, 'field': 3000}
        }
        assert 'no-store' in response['Cache-Control']

    def test_counts_reserved_and_sold(self, api_client):
        paid = _reserve(['goal-left-0', 'goal-left-1'])
        confirm_reservation(paid.id)
        _reserve(['field-5-5'], email='other@example.com')

        response = api_client.get(reverse('parcels:summary'))

        assert response.data['available']['goal'] == 8
        assert response.data['available']['field'] == 2999
        assert response.data['available']['kickoff'] == 1


@pytest.mark.django_db
class TestParcelCatalog:
    """Tests for GET /api/parcels/catalog/"""

    def test_catalog(self, api_client):
        response = api_client.get(reverse('parcels:catalog'))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['gridCols'] == 60
        assert response.data['gridRows'] == 50

        types = {entry['type']: entry for entry in response.data['types']}
        assert types['kickoff']['price'] == 500
        assert types['field']['total'] == 3000
        assert types['goal']['name'] == 'Tor-Parzelle'

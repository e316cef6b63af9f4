from datetime import timedelta

import pytest
from django.contrib.auth import get_user_model
from django.utils import timezone
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken

from apps.reservations.services import create_reservation, confirm_reservation


ADMIN_TOKEN = 'test-admin-token'


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def token_client():
    """Return API client using the shared admin token."""
    client = APIClient()
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {ADMIN_TOKEN}')
    return client


@pytest.fixture
def staff_user(db):
    """Create and return a staff account for the admin dashboard."""
    return get_user_model().objects.create_user(
        username='kassenwart',
        email='kasse@sc-west-koeln.de',
        password='TestPass123!',
        is_staff=True,
    )


@pytest.fixture
def regular_user(db):
    """Create and return a user without staff rights."""
    return get_user_model().objects.create_user(
        username='mitglied',
        email='mitglied@example.com',
        password='TestPass123!',
    )


@pytest.fixture
def staff_client(staff_user):
    """Return API client authenticated as staff via JWT."""
    client = APIClient()
    refresh = RefreshToken.for_user(staff_user)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def regular_client(regular_user):
    """Return API client authenticated via JWT without staff rights."""
    client = APIClient()
    refresh = RefreshToken.for_user(regular_user)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def reservation_data():
    """Valid payload for POST /api/reserve/."""
    return {
        'parcels': ['field-10-10', 'field-10-11'],
        'buyerName': 'Anna Becker',
        'buyerEmail': 'anna@example.com',
        'donorName': 'Familie Becker',
        'anonymous': False,
        'receiptRequested': False,
    }


@pytest.fixture
def pending_reservation(db):
    """A fresh reservation awaiting payment."""
    return create_reservation(
        parcels=['field-0-0', 'field-0-1'],
        buyer_name='Max Mustermann',
        buyer_email='max@example.com',
        donor_name='Max',
    )


@pytest.fixture
def paid_reservation(db):
    """A reservation whose transfer has been confirmed."""
    reservation = create_reservation(
        parcels=['kickoff'],
        buyer_name='Erika Musterfrau',
        buyer_email='erika@example.com',
        receipt_requested=True,
        buyer_address='Venloer Str. 1',
        buyer_city='Köln',
        buyer_zip='50825',
    )
    return confirm_reservation(reservation.id)


@pytest.fixture
def overdue_reservation(db):
    """A pending reservation past its payment deadline, not yet swept."""
    return create_reservation(
        parcels=['goal-left-0'],
        buyer_name='Spät Zahler',
        buyer_email='spaet@example.com',
        now=timezone.now() - timedelta(hours=25),
    )

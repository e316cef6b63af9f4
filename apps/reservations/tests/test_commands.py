from io import StringIO

import pytest
from django.core.management import call_command

from apps.reservations.models import ReservationStatus


@pytest.mark.django_db
class TestExpireReservationsCommand:
    """Tests for the expire_reservations management command."""

    def test_expires_overdue(self, overdue_reservation):
        out = StringIO()

        call_command('expire_reservations', stdout=out)

        assert 'Expired 1 reservation(s).' in out.getvalue()
        overdue_reservation.refresh_from_db()
        assert overdue_reservation.status == ReservationStatus.EXPIRED

    def test_dry_run_changes_nothing(self, overdue_reservation):
        out = StringIO()

        call_command('expire_reservations', '--dry-run', stdout=out)

        output = out.getvalue()
        assert '1 reservation(s) would be expired' in output
        assert overdue_reservation.id in output
        overdue_reservation.refresh_from_db()
        assert overdue_reservation.status == ReservationStatus.PENDING

    def test_nothing_to_expire(self, pending_reservation):
        out = StringIO()

        call_command('expire_reservations', stdout=out)

        assert 'Expired 0 reservation(s).' in out.getvalue()

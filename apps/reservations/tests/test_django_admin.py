import pytest
from django.core import mail
from django.urls import reverse

from apps.reservations.models import ReservationStatus


@pytest.mark.django_db
class TestReservationAdminActions:
    """Bulk actions in the Django admin go through the reservation services."""

    def _run_action(self, admin_client, action, *reservations):
        return admin_client.post(
            reverse('admin:reservations_reservation_changelist'),
            {
                'action': action,
                '_selected_action': [reservation.id for reservation in reservations],
            },
            follow=True,
        )

    def test_changelist_renders(self, admin_client, pending_reservation):
        response = admin_client.get(reverse('admin:reservations_reservation_changelist'))

        assert response.status_code == 200
        assert pending_reservation.id in response.content.decode()

    def test_confirm_action(self, admin_client, pending_reservation):
        self._run_action(admin_client, 'confirm_selected', pending_reservation)

        pending_reservation.refresh_from_db()
        assert pending_reservation.status == ReservationStatus.PAID
        assert len(mail.outbox) == 1

    def test_cancel_action_skips_paid(self, admin_client, pending_reservation, paid_reservation):
        response = self._run_action(admin_client, 'cancel_selected', pending_reservation, paid_reservation)

        pending_reservation.refresh_from_db()
        paid_reservation.refresh_from_db()
        assert pending_reservation.status == ReservationStatus.CANCELLED
        assert paid_reservation.status == ReservationStatus.PAID
        assert 'kann nicht storniert werden' in response.content.decode()

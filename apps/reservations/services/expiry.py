"""Time-based expiry of unpaid reservations."""

import logging

from django.db import transaction
from django.utils import timezone

from apps.reservations.models import Reservation, ReservationItem, ReservationStatus

logger = logging.getLogger(__name__)


def expire_reservations(now=None) -> int:
    """
    Expire pending reservations whose payment window has passed.

    Expired reservations release their parcels (items are deactivated).
    The status update is guarded by ``status='pending'`` so a reservation
    confirmed by an admin between the lookup and the update stays paid.

    Args:
        now: Reference time, defaults to ``timezone.now()``.

    Returns:
        Number of reservations that were expired by this call.
    """
    now = now or timezone.now()

    with transaction.atomic():
        candidate_ids = list(
            Reservation.objects.filter(
                status=ReservationStatus.PENDING,
                expires_at__lt=now,
            ).values_list('id', flat=True)
        )
        if not candidate_ids:
            return 0

        expired_count = Reservation.objects.filter(
            id__in=candidate_ids,
            status=ReservationStatus.PENDING,
        ).update(status=ReservationStatus.EXPIRED, updated_at=now)

        ReservationItem.objects.filter(
            reservation_id__in=candidate_ids,
            reservation__status=ReservationStatus.EXPIRED,
            active=True,
        ).update(active=False)

    if expired_count:
        logger.info("Expired %s reservation(s)", expired_count)
    return expired_count

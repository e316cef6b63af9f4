"""Parcel availability derived from active reservation items."""

from functools import lru_cache
from typing import Iterable

from django.db.models import Count, Q
from django.utils import timezone

from apps.parcels.catalog import ParcelStatus, count_by_type, generate_all_parcels
from apps.reservations.models import ReservationItem, ReservationStatus
from .expiry import expire_reservations


@lru_cache(maxsize=1)
def _catalog_totals() -> dict[str, int]:
    return count_by_type(generate_all_parcels())


def get_sold_and_reserved_parcels() -> dict[str, list[str]]:
    """
    Return parcel IDs held by paid (``sold``) and pending (``reserved``) reservations.

    Runs the expiry sweep first so lapsed reservations do not block parcels.
    """
    expire_reservations()

    rows = ReservationItem.objects.filter(
        active=True,
        reservation__status__in=[ReservationStatus.PAID, ReservationStatus.PENDING],
    ).values_list('parcel_id', 'reservation__status').order_by('parcel_id')

    sold = []
    reserved = []
    for parcel_id, status in rows:
        if status == ReservationStatus.PAID:
            sold.append(parcel_id)
        else:
            reserved.append(parcel_id)

    return {'sold': sold, 'reserved': reserved}


def get_parcel_statuses() -> dict[str, str]:
    """Map of parcel ID to ``sold``/``reserved``; parcels not listed are available."""
    parcels = get_sold_and_reserved_parcels()
    statuses = {parcel_id: ParcelStatus.SOLD.value for parcel_id in parcels['sold']}

    for parcel_id in parcels['reserved']:
        statuses.setdefault(parcel_id, ParcelStatus.RESERVED.value)

    return statuses


def find_unavailable_parcels(parcel_ids: Iterable[str]) -> list[str]:
    """Subset of ``parcel_ids`` that currently has an active reservation item."""
    parcel_ids = list(parcel_ids)
    if not parcel_ids:
        return []

    return sorted(set(
        ReservationItem.objects.filter(
            parcel_id__in=parcel_ids,
            active=True,
        ).values_list('parcel_id', flat=True)
    ))


def are_parcels_available(parcel_ids: Iterable[str]) -> bool:
    return not find_unavailable_parcels(parcel_ids)


def get_parcel_summary(now=None) -> dict[str, dict[str, int]]:
    """
    Count still-available parcels per type.

    Only paid reservations and pending reservations inside their payment
    window count as taken. This read does not run the expiry sweep.

    Returns:
        ``{'available': {'goal': 10, 'penalty': 2, 'kickoff': 1, 'field': 3000}}``
    """
    now = now or timezone.now()
    totals = _catalog_totals()

    taken = ReservationItem.objects.filter(
        Q(reservation__status=ReservationStatus.PAID) |
        Q(reservation__status=ReservationStatus.PENDING, reservation__expires_at__gt=now),
        active=True,
    ).values('parcel__type').annotate(count=Count('id')).order_by()

    taken_by_type = {row['parcel__type']: row['count'] for row in taken}

    available = {
        parcel_type: max(0, total - taken_by_type.get(parcel_type, 0))
        for parcel_type, total in totals.items()
    }
    return {'available': available}

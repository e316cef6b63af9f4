"""
Reservation lifecycle service.

State machine::

    pending ──confirm──▶ paid
       │
       ├──cancel───────▶ cancelled
       └──expire───────▶ expired

Only ``pending`` reservations can move. Every transition is a conditional
``UPDATE ... WHERE status = 'pending'``, so concurrent admins (or an admin
racing the expiry sweep) cannot both apply a transition. Parcels are held by
active ``ReservationItem`` rows; leaving ``pending`` for anything but ``paid``
releases them.
"""

import logging
from collections import Counter
from datetime import date, timedelta
from typing import Optional

from django.conf import settings
from django.db import transaction, IntegrityError
from django.db.models import Q, QuerySet
from django.utils import timezone

from apps.parcels.catalog import get_parcel_by_id
from apps.parcels.models import Parcel
from apps.reservations.models import (
    Reservation,
    ReservationItem,
    ReservationStatus,
    STATUS_ORDER,
    generate_reservation_id,
)
from .availability import find_unavailable_parcels
from .expiry import expire_reservations
from .exceptions import (
    EmptySelectionError,
    DuplicateParcelError,
    UnknownParcelError,
    ReceiptNotAllowedError,
    ParcelNotAvailableError,
    ReservationNotFoundError,
    InvalidStatusTransitionError,
)

logger = logging.getLogger(__name__)

# Inserts tried before a reservation ID collision is given up on
ID_ATTEMPTS = 3


def _validate_selection(parcel_ids: list[str]) -> list[Parcel]:
    if not parcel_ids:
        raise EmptySelectionError()

    duplicates = sorted(pid for pid, count in Counter(parcel_ids).items() if count > 1)
    if duplicates:
        raise DuplicateParcelError(duplicates)

    unknown = [pid for pid in parcel_ids if get_parcel_by_id(pid) is None]
    if unknown:
        raise UnknownParcelError(unknown)

    parcels = list(Parcel.objects.filter(id__in=parcel_ids))
    if len(parcels) != len(parcel_ids):
        # Catalog entry exists in code but was never seeded
        found = {parcel.id for parcel in parcels}
        raise UnknownParcelError([pid for pid in parcel_ids if pid not in found])

    return parcels


def _new_reservation_id() -> str:
    reservation_id = generate_reservation_id()
    while Reservation.objects.filter(id=reservation_id).exists():
        reservation_id = generate_reservation_id()
    return reservation_id


def create_reservation(
    *,
    parcels: list[str],
    buyer_name: str,
    buyer_email: str,
    donor_name: str = '',
    anonymous: bool = False,
    receipt_requested: bool = False,
    buyer_address: Optional[str] = None,
    buyer_city: Optional[str] = None,
    buyer_zip: Optional[str] = None,
    now=None,
) -> Reservation:
    """
    Reserve parcels for a buyer until the bank transfer arrives.

    This operation:
    1. Validates the selection against the catalog
    2. Computes the total from stored parcel prices
    3. Validates the donation receipt request
    4. Sweeps expired reservations, then checks availability
    5. Inserts reservation and items atomically

    The availability check in step 4 is only a fast path. The partial unique
    index on active items is what rejects a parcel taken by a concurrent
    request between the check and the insert.

    Args:
        parcels: Parcel IDs to reserve
        buyer_name: Name of the paying person
        buyer_email: Where payment instructions are sent
        donor_name: Name to show as donor (ignored when anonymous)
        anonymous: Hide the donor name
        receipt_requested: Buyer wants a donation receipt
        buyer_address, buyer_city, buyer_zip: Postal address for the receipt
        now: Reference time (tests)

    Returns:
        Created Reservation instance (status pending)

    Raises:
        EmptySelectionError: No parcels selected
        DuplicateParcelError: Same parcel selected twice
        UnknownParcelError: Parcel ID not in the catalog
        ReceiptNotAllowedError: Receipt below minimum amount or address missing
        ParcelNotAvailableError: Parcel already reserved or sold
    """
    now = now or timezone.now()
    parcel_ids = list(parcels)
    parcel_rows = _validate_selection(parcel_ids)
    total_cents = sum(parcel.price_cents for parcel in parcel_rows)

    if receipt_requested:
        min_amount = settings.RECEIPT_MIN_AMOUNT
        if total_cents < int(min_amount * 100):
            raise ReceiptNotAllowedError(
                f"Eine Spendenquittung ist erst ab {min_amount} EUR möglich"
            )
        if not (buyer_address and buyer_city and buyer_zip):
            raise ReceiptNotAllowedError(
                'Für die Spendenquittung werden Adresse, PLZ und Stadt benötigt'
            )
    else:
        # Postal address is only stored for receipts
        buyer_address = buyer_city = buyer_zip = None

    if anonymous:
        donor_name = ''

    expire_reservations(now=now)

    unavailable = find_unavailable_parcels(parcel_ids)
    if unavailable:
        logger.info("Reservation rejected, parcels taken: %s", ', '.join(unavailable))
        raise ParcelNotAvailableError(unavailable)

    for attempt in range(ID_ATTEMPTS):
        try:
            reservation = _insert_reservation(
                parcel_ids,
                buyer_name=buyer_name,
                buyer_email=buyer_email,
                donor_name=donor_name,
                anonymous=anonymous,
                receipt_requested=receipt_requested,
                buyer_address=buyer_address,
                buyer_city=buyer_city,
                buyer_zip=buyer_zip,
                total_cents=total_cents,
                now=now,
            )
            break
        except IntegrityError:
            unavailable = find_unavailable_parcels(parcel_ids)
            if unavailable:
                # Lost the race for at least one parcel
                logger.info("Reservation rejected by unique constraint for parcels %s", ', '.join(unavailable))
                raise ParcelNotAvailableError(unavailable)
            if attempt == ID_ATTEMPTS - 1:
                raise
            logger.warning("Reservation ID collision, retrying")

    logger.info(
        "Reservation %s created: %s parcel(s), %s EUR",
        reservation.id, len(parcel_ids), reservation.total_amount,
    )
    return reservation


def _insert_reservation(parcel_ids, *, buyer_name, buyer_email, donor_name, anonymous,
                        receipt_requested, buyer_address, buyer_city, buyer_zip,
                        total_cents, now) -> Reservation:
    with transaction.atomic():
        reservation = Reservation.objects.create(
            id=_new_reservation_id(),
            buyer_name=buyer_name.strip(),
            buyer_email=buyer_email.strip(),
            donor_name=(donor_name or '').strip(),
            anonymous=anonymous,
            receipt_requested=receipt_requested,
            buyer_address=buyer_address,
            buyer_city=buyer_city,
            buyer_zip=buyer_zip,
            total_cents=total_cents,
            created_at=now,
            expires_at=now + timedelta(hours=settings.RESERVATION_TTL_HOURS),
        )
        ReservationItem.objects.bulk_create([
            ReservationItem(reservation=reservation, parcel_id=parcel_id, active=True)
            for parcel_id in parcel_ids
        ])
    return reservation


def get_reservation(reservation_id: str) -> Reservation:
    """
    Fetch a reservation with its items.

    Raises:
        ReservationNotFoundError: If no reservation has this ID
    """
    try:
        return Reservation.objects.prefetch_related('items').get(id=reservation_id)
    except Reservation.DoesNotExist:
        raise ReservationNotFoundError(reservation_id)


def get_all_reservations() -> list[Reservation]:
    """
    All reservations for the admin dashboard.

    Sweeps expired reservations first. Ordered pending, paid, expired,
    cancelled; newest first within each status.
    """
    expire_reservations()

    reservations = Reservation.objects.prefetch_related('items').order_by('-created_at')
    return sorted(reservations, key=lambda r: STATUS_ORDER[r.status])


def get_reservations_filtered(
    *,
    status: Optional[str] = None,
    q: Optional[str] = None,
    date_from: Optional[date] = None,
    date_to: Optional[date] = None,
) -> QuerySet:
    """
    Reservations matching admin export filters, newest first.

    Args:
        status: One of ReservationStatus values
        q: Case-insensitive match on ID, buyer name, buyer email or donor name
        date_from: First creation day (inclusive, local time)
        date_to: Last creation day (inclusive, local time)
    """
    queryset = Reservation.objects.prefetch_related('items').order_by('-created_at')

    if status:
        queryset = queryset.filter(status=status)

    if q:
        q = q.strip()
        queryset = queryset.filter(
            Q(id__icontains=q) |
            Q(buyer_name__icontains=q) |
            Q(buyer_email__icontains=q) |
            Q(donor_name__icontains=q)
        )

    if date_from:
        queryset = queryset.filter(created_at__date__gte=date_from)
    if date_to:
        queryset = queryset.filter(created_at__date__lte=date_to)

    return queryset


def _raise_for_failed_transition(reservation_id: str, action: str):
    current_status = (
        Reservation.objects.filter(id=reservation_id)
        .values_list('status', flat=True)
        .first()
    )
    if current_status is None:
        raise ReservationNotFoundError(reservation_id)
    raise InvalidStatusTransitionError(reservation_id, current_status, action)


def confirm_reservation(reservation_id: str, now=None) -> Reservation:
    """
    Mark a pending reservation as paid.

    Raises:
        ReservationNotFoundError: Unknown reservation
        InvalidStatusTransitionError: Reservation is not pending
    """
    now = now or timezone.now()

    with transaction.atomic():
        updated = Reservation.objects.filter(
            id=reservation_id,
            status=ReservationStatus.PENDING,
        ).update(status=ReservationStatus.PAID, paid_at=now, updated_at=now)

        if not updated:
            _raise_for_failed_transition(reservation_id, 'confirm')

    logger.info("Reservation %s confirmed as paid", reservation_id)
    return get_reservation(reservation_id)


def cancel_reservation(reservation_id: str, now=None) -> Reservation:
    """
    Cancel a pending reservation and release its parcels.

    Raises:
        ReservationNotFoundError: Unknown reservation
        InvalidStatusTransitionError: Reservation is not pending
    """
    now = now or timezone.now()

    with transaction.atomic():
        updated = Reservation.objects.filter(
            id=reservation_id,
            status=ReservationStatus.PENDING,
        ).update(status=ReservationStatus.CANCELLED, cancelled_at=now, updated_at=now)

        if not updated:
            _raise_for_failed_transition(reservation_id, 'cancel')

        ReservationItem.objects.filter(
            reservation_id=reservation_id,
            active=True,
        ).update(active=False)

    logger.info("Reservation %s cancelled", reservation_id)
    return get_reservation(reservation_id)

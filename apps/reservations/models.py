from django.conf import settings
from django.db import models
from django.db.models import Q
from django.utils import timezone
from datetime import timedelta
from decimal import Decimal
import secrets
import string
import time


class ReservationStatus(models.TextChoices):
    PENDING = 'pending', 'Offen'
    PAID = 'paid', 'Bezahlt'
    EXPIRED = 'expired', 'Abgelaufen'
    CANCELLED = 'cancelled', 'Storniert'


# Admin listing order: open reservations first
STATUS_ORDER = {
    ReservationStatus.PENDING: 0,
    ReservationStatus.PAID: 1,
    ReservationStatus.EXPIRED: 2,
    ReservationStatus.CANCELLED: 3,
}

_BASE36 = string.digits + string.ascii_uppercase


def _to_base36(number):
    digits = []
    while number:
        number, remainder = divmod(number, 36)
        digits.append(_BASE36[remainder])
    return ''.join(reversed(digits)) or '0'


def generate_reservation_id():
    """
    Generate a short reservation number for bank transfer references.

    Format: RES-<4 chars of the millisecond clock in base36><4 random chars>
    """
    time_part = _to_base36(int(time.time() * 1000))[-4:].rjust(4, '0')
    random_part = ''.join(secrets.choice(_BASE36) for _ in range(4))
    return f"RES-{time_part}{random_part}"


def default_expires_at():
    return timezone.now() + timedelta(hours=settings.RESERVATION_TTL_HOURS)


class Reservation(models.Model):
    """A visitor's hold on one or more parcels until the bank transfer arrives."""

    id = models.CharField(primary_key=True, max_length=16, default=generate_reservation_id, editable=False)

    # Buyer (the person who pays)
    buyer_name = models.CharField(max_length=200)
    buyer_email = models.EmailField()

    # Donor display (may differ from the buyer, e.g. gifts)
    donor_name = models.CharField(max_length=200, blank=True)
    anonymous = models.BooleanField(default=False)

    # Donation receipt (Spendenquittung) needs a postal address
    receipt_requested = models.BooleanField(default=False)
    buyer_address = models.CharField(max_length=255, null=True, blank=True)
    buyer_city = models.CharField(max_length=120, null=True, blank=True)
    buyer_zip = models.CharField(max_length=16, null=True, blank=True)

    total_cents = models.PositiveIntegerField()

    status = models.CharField(
        max_length=16,
        choices=ReservationStatus.choices,
        default=ReservationStatus.PENDING,
    )

    # Timestamps
    created_at = models.DateTimeField(default=timezone.now, editable=False)
    expires_at = models.DateTimeField(default=default_expires_at)
    paid_at = models.DateTimeField(null=True, blank=True)
    cancelled_at = models.DateTimeField(null=True, blank=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'reservations'
        indexes = [
            models.Index(fields=['status', 'expires_at'], name='reservation_status_exp_idx'),
            models.Index(fields=['created_at'], name='reservation_created_idx'),
            models.Index(fields=['buyer_email'], name='reservation_email_idx'),
        ]
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.id} - {self.buyer_name} ({self.total_amount} EUR, {self.status})"

    @property
    def total_amount(self):
        return Decimal(self.total_cents) / 100

    @property
    def parcel_ids(self):
        """IDs of all parcels on this reservation, active or released."""
        return [item.parcel_id for item in self.items.all()]

    @property
    def is_pending(self):
        return self.status == ReservationStatus.PENDING

    @property
    def display_name(self):
        """Name shown on the donor wall."""
        if self.anonymous:
            return None
        return self.donor_name or None

    def is_past_expiry(self, now=None):
        return self.expires_at < (now or timezone.now())


class ReservationItem(models.Model):
    """
    One parcel on a reservation.

    ``active`` is true while the reservation is pending or paid. The partial
    unique constraint below is what prevents double booking: a parcel can only
    have a single active item at a time, no matter how many requests race.
    """

    reservation = models.ForeignKey(
        Reservation,
        on_delete=models.CASCADE,
        related_name='items'
    )
    parcel = models.ForeignKey(
        'parcels.Parcel',
        on_delete=models.PROTECT,
        related_name='reservation_items'
    )
    active = models.BooleanField(default=True)

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'reservation_items'
        constraints = [
            models.UniqueConstraint(
                fields=['parcel'],
                condition=Q(active=True),
                name='unique_active_parcel',
            ),
        ]
        indexes = [
            models.Index(fields=['reservation', 'active'], name='item_reservation_active_idx'),
        ]
        ordering = ['id']

    def __str__(self):
        state = 'active' if self.active else 'released'
        return f"{self.parcel_id} on {self.reservation_id} ({state})"

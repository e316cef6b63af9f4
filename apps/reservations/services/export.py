"""CSV export of reservations for the treasurer."""

import csv
import io
from datetime import timezone as dt_timezone


CSV_HEADER = [
    'reservationId',
    'status',
    'createdAt',
    'expiresAt',
    'paidAt',
    'buyerName',
    'buyerEmail',
    'donorName',
    'anonymous',
    'receiptRequested',
    'totalCents',
    'totalAmount',
    'parcels',
    'buyerAddress',
    'buyerZip',
    'buyerCity',
]


def _timestamp(value):
    if value is None:
        return ''
    value = value.astimezone(dt_timezone.utc)
    return value.isoformat(timespec='milliseconds').replace('+00:00', 'Z')


def _amount(cents):
    # Euros without trailing zeros: 300, 50.5, 12.25
    euros, rest = divmod(cents, 100)
    if not rest:
        return str(euros)
    return f"{euros}.{rest:02d}".rstrip('0')


def _flag(value):
    return 'true' if value else 'false'


def reservation_to_row(reservation):
    return [
        reservation.id,
        reservation.status,
        _timestamp(reservation.created_at),
        _timestamp(reservation.expires_at),
        _timestamp(reservation.paid_at),
        reservation.buyer_name,
        reservation.buyer_email,
        reservation.donor_name or '',
        _flag(reservation.anonymous),
        _flag(reservation.receipt_requested),
        reservation.total_cents,
        _amount(reservation.total_cents),
        '|'.join(reservation.parcel_ids),
        reservation.buyer_address or '',
        reservation.buyer_zip or '',
        reservation.buyer_city or '',
    ]


def export_reservations_csv(reservations):
    """
    Render reservations as CSV text.

    Fields containing quotes, commas or line breaks are quoted, quotes are
    doubled. Timestamps are UTC ISO 8601.
    """
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator='\n')
    writer.writerow(CSV_HEADER)

    for reservation in reservations:
        writer.writerow(reservation_to_row(reservation))

    return buffer.getvalue()

"""
Reservations services - Business logic layer.

This package contains all business operations for the reservations app:
- Reservation lifecycle (create, confirm, cancel)
- Time-based expiry
- Parcel availability
- Emails with payment instructions
- CSV export
"""

from .reservation_management import (
    create_reservation,
    get_reservation,
    get_all_reservations,
    get_reservations_filtered,
    confirm_reservation,
    cancel_reservation,
)

from .expiry import expire_reservations

from .availability import (
    get_sold_and_reserved_parcels,
    get_parcel_statuses,
    find_unavailable_parcels,
    are_parcels_available,
    get_parcel_summary,
)

from .notifications import (
    send_reservation_email,
    send_payment_confirmation_email,
    payment_reference,
)

from .payment_qr import build_epc_payload, generate_qr_png

from .export import export_reservations_csv

# Domain Exceptions
from .exceptions import (
    ReservationServiceError,
    InvalidSelectionError,
    EmptySelectionError,
    DuplicateParcelError,
    UnknownParcelError,
    ReceiptNotAllowedError,
    ParcelNotAvailableError,
    ReservationNotFoundError,
    InvalidStatusTransitionError,
)

__all__ = [
    # Lifecycle
    'create_reservation',
    'get_reservation',
    'get_all_reservations',
    'get_reservations_filtered',
    'confirm_reservation',
    'cancel_reservation',
    'expire_reservations',
    # Availability
    'get_sold_and_reserved_parcels',
    'get_parcel_statuses',
    'find_unavailable_parcels',
    'are_parcels_available',
    'get_parcel_summary',
    # Notifications
    'send_reservation_email',
    'send_payment_confirmation_email',
    'payment_reference',
    'build_epc_payload',
    'generate_qr_png',
    # Export
    'export_reservations_csv',
    # Exceptions
    'ReservationServiceError',
    'InvalidSelectionError',
    'EmptySelectionError',
    'DuplicateParcelError',
    'UnknownParcelError',
    'ReceiptNotAllowedError',
    'ParcelNotAvailableError',
    'ReservationNotFoundError',
    'InvalidStatusTransitionError',
]

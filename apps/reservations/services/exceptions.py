"""
Domain exceptions for the reservations app.

Exception Hierarchy:
    ReservationServiceError (base)
    ├── InvalidSelectionError
    │   ├── EmptySelectionError
    │   ├── DuplicateParcelError
    │   └── UnknownParcelError
    ├── ReceiptNotAllowedError
    ├── ParcelNotAvailableError
    ├── ReservationNotFoundError
    └── InvalidStatusTransitionError

Views translate these into ``{"error": message}`` responses.
"""


class ReservationServiceError(Exception):
    """Base exception for all reservation service errors."""
    pass


class InvalidSelectionError(ReservationServiceError):
    """The submitted parcel selection cannot be reserved as is."""
    pass


class EmptySelectionError(InvalidSelectionError):
    """No parcels were selected."""

    def __init__(self, message='Bitte wählen Sie mindestens eine Parzelle aus'):
        super().__init__(message)


class DuplicateParcelError(InvalidSelectionError):
    """The same parcel appears more than once in a selection."""

    def __init__(self, parcel_ids):
        self.parcel_ids = list(parcel_ids)
        super().__init__(f"Parzellen mehrfach ausgewählt: {', '.join(self.parcel_ids)}")


class UnknownParcelError(InvalidSelectionError):
    """A parcel ID does not exist in the catalog."""

    def __init__(self, parcel_ids):
        self.parcel_ids = list(parcel_ids)
        super().__init__(f"Unbekannte Parzellen: {', '.join(self.parcel_ids)}")


class ReceiptNotAllowedError(ReservationServiceError):
    """Donation receipt requested below the minimum amount or without an address."""
    pass


class ParcelNotAvailableError(ReservationServiceError):
    """At least one parcel is already reserved or sold."""

    def __init__(self, parcel_ids=()):
        self.parcel_ids = list(parcel_ids)
        super().__init__(
            'Einige der ausgewählten Parzellen sind nicht mehr verfügbar. '
            'Bitte aktualisieren Sie die Seite.'
        )


class ReservationNotFoundError(ReservationServiceError):
    """Reservation does not exist."""

    def __init__(self, reservation_id):
        self.reservation_id = reservation_id
        super().__init__('Reservierung nicht gefunden')


class InvalidStatusTransitionError(ReservationServiceError):
    """The reservation is no longer pending and cannot change state."""

    ACTION_LABELS = {
        'confirm': 'bestätigt',
        'cancel': 'storniert',
    }

    def __init__(self, reservation_id, current_status, action):
        self.reservation_id = reservation_id
        self.current_status = current_status
        self.action = action
        label = self.ACTION_LABELS.get(action, action)
        super().__init__(
            f"Reservierung kann nicht {label} werden (Status: {current_status})"
        )

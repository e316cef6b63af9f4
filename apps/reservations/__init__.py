"""
Reservations App - Parcel reservations for the Kunstrasen fundraiser

Visitors reserve parcels of the new artificial turf pitch and pay by bank
transfer. Parcels are held for a limited time; the treasurer confirms
incoming payments or cancels reservations from the admin dashboard.

Architecture:
- Models: Reservation, ReservationItem
- Services: lifecycle, expiry, availability, emails, CSV export
- Views: function-based DRF views (public reserve + admin endpoints)
- Permissions: shared admin token or staff JWT
"""

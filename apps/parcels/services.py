"""
Parcel catalog persistence.

The catalog itself lives in code (see ``catalog.py``); these helpers keep
the ``parcels`` table in line with it after price or layout changes.
"""

import logging

from django.db import transaction

from .catalog import generate_all_parcels
from .models import Parcel

logger = logging.getLogger(__name__)


@transaction.atomic
def sync_catalog():
    """
    Upsert every catalog parcel into the database.

    Existing rows get their type, price and coordinates refreshed, missing
    rows are created. Parcels that are no longer in the catalog are left
    alone since reservation items may still point at them.

    Returns:
        tuple[int, int]: (created, updated)
    """
    existing = {parcel.id: parcel for parcel in Parcel.objects.all()}
    to_create = []
    to_update = []

    for spec in generate_all_parcels():
        values = {
            'type': spec.type,
            'price_cents': spec.price_cents,
            'row': spec.row,
            'col': spec.col,
            'goal_side': spec.goal_side or '',
            'goal_position': spec.goal_position,
        }
        parcel = existing.get(spec.id)
        if parcel is None:
            to_create.append(Parcel(id=spec.id, **values))
            continue

        if any(getattr(parcel, field) != value for field, value in values.items()):
            for field, value in values.items():
                setattr(parcel, field, value)
            to_update.append(parcel)

    Parcel.objects.bulk_create(to_create, batch_size=500)
    if to_update:
        Parcel.objects.bulk_update(
            to_update,
            ['type', 'price_cents', 'row', 'col', 'goal_side', 'goal_position'],
            batch_size=500,
        )

    logger.info("Parcel catalog synced: %s created, %s updated", len(to_create), len(to_update))
    return len(to_create), len(to_update)

"""
Parcel catalog for the artificial turf fundraiser.

The pitch is split into a 60 x 50 grid of field parcels plus a handful of
premium parcels (goals, penalty spots and the kick-off point). Parcel IDs
are stable strings and carry their own coordinates, so the catalog can be
rebuilt from code at any time::

    goal-left-0 .. goal-left-4
    goal-right-0 .. goal-right-4
    penalty-left, penalty-right
    kickoff
    field-{row}-{col}

This module has no database access; the ``Parcel`` table is seeded from it.
"""

import re
from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable, Optional

from django.db import models


class ParcelType(models.TextChoices):
    GOAL = 'goal', 'Tor-Parzelle'
    PENALTY = 'penalty', 'Elfmeterpunkt'
    KICKOFF = 'kickoff', 'Anstoßpunkt'
    FIELD = 'field', 'Feld-Parzelle'


class ParcelStatus(models.TextChoices):
    AVAILABLE = 'available', 'Verfügbar'
    RESERVED = 'reserved', 'Reserviert'
    SOLD = 'sold', 'Verkauft'


class GoalSide(models.TextChoices):
    LEFT = 'left', 'Links'
    RIGHT = 'right', 'Rechts'


FIELD_CONFIG = {
    'GRID_COLS': 60,
    'GRID_ROWS': 50,
    'GOAL_PARCELS_PER_SIDE': 5,
    'PRICES': {
        ParcelType.GOAL: Decimal('300'),
        ParcelType.PENALTY: Decimal('300'),
        ParcelType.KICKOFF: Decimal('500'),
        ParcelType.FIELD: Decimal('50'),
    },
}

_GOAL_RE = re.compile(r'goal-(left|right)-(0|[1-9]\d*)')
_PENALTY_RE = re.compile(r'penalty-(left|right)')
# No zero padding: every parcel has exactly one valid ID
_FIELD_RE = re.compile(r'field-(0|[1-9]\d*)-(0|[1-9]\d*)')


@dataclass(frozen=True)
class ParcelSpec:
    """A single purchasable parcel as defined by the catalog."""

    id: str
    type: str
    price: Decimal
    row: Optional[int] = None
    col: Optional[int] = None
    goal_side: Optional[str] = None
    goal_position: Optional[int] = None

    @property
    def price_cents(self) -> int:
        return int(self.price * 100)


def price_for(parcel_type: str) -> Decimal:
    return FIELD_CONFIG['PRICES'][parcel_type]


def generate_all_parcels() -> list[ParcelSpec]:
    """Build the full catalog in display order."""
    parcels = []

    for side in (GoalSide.LEFT, GoalSide.RIGHT):
        for position in range(FIELD_CONFIG['GOAL_PARCELS_PER_SIDE']):
            parcels.append(ParcelSpec(
                id=f'goal-{side.value}-{position}',
                type=ParcelType.GOAL,
                price=price_for(ParcelType.GOAL),
                goal_side=side.value,
                goal_position=position,
            ))

    for side in (GoalSide.LEFT, GoalSide.RIGHT):
        parcels.append(ParcelSpec(
            id=f'penalty-{side.value}',
            type=ParcelType.PENALTY,
            price=price_for(ParcelType.PENALTY),
        ))

    parcels.append(ParcelSpec(
        id='kickoff',
        type=ParcelType.KICKOFF,
        price=price_for(ParcelType.KICKOFF),
    ))

    for row in range(FIELD_CONFIG['GRID_ROWS']):
        for col in range(FIELD_CONFIG['GRID_COLS']):
            parcels.append(ParcelSpec(
                id=f'field-{row}-{col}',
                type=ParcelType.FIELD,
                price=price_for(ParcelType.FIELD),
                row=row,
                col=col,
            ))

    return parcels


def get_parcel_by_id(parcel_id: str) -> Optional[ParcelSpec]:
    """
    Resolve a parcel ID to its catalog entry.

    Returns None for malformed IDs and for coordinates outside the pitch,
    so callers can treat None as "no such parcel".
    """
    if not isinstance(parcel_id, str):
        return None

    match = _GOAL_RE.fullmatch(parcel_id)
    if match:
        side, position = match.group(1), int(match.group(2))
        if position >= FIELD_CONFIG['GOAL_PARCELS_PER_SIDE']:
            return None
        return ParcelSpec(
            id=parcel_id,
            type=ParcelType.GOAL,
            price=price_for(ParcelType.GOAL),
            goal_side=side,
            goal_position=position,
        )

    if _PENALTY_RE.fullmatch(parcel_id):
        return ParcelSpec(
            id=parcel_id,
            type=ParcelType.PENALTY,
            price=price_for(ParcelType.PENALTY),
        )

    if parcel_id == 'kickoff':
        return ParcelSpec(
            id=parcel_id,
            type=ParcelType.KICKOFF,
            price=price_for(ParcelType.KICKOFF),
        )

    match = _FIELD_RE.fullmatch(parcel_id)
    if match:
        row, col = int(match.group(1)), int(match.group(2))
        if row >= FIELD_CONFIG['GRID_ROWS'] or col >= FIELD_CONFIG['GRID_COLS']:
            return None
        return ParcelSpec(
            id=parcel_id,
            type=ParcelType.FIELD,
            price=price_for(ParcelType.FIELD),
            row=row,
            col=col,
        )

    return None


def calculate_total(parcel_ids: Iterable[str]) -> Decimal:
    """Sum of catalog prices; unknown IDs count as zero."""
    total = Decimal('0')
    for parcel_id in parcel_ids:
        parcel = get_parcel_by_id(parcel_id)
        if parcel:
            total += parcel.price
    return total


def count_by_type(parcels: Iterable[ParcelSpec]) -> dict[str, int]:
    counts = {parcel_type.value: 0 for parcel_type in ParcelType}
    for parcel in parcels:
        counts[parcel.type] += 1
    return counts


def group_parcels_by_type(parcel_ids: Iterable[str]) -> list[dict]:
    """
    Summarize a selection per parcel type.

    Returns a list of dicts with ``type``, ``type_name``, ``count``,
    ``total_price`` and ``ids``, most expensive group first. Used for the
    confirmation email and the cart overview.
    """
    groups = {}

    for parcel_id in parcel_ids:
        parcel = get_parcel_by_id(parcel_id)
        if not parcel:
            continue

        group = groups.setdefault(parcel.type, {
            'type': parcel.type,
            'type_name': ParcelType(parcel.type).label,
            'count': 0,
            'total_price': Decimal('0'),
            'ids': [],
        })
        group['count'] += 1
        group['total_price'] += parcel.price
        group['ids'].append(parcel.id)

    return sorted(groups.values(), key=lambda g: g['total_price'], reverse=True)

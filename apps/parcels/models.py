from django.db import models
from decimal import Decimal

from .catalog import ParcelType, GoalSide


class Parcel(models.Model):
    """A purchasable piece of the pitch. Rows are seeded from the catalog."""

    id = models.CharField(primary_key=True, max_length=32)
    type = models.CharField(max_length=16, choices=ParcelType.choices)
    price_cents = models.PositiveIntegerField()

    # Grid coordinates (field parcels only)
    row = models.PositiveSmallIntegerField(null=True, blank=True)
    col = models.PositiveSmallIntegerField(null=True, blank=True)

    # Goal parcels only
    goal_side = models.CharField(max_length=8, choices=GoalSide.choices, blank=True)
    goal_position = models.PositiveSmallIntegerField(null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'parcels'
        indexes = [
            models.Index(fields=['type'], name='parcels_type_idx'),
        ]
        ordering = ['type', 'row', 'col', 'id']

    def __str__(self):
        return f"{self.id} ({self.get_type_display()}, {self.price} EUR)"

    @property
    def price(self):
        return Decimal(self.price_cents) / 100

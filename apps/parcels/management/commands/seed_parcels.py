"""
Management command to (re)load the parcel catalog into the database.

The initial catalog is inserted by a data migration. Run this after
changing prices or the grid layout in ``apps/parcels/catalog.py``.

Usage:
    python manage.py seed_parcels
"""

from django.core.management.base import BaseCommand

from apps.parcels.models import Parcel
from apps.parcels.services import sync_catalog


class Command(BaseCommand):
    help = 'Create or update all parcels from the catalog'

    def handle(self, *args, **options):
        created, updated = sync_catalog()

        self.stdout.write(
            self.style.SUCCESS(
                f'Seeded {Parcel.objects.count()} parcels ({created} created, {updated} updated).'
            )
        )

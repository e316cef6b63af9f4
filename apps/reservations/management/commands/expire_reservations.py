"""
Expire unpaid reservations past their payment deadline.

Meant to run from cron; reads also sweep lazily, so this only keeps the
database tidy between visits.

Usage:
    python manage.py expire_reservations
    python manage.py expire_reservations --dry-run
"""

from django.core.management.base import BaseCommand
from django.utils import timezone

from apps.reservations.models import Reservation, ReservationStatus
from apps.reservations.services import expire_reservations


class Command(BaseCommand):
    help = 'Expire pending reservations whose payment window has passed'

    def add_arguments(self, parser):
        parser.add_argument(
            '--dry-run',
            action='store_true',
            help='Show what would be expired without making changes',
        )

    def handle(self, *args, **options):
        now = timezone.now()

        if options['dry_run']:
            overdue = Reservation.objects.filter(
                status=ReservationStatus.PENDING,
                expires_at__lt=now,
            ).order_by('expires_at')

            self.stdout.write(f'{overdue.count()} reservation(s) would be expired:')
            for reservation in overdue:
                self.stdout.write(
                    f'  - {reservation.id} | {reservation.buyer_email} | '
                    f'{reservation.total_amount} EUR | expired {reservation.expires_at:%Y-%m-%d %H:%M}'
                )
            self.stdout.write(self.style.WARNING('--dry-run mode: No changes made.'))
            return

        expired_count = expire_reservations(now=now)
        self.stdout.write(
            self.style.SUCCESS(f'Expired {expired_count} reservation(s).')
        )

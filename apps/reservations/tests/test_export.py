import csv
import io
from datetime import datetime, timezone as dt_timezone

import pytest

from apps.reservations.models import Reservation
from apps.reservations.services import create_reservation, export_reservations_csv
from apps.reservations.services.export import CSV_HEADER, _amount


def _parse(text):
    return list(csv.reader(io.StringIO(text)))


@pytest.mark.django_db
class TestExportReservationsCsv:
    """Tests for export_reservations_csv."""

    def test_header_only(self):
        text = export_reservations_csv([])

        assert text == ','.join(CSV_HEADER) + '\n'

    def test_row_values(self, paid_reservation):
        rows = _parse(export_reservations_csv([paid_reservation]))
        row = dict(zip(rows[0], rows[1]))

        assert row['reservationId'] == paid_reservation.id
        assert row['status'] == 'paid'
        assert row['buyerEmail'] == 'erika@example.com'
        assert row['anonymous'] == 'false'
        assert row['receiptRequested'] == 'true'
        assert row['totalCents'] == '50000'
        assert row['totalAmount'] == '500'
        assert row['parcels'] == 'kickoff'
        assert row['buyerAddress'] == 'Venloer Str. 1'
        assert row['buyerZip'] == '50825'
        assert row['buyerCity'] == 'Köln'
        assert row['paidAt'].endswith('Z')

    def test_parcels_joined_with_pipe(self, pending_reservation):
        rows = _parse(export_reservations_csv([pending_reservation]))
        row = dict(zip(rows[0], rows[1]))

        assert sorted(row['parcels'].split('|')) == ['field-0-0', 'field-0-1']
        assert row['paidAt'] == ''
        assert row['buyerAddress'] == ''

    def test_timestamps_are_utc(self, pending_reservation):
        Reservation.objects.filter(id=pending_reservation.id).update(
            created_at=datetime(2025, 3, 1, 9, 30, tzinfo=dt_timezone.utc)
        )
        pending_reservation.refresh_from_db()

        rows = _parse(export_reservations_csv([pending_reservation]))

        assert rows[1][2] == '2025-03-01T09:30:00.000Z'

    def test_special_characters_are_quoted(self):
        reservation = create_reservation(
            parcels=['field-4-4'],
            buyer_name='Müller, "Kalle"',
            buyer_email='kalle@example.com',
            donor_name='Zeile1\nZeile2',
        )

        text = export_reservations_csv([reservation])

        assert '"Müller, ""Kalle"""' in text
        assert '"Zeile1\nZeile2"' in text
        row = dict(zip(CSV_HEADER, _parse(text)[1]))
        assert row['buyerName'] == 'Müller, "Kalle"'
        assert row['donorName'] == 'Zeile1\nZeile2'


class TestAmountColumn:

    @pytest.mark.parametrize('cents,expected', [
        (30000, '300'),
        (5050, '50.5'),
        (1225, '12.25'),
        (5, '0.05'),
    ])
    def test_no_trailing_zeros(self, cents, expected):
        assert _amount(cents) == expected

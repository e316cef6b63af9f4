from decimal import Decimal

import pytest

from apps.reservations.services import build_epc_payload, generate_qr_png


class TestBuildEpcPayload:
    """Tests for the EPC (GiroCode) payload."""

    def test_payload_lines(self):
        payload = build_epc_payload(
            iban='DE89 3704 0044 0532 0130 00',
            bic='COBADEFFXXX',
            recipient_name='SC West Köln 1900/11 e.V.',
            amount=Decimal('350'),
            remittance='Kunstrasen RES-ABCD1234',
        )

        assert payload.split('\n') == [
            'BCD',
            '002',
            '1',
            'SCT',
            'COBADEFFXXX',
            'SC West Köln 1900/11 e.V.',
            'DE89370400440532013000',
            'EUR350.00',
            '',
            '',
            'Kunstrasen RES-ABCD1234',
        ]

    def test_bic_is_optional(self):
        payload = build_epc_payload(
            iban='DE89370400440532013000',
            recipient_name='Verein',
            amount=Decimal('50'),
            remittance='Kunstrasen RES-1',
        )

        assert payload.split('\n')[4] == ''

    def test_long_fields_are_truncated(self):
        payload = build_epc_payload(
            iban='DE89370400440532013000',
            recipient_name='N' * 100,
            amount=Decimal('50'),
            remittance='R' * 200,
        )
        lines = payload.split('\n')

        assert len(lines[5]) == 70
        assert len(lines[10]) == 140

    def test_requires_iban(self):
        with pytest.raises(ValueError):
            build_epc_payload(iban='', recipient_name='Verein', amount=Decimal('50'), remittance='x')

    def test_requires_positive_amount(self):
        with pytest.raises(ValueError):
            build_epc_payload(
                iban='DE89370400440532013000',
                recipient_name='Verein',
                amount=Decimal('0'),
                remittance='x',
            )


class TestGenerateQrPng:

    def test_png_bytes(self):
        png = generate_qr_png('BCD\n002\n1\nSCT\n\nVerein\nDE89370400440532013000\nEUR50.00\n\n\nx')

        assert png.startswith(b'\x89PNG\r\n\x1a\n')

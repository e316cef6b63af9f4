from unittest import mock

import pytest
from django.core import mail

from apps.reservations.services import (
    send_payment_confirmation_email,
    send_reservation_email,
)


@pytest.mark.django_db
class TestSendReservationEmail:
    """Tests for the payment instructions email."""

    def test_sends_text_and_html(self, pending_reservation):
        assert send_reservation_email(pending_reservation) is True

        assert len(mail.outbox) == 1
        message = mail.outbox[0]
        assert message.subject == (
            f'Reservierungsbestätigung - Kunstrasen Aktion ({pending_reservation.id})'
        )
        assert message.to == ['max@example.com']
        assert message.alternatives[0][1] == 'text/html'

    def test_body_contents(self, pending_reservation):
        send_reservation_email(pending_reservation)

        body = mail.outbox[0].body
        assert 'Liebe/r Max Mustermann' in body
        assert f'Reservierungsnummer: {pending_reservation.id}' in body
        assert '- 2x Feld-Parzelle: 100,00 €' in body
        assert 'Gesamtbetrag: 100,00 €' in body
        assert f'Verwendungszweck: Kunstrasen {pending_reservation.id}' in body
        assert 'Bitte überweisen Sie den Betrag bis zum' in body
        assert 'Apenrader Str. 42' in body

    def test_no_qr_without_iban(self, pending_reservation, settings):
        settings.PAYMENT_IBAN = ''

        send_reservation_email(pending_reservation)

        message = mail.outbox[0]
        assert message.attachments == []
        assert 'cid:payment-qr' not in message.alternatives[0][0]

    def test_qr_attached_with_iban(self, pending_reservation, settings):
        settings.PAYMENT_IBAN = 'DE89 3704 0044 0532 0130 00'
        settings.PAYMENT_BIC = 'COBADEFFXXX'

        send_reservation_email(pending_reservation)

        message = mail.outbox[0]
        assert 'IBAN: DE89 3704 0044 0532 0130 00' in message.body
        assert 'cid:payment-qr' in message.alternatives[0][0]
        assert len(message.attachments) == 1
        image = message.attachments[0]
        assert image['Content-ID'] == '<payment-qr>'
        assert image.get_content_type() == 'image/png'

    def test_failure_returns_false(self, pending_reservation):
        with mock.patch(
            'django.core.mail.EmailMultiAlternatives.send',
            side_effect=OSError('connection refused'),
        ):
            assert send_reservation_email(pending_reservation) is False

        assert len(mail.outbox) == 0


@pytest.mark.django_db
class TestSendPaymentConfirmationEmail:
    """Tests for the payment received email."""

    def test_sends_confirmation(self, paid_reservation):
        assert send_payment_confirmation_email(paid_reservation) is True

        message = mail.outbox[0]
        assert message.subject == (
            f'Zahlungseingang bestätigt - Kunstrasen Aktion ({paid_reservation.id})'
        )
        assert '500,00 €' in message.body
        assert '1x Anstoßpunkt' in message.body

    def test_mentions_receipt_address(self, paid_reservation):
        send_payment_confirmation_email(paid_reservation)

        assert 'Venloer Str. 1, 50825 Köln' in mail.outbox[0].body

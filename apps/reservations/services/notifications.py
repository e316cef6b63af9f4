"""
Reservation emails.

Uses Django's email backend: console in development, SMTP (e.g. Mailjet SMTP
relay) in production, locmem in tests. Sending never raises; a failed email
is logged and reported as ``False`` so the reservation itself stands.
"""

import logging
from email.mime.image import MIMEImage

from django.conf import settings
from django.core.mail import EmailMultiAlternatives
from django.template.loader import render_to_string
from django.utils import timezone

from apps.parcels.catalog import group_parcels_by_type
from .payment_qr import build_epc_payload, generate_qr_png

logger = logging.getLogger(__name__)

QR_CONTENT_ID = 'payment-qr'


def payment_reference(reservation):
    """Remittance text the club matches bank transfers against."""
    return f"{settings.PAYMENT_REFERENCE_PREFIX} {reservation.id}"


def _payment_context(reservation):
    return {
        'recipient_name': settings.PAYMENT_RECIPIENT_NAME,
        'iban': settings.PAYMENT_IBAN,
        'bic': settings.PAYMENT_BIC,
        'reference': payment_reference(reservation),
        'amount': reservation.total_amount,
    }


def _base_context(reservation):
    return {
        'reservation': reservation,
        'parcel_groups': group_parcels_by_type(reservation.parcel_ids),
        'created_at': timezone.localtime(reservation.created_at),
        'club': {
            'name': settings.CLUB_NAME,
            'legal_name': settings.PAYMENT_RECIPIENT_NAME,
            'email': settings.CLUB_CONTACT_EMAIL,
            'address': settings.CLUB_ADDRESS,
            'website': settings.CLUB_WEBSITE,
        },
    }


def _build_message(reservation, subject, template_name, context):
    text_body = render_to_string(f'reservations/emails/{template_name}.txt', context)
    html_body = render_to_string(f'reservations/emails/{template_name}.html', context)

    message = EmailMultiAlternatives(
        subject=subject,
        body=text_body,
        from_email=settings.DEFAULT_FROM_EMAIL,
        to=[reservation.buyer_email],
        reply_to=[settings.CLUB_CONTACT_EMAIL] if settings.CLUB_CONTACT_EMAIL else None,
    )
    message.attach_alternative(html_body, 'text/html')
    return message


def _attach_payment_qr(message, reservation):
    payload = build_epc_payload(
        iban=settings.PAYMENT_IBAN,
        bic=settings.PAYMENT_BIC,
        recipient_name=settings.PAYMENT_RECIPIENT_NAME,
        amount=reservation.total_amount,
        remittance=payment_reference(reservation),
    )
    image = MIMEImage(generate_qr_png(payload), _subtype='png')
    image.add_header('Content-ID', f'<{QR_CONTENT_ID}>')
    image.add_header('Content-Disposition', 'inline', filename='ueberweisung-qr.png')

    # HTML part references the image via cid:
    message.mixed_subtype = 'related'
    message.attach(image)


def send_reservation_email(reservation):
    """
    Send payment instructions for a new reservation.

    Args:
        reservation: Pending Reservation instance

    Returns:
        bool: True if the backend accepted the message
    """
    with_qr = bool(settings.PAYMENT_IBAN)
    context = _base_context(reservation)
    context.update({
        'payment': _payment_context(reservation),
        'expires_at': timezone.localtime(reservation.expires_at),
        'with_qr': with_qr,
        'qr_content_id': QR_CONTENT_ID,
    })
    subject = f"Reservierungsbestätigung - Kunstrasen Aktion ({reservation.id})"

    try:
        message = _build_message(reservation, subject, 'reservation_received', context)
        if with_qr:
            _attach_payment_qr(message, reservation)
        message.send(fail_silently=False)
    except Exception:
        logger.exception("Failed to send reservation email for %s", reservation.id)
        return False

    logger.info("Reservation email sent for %s", reservation.id)
    return True


def send_payment_confirmation_email(reservation):
    """
    Tell the buyer that their transfer arrived and the parcels are theirs.

    Returns:
        bool: True if the backend accepted the message
    """
    context = _base_context(reservation)
    context['paid_at'] = timezone.localtime(reservation.paid_at or timezone.now())
    subject = f"Zahlungseingang bestätigt - Kunstrasen Aktion ({reservation.id})"

    try:
        message = _build_message(reservation, subject, 'payment_received', context)
        message.send(fail_silently=False)
    except Exception:
        logger.exception("Failed to send payment confirmation for %s", reservation.id)
        return False

    logger.info("Payment confirmation sent for %s", reservation.id)
    return True

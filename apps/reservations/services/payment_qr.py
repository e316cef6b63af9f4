"""
EPC QR codes ("GiroCode") for SEPA bank transfers.

Most German and Austrian banking apps pre-fill a transfer when this code
is scanned. Payload format (EPC069-12, version 002), one field per line::

    BCD
    002
    1                   character set, 1 = UTF-8
    SCT                 SEPA credit transfer
    <BIC>               optional in version 002
    <beneficiary name>  max 70 chars
    <IBAN>
    EUR<amount>         e.g. EUR300.00
    <purpose code>      empty
    <structured ref>    empty
    <remittance text>   max 140 chars

See Also:
    https://www.europeanpaymentscouncil.eu/document-library/guidance-documents/quick-response-code-guidelines-enable-data-capture-initiation
"""

from decimal import Decimal
from io import BytesIO

import qrcode


MAX_NAME_LENGTH = 70
MAX_REMITTANCE_LENGTH = 140


def build_epc_payload(*, iban, recipient_name, amount, remittance, bic=''):
    """
    Build the text payload for an EPC QR code.

    Args:
        iban (str): Beneficiary IBAN, spaces are stripped.
        recipient_name (str): Beneficiary name, truncated to 70 chars.
        amount (Decimal): Transfer amount in EUR.
        remittance (str): Unstructured remittance text (Verwendungszweck),
            truncated to 140 chars.
        bic (str, optional): Beneficiary BIC.

    Returns:
        str: Newline separated payload.

    Raises:
        ValueError: If IBAN is missing or amount is not positive.
    """
    iban = (iban or '').replace(' ', '').upper()
    if not iban:
        raise ValueError("IBAN is required for an EPC QR code")

    amount = Decimal(amount).quantize(Decimal('0.01'))
    if amount <= 0:
        raise ValueError("Amount must be positive")

    lines = [
        'BCD',
        '002',
        '1',
        'SCT',
        (bic or '').replace(' ', '').upper(),
        recipient_name[:MAX_NAME_LENGTH],
        iban,
        f'EUR{amount}',
        '',
        '',
        remittance[:MAX_REMITTANCE_LENGTH],
    ]
    return '\n'.join(lines)


def generate_qr_png(payload):
    """
    Render a payload as PNG bytes.

    EPC requires error correction level M.
    """
    qr = qrcode.QRCode(
        version=None,
        error_correction=qrcode.constants.ERROR_CORRECT_M,
        box_size=8,
        border=4,
    )
    qr.add_data(payload)
    qr.make(fit=True)

    img = qr.make_image(fill_color="black", back_color="white")

    buffer = BytesIO()
    img.save(buffer, format='PNG')
    return buffer.getvalue()

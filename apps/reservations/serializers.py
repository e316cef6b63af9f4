from rest_framework import serializers

from .models import Reservation, ReservationStatus


def first_error_message(errors):
    """
    Flatten DRF serializer errors to the first message.

    The frontend shows a single ``{"error": "..."}`` string per request.
    """
    if isinstance(errors, dict):
        for value in errors.values():
            return first_error_message(value)
    if isinstance(errors, (list, tuple)):
        for value in errors:
            message = first_error_message(value)
            if message:
                return message
        return ''
    return str(errors)


# =============================================================================
# Input Serializers
# =============================================================================

class ReserveInputSerializer(serializers.Serializer):
    """
    Validate a reservation request from the parcel map.

    Field names follow the frontend's camelCase payload; ``source`` maps them
    to the service's keyword arguments.
    """

    parcels = serializers.ListField(
        child=serializers.CharField(max_length=32),
        allow_empty=False,
        error_messages={
            'empty': 'Bitte wählen Sie mindestens eine Parzelle aus',
            'required': 'Bitte wählen Sie mindestens eine Parzelle aus',
            'not_a_list': 'Bitte wählen Sie mindestens eine Parzelle aus',
        },
    )
    buyerName = serializers.CharField(
        source='buyer_name',
        min_length=2,
        max_length=200,
        error_messages={
            'required': 'Bitte geben Sie Ihren Namen ein',
            'blank': 'Bitte geben Sie Ihren Namen ein',
            'min_length': 'Bitte geben Sie Ihren Namen ein',
        },
    )
    buyerEmail = serializers.EmailField(
        source='buyer_email',
        error_messages={
            'required': 'Bitte geben Sie eine gültige E-Mail-Adresse ein',
            'blank': 'Bitte geben Sie eine gültige E-Mail-Adresse ein',
            'invalid': 'Bitte geben Sie eine gültige E-Mail-Adresse ein',
        },
    )
    donorName = serializers.CharField(
        source='donor_name',
        required=False,
        allow_blank=True,
        allow_null=True,
        max_length=200,
    )
    anonymous = serializers.BooleanField(required=False, default=False)
    receiptRequested = serializers.BooleanField(
        source='receipt_requested',
        required=False,
        default=False,
    )
    buyerAddress = serializers.CharField(
        source='buyer_address',
        required=False,
        allow_blank=True,
        allow_null=True,
        max_length=255,
    )
    buyerCity = serializers.CharField(
        source='buyer_city',
        required=False,
        allow_blank=True,
        allow_null=True,
        max_length=120,
    )
    buyerZip = serializers.CharField(
        source='buyer_zip',
        required=False,
        allow_blank=True,
        allow_null=True,
        max_length=16,
    )

    # (source key, field name, min length, message)
    RECEIPT_ADDRESS_RULES = [
        ('buyer_address', 'buyerAddress', 5, 'Bitte geben Sie Ihre Adresse ein'),
        ('buyer_zip', 'buyerZip', 4, 'Bitte geben Sie Ihre PLZ ein'),
        ('buyer_city', 'buyerCity', 2, 'Bitte geben Sie Ihre Stadt ein'),
    ]

    def validate(self, attrs):
        """A donation receipt is mailed, so it needs a full postal address."""
        for key in ('donor_name', 'buyer_address', 'buyer_city', 'buyer_zip'):
            if attrs.get(key) is not None:
                attrs[key] = attrs[key].strip()

        if attrs.get('receipt_requested'):
            errors = {}
            for key, field_name, min_length, message in self.RECEIPT_ADDRESS_RULES:
                if len(attrs.get(key) or '') < min_length:
                    errors[field_name] = message
            if errors:
                raise serializers.ValidationError(errors)

        return attrs


class ReservationActionSerializer(serializers.Serializer):
    """Validate admin confirm/cancel input."""

    reservationId = serializers.CharField(
        source='reservation_id',
        error_messages={
            'required': 'reservationId ist erforderlich',
            'blank': 'reservationId ist erforderlich',
        },
    )


class ReservationExportFilterSerializer(serializers.Serializer):
    """
    Validate query parameters for the CSV export.

    Query Parameters:
        status (str): Reservation status, unknown values are ignored
        q (str): Search in ID, buyer name, buyer email and donor name
        from (date): First creation day, inclusive
        to (date): Last creation day, inclusive
    """

    status = serializers.CharField(required=False, allow_blank=True)
    q = serializers.CharField(required=False, allow_blank=True, max_length=200)
    date_from = serializers.DateField(required=False, source='date_from')
    date_to = serializers.DateField(required=False, source='date_to')

    def get_fields(self):
        # ``from`` is a keyword, so the query names are bound here
        fields = super().get_fields()
        fields['from'] = fields.pop('date_from')
        fields['to'] = fields.pop('date_to')
        return fields

    def validate_status(self, value):
        if value in ReservationStatus.values:
            return value
        return None

    def validate(self, attrs):
        """Validate date range."""
        date_from = attrs.get('date_from')
        date_to = attrs.get('date_to')

        if date_from and date_to and date_from > date_to:
            raise serializers.ValidationError({
                'to': 'Enddatum muss nach dem Startdatum liegen'
            })

        return attrs


# =============================================================================
# Output Serializers
# =============================================================================

class ReservationSerializer(serializers.ModelSerializer):
    """Reservation as consumed by the admin dashboard."""

    parcels = serializers.ListField(source='parcel_ids', child=serializers.CharField(), read_only=True)
    buyerName = serializers.CharField(source='buyer_name', read_only=True)
    buyerEmail = serializers.EmailField(source='buyer_email', read_only=True)
    donorName = serializers.CharField(source='donor_name', read_only=True)
    receiptRequested = serializers.BooleanField(source='receipt_requested', read_only=True)
    buyerAddress = serializers.CharField(source='buyer_address', read_only=True, allow_null=True)
    buyerCity = serializers.CharField(source='buyer_city', read_only=True, allow_null=True)
    buyerZip = serializers.CharField(source='buyer_zip', read_only=True, allow_null=True)
    totalAmount = serializers.DecimalField(
        source='total_amount',
        max_digits=10,
        decimal_places=2,
        coerce_to_string=False,
        read_only=True,
    )
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)
    expiresAt = serializers.DateTimeField(source='expires_at', read_only=True)
    paidAt = serializers.DateTimeField(source='paid_at', read_only=True, allow_null=True)

    class Meta:
        model = Reservation
        fields = [
            'id',
            'parcels',
            'buyerName',
            'buyerEmail',
            'donorName',
            'anonymous',
            'receiptRequested',
            'buyerAddress',
            'buyerCity',
            'buyerZip',
            'totalAmount',
            'status',
            'createdAt',
            'expiresAt',
            'paidAt',
        ]
        read_only_fields = fields


class ReserveResponseSerializer(serializers.Serializer):
    success = serializers.BooleanField()
    reservationId = serializers.CharField()
    totalAmount = serializers.DecimalField(max_digits=10, decimal_places=2, coerce_to_string=False)


class ActionResponseSerializer(serializers.Serializer):
    success = serializers.BooleanField()
    message = serializers.CharField()


class ExpireResponseSerializer(serializers.Serializer):
    success = serializers.BooleanField()
    expiredCount = serializers.IntegerField()


class ReservationListResponseSerializer(serializers.Serializer):
    reservations = ReservationSerializer(many=True)


class ErrorResponseSerializer(serializers.Serializer):
    error = serializers.CharField()

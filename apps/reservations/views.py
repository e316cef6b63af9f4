import logging

from django.http import HttpResponse
from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import extend_schema, OpenApiParameter
from rest_framework import status
from rest_framework.decorators import api_view, authentication_classes, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework_simplejwt.authentication import JWTAuthentication

from .authentication import AdminTokenAuthentication
from .permissions import IsReservationAdmin
from .serializers import (
    ReserveInputSerializer,
    ReserveResponseSerializer,
    ReservationActionSerializer,
    ReservationExportFilterSerializer,
    ReservationListResponseSerializer,
    ReservationSerializer,
    ActionResponseSerializer,
    ExpireResponseSerializer,
    ErrorResponseSerializer,
    first_error_message,
)
from .services import (
    create_reservation,
    get_all_reservations,
    get_reservations_filtered,
    confirm_reservation,
    cancel_reservation,
    expire_reservations,
    export_reservations_csv,
    send_reservation_email,
    send_payment_confirmation_email,
)
from .services.exceptions import (
    InvalidSelectionError,
    ReceiptNotAllowedError,
    ParcelNotAvailableError,
    ReservationNotFoundError,
    InvalidStatusTransitionError,
)

logger = logging.getLogger(__name__)

# Shared admin token first; anything else in the Bearer header is tried as a JWT
ADMIN_AUTHENTICATION = [AdminTokenAuthentication, JWTAuthentication]


def _validation_error(serializer):
    return Response(
        {'error': first_error_message(serializer.errors)},
        status=status.HTTP_400_BAD_REQUEST
    )


# =============================================================================
# Public
# =============================================================================

@extend_schema(
    request=ReserveInputSerializer,
    responses={
        200: ReserveResponseSerializer,
        400: ErrorResponseSerializer,
        409: ErrorResponseSerializer,
    },
    description="Reserve parcels and email bank transfer instructions to the buyer.",
    tags=['reservations'],
)
@api_view(['POST'])
@authentication_classes([])
@permission_classes([AllowAny])
def reserve(request):
    """Create a pending reservation for the selected parcels."""
    serializer = ReserveInputSerializer(data=request.data)
    if not serializer.is_valid():
        return _validation_error(serializer)

    try:
        reservation = create_reservation(**serializer.validated_data)
    except ParcelNotAvailableError as e:
        return Response({'error': str(e)}, status=status.HTTP_409_CONFLICT)
    except (InvalidSelectionError, ReceiptNotAllowedError) as e:
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

    if not send_reservation_email(reservation):
        logger.error("Reservation %s created but confirmation email failed", reservation.id)

    return Response({
        'success': True,
        'reservationId': reservation.id,
        'totalAmount': reservation.total_amount,
    })


# =============================================================================
# Admin
# =============================================================================

@extend_schema(
    responses={200: ReservationListResponseSerializer},
    description="All reservations, pending first, newest first within a status.",
    tags=['admin'],
)
@api_view(['GET'])
@authentication_classes(ADMIN_AUTHENTICATION)
@permission_classes([IsReservationAdmin])
def admin_reservations(request):
    reservations = get_all_reservations()
    serializer = ReservationSerializer(reservations, many=True)
    return Response({'reservations': serializer.data})


@extend_schema(
    request=ReservationActionSerializer,
    responses={
        200: ActionResponseSerializer,
        400: ErrorResponseSerializer,
        404: ErrorResponseSerializer,
    },
    description="Mark a pending reservation as paid and notify the buyer.",
    tags=['admin'],
)
@api_view(['POST'])
@authentication_classes(ADMIN_AUTHENTICATION)
@permission_classes([IsReservationAdmin])
def admin_confirm(request):
    serializer = ReservationActionSerializer(data=request.data)
    if not serializer.is_valid():
        return _validation_error(serializer)

    try:
        reservation = confirm_reservation(serializer.validated_data['reservation_id'])
    except ReservationNotFoundError as e:
        return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
    except InvalidStatusTransitionError as e:
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

    send_payment_confirmation_email(reservation)

    return Response({
        'success': True,
        'message': 'Reservierung erfolgreich bestätigt',
    })


@extend_schema(
    request=ReservationActionSerializer,
    responses={
        200: ActionResponseSerializer,
        400: ErrorResponseSerializer,
        404: ErrorResponseSerializer,
    },
    description="Cancel a pending reservation and release its parcels.",
    tags=['admin'],
)
@api_view(['POST'])
@authentication_classes(ADMIN_AUTHENTICATION)
@permission_classes([IsReservationAdmin])
def admin_cancel(request):
    serializer = ReservationActionSerializer(data=request.data)
    if not serializer.is_valid():
        return _validation_error(serializer)

    try:
        cancel_reservation(serializer.validated_data['reservation_id'])
    except ReservationNotFoundError as e:
        return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
    except InvalidStatusTransitionError as e:
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

    return Response({
        'success': True,
        'message': 'Reservierung erfolgreich storniert',
    })


@extend_schema(
    request=None,
    responses={200: ExpireResponseSerializer},
    description="Expire pending reservations past their payment deadline.",
    tags=['admin'],
)
@api_view(['POST'])
@authentication_classes(ADMIN_AUTHENTICATION)
@permission_classes([IsReservationAdmin])
def admin_expire(request):
    expired_count = expire_reservations()
    return Response({'success': True, 'expiredCount': expired_count})


@extend_schema(
    parameters=[
        OpenApiParameter('status', OpenApiTypes.STR, description='pending, paid, expired or cancelled'),
        OpenApiParameter('q', OpenApiTypes.STR, description='Search in ID, name, email and donor'),
        OpenApiParameter('from', OpenApiTypes.DATE, description='Created on or after this day'),
        OpenApiParameter('to', OpenApiTypes.DATE, description='Created on or before this day'),
    ],
    responses={
        (200, 'text/csv'): OpenApiTypes.STR,
        400: ErrorResponseSerializer,
    },
    description="Export reservations as CSV.",
    tags=['admin'],
)
@api_view(['GET'])
@authentication_classes(ADMIN_AUTHENTICATION)
@permission_classes([IsReservationAdmin])
def admin_reservations_csv(request):
    filters = ReservationExportFilterSerializer(data=request.query_params)
    if not filters.is_valid():
        return _validation_error(filters)

    expire_reservations()
    reservations = get_reservations_filtered(**filters.validated_data)

    response = HttpResponse(
        export_reservations_csv(reservations),
        content_type='text/csv; charset=utf-8',
    )
    response['Content-Disposition'] = 'attachment; filename="reservations.csv"'
    return response

from django.views.decorators.cache import never_cache
from drf_spectacular.utils import extend_schema
from rest_framework.decorators import api_view, authentication_classes, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

from apps.reservations.services import get_parcel_summary, get_sold_and_reserved_parcels
from .catalog import FIELD_CONFIG, ParcelType, count_by_type, generate_all_parcels
from .serializers import (
    ParcelCatalogResponseSerializer,
    ParcelStatusResponseSerializer,
    ParcelSummaryResponseSerializer,
)


@never_cache
@extend_schema(
    responses={200: ParcelStatusResponseSerializer},
    description="IDs of sold and currently reserved parcels. Every other parcel is available.",
    tags=['parcels'],
)
@api_view(['GET'])
@authentication_classes([])
@permission_classes([AllowAny])
def parcel_status(request):
    return Response(get_sold_and_reserved_parcels())


@never_cache
@extend_schema(
    responses={200: ParcelSummaryResponseSerializer},
    description="Number of still available parcels per type.",
    tags=['parcels'],
)
@api_view(['GET'])
@authentication_classes([])
@permission_classes([AllowAny])
def parcel_summary(request):
    return Response(get_parcel_summary())


@extend_schema(
    responses={200: ParcelCatalogResponseSerializer},
    description="Field grid dimensions and price per parcel type.",
    tags=['parcels'],
)
@api_view(['GET'])
@authentication_classes([])
@permission_classes([AllowAny])
def parcel_catalog(request):
    """Static catalog data the field map is drawn from."""
    totals = count_by_type(generate_all_parcels())

    return Response({
        'gridCols': FIELD_CONFIG['GRID_COLS'],
        'gridRows': FIELD_CONFIG['GRID_ROWS'],
        'goalParcelsPerSide': FIELD_CONFIG['GOAL_PARCELS_PER_SIDE'],
        'types': [
            {
                'type': parcel_type.value,
                'name': parcel_type.label,
                'price': FIELD_CONFIG['PRICES'][parcel_type],
                'total': totals.get(parcel_type.value, 0),
            }
            for parcel_type in ParcelType
        ],
    })

"""Permission classes for the reservation admin endpoints."""
from rest_framework.permissions import BasePermission

from .authentication import ADMIN_TOKEN_AUTH


class IsReservationAdmin(BasePermission):
    """
    Allows access to holders of the shared admin token or staff users.

    Usage:
        @authentication_classes(ADMIN_AUTHENTICATION)
        @permission_classes([IsReservationAdmin])
        def admin_reservations(request):
            ...
    """

    message = 'Unauthorized'

    def has_permission(self, request, view):
        if request.auth == ADMIN_TOKEN_AUTH:
            return True

        user = request.user
        return bool(user and user.is_authenticated and user.is_staff)

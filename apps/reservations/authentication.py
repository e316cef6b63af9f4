"""
Shared admin token authentication.

The dashboard authenticates with ``Authorization: Bearer <ADMIN_TOKEN>``.
Staff accounts can use a regular JWT from ``/api/auth/token/`` instead, so
a bearer value that is not the admin token is left to
``JWTAuthentication`` further down the chain.
"""

import secrets

from django.conf import settings
from django.contrib.auth.models import AnonymousUser
from rest_framework.authentication import BaseAuthentication, get_authorization_header


# ``request.auth`` value for requests authenticated with the admin token
ADMIN_TOKEN_AUTH = 'admin-token'


class AdminTokenAuthentication(BaseAuthentication):
    keyword = 'Bearer'

    def authenticate(self, request):
        expected = settings.ADMIN_TOKEN
        if not expected:
            return None

        parts = get_authorization_header(request).split()
        if len(parts) != 2 or parts[0].decode('latin-1') != self.keyword:
            return None

        # Raw header bytes; compare_digest rejects non-ASCII str
        if not secrets.compare_digest(parts[1], expected.encode()):
            return None

        return AnonymousUser(), ADMIN_TOKEN_AUTH

    def authenticate_header(self, request):
        return self.keyword

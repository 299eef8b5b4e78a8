"""
JWT authentication reading the Authorization header or the access cookie.

Login and refresh set the access token as an HTTP-only cookie for browser
clients; API clients send ``Authorization: Bearer <token>``. The header
wins when both are present.

Users are resolved through the default manager, so tokens of soft-deleted
users are rejected.
"""

from __future__ import annotations

from django.conf import settings
from rest_framework_simplejwt.authentication import JWTAuthentication


class CookieJWTAuthentication(JWTAuthentication):
    def authenticate(self, request):
        header = self.get_header(request)
        if header is not None:
            raw_token = self.get_raw_token(header)
        else:
            raw_token = request.COOKIES.get(settings.ACCESS_TOKEN_COOKIE_NAME)

        if not raw_token:
            return None

        validated_token = self.get_validated_token(raw_token)
        return self.get_user(validated_token), validated_token

"""
Permission classes for access tokens.

A regular access token grants full access. A token carrying a
``purpose`` claim (issued after email confirmation) only opens the
endpoints that accept that purpose.
"""

from rest_framework.permissions import BasePermission

from accounts.constants import PROFILE_COMPLETION_PURPOSE, TOKEN_PURPOSE_CLAIM


def _token_purpose(request):
    token = getattr(request, "auth", None)
    if token is None or not hasattr(token, "get"):
        return None
    return token.get(TOKEN_PURPOSE_CLAIM)


class IsFullAccess(BasePermission):
    """Authenticated with an unrestricted access token."""

    message = "Access was denied"

    def has_permission(self, request, view):
        return bool(
            request.user
            and request.user.is_authenticated
            and _token_purpose(request) is None
        )


class IsProfileCompletionAccess(BasePermission):
    """Authenticated with a profile-completion token (or a full one)."""

    def has_permission(self, request, view):
        return bool(
            request.user
            and request.user.is_authenticated
            and _token_purpose(request) in (None, PROFILE_COMPLETION_PURPOSE)
        )

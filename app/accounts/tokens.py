"""
Token issuance.

Access tokens are short-lived JWTs minted with djangorestframework-simplejwt.
The user id travels in the ``sid`` claim (SIMPLE_JWT["USER_ID_CLAIM"]).

Refresh tokens are opaque random strings. Only their SHA-256 hash is
stored, in accounts.models.RefreshToken, so rotation and revocation are
plain row updates.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
from typing import TYPE_CHECKING

from django.conf import settings
from django.utils import timezone
from rest_framework_simplejwt.tokens import AccessToken

from accounts.constants import PROFILE_COMPLETION_PURPOSE, TOKEN_PURPOSE_CLAIM
from accounts.models import RefreshToken
from core.helpers import generate_token, hash_string

if TYPE_CHECKING:
    from datetime import datetime

    from accounts.models import User


@dataclass(frozen=True)
class TokenPair:
    access_token: str
    refresh_token: str
    access_expires_at: datetime
    refresh_expires_at: datetime


def issue_access_token(user: User, purpose: str | None = None) -> AccessToken:
    token = AccessToken.for_user(user)
    if purpose:
        token[TOKEN_PURPOSE_CLAIM] = purpose
        token.set_exp(lifetime=timedelta(minutes=settings.PURPOSE_TOKEN_LIFETIME_MINUTES))
    return token


def issue_profile_completion_token(user: User) -> str:
    """Short-lived access token accepted only by the account completion endpoint."""
    return str(issue_access_token(user, purpose=PROFILE_COMPLETION_PURPOSE))


def issue_token_pair(
    user: User,
    *,
    user_agent: str = "",
    device_id: str = "",
    ip_address: str | None = None,
) -> tuple[TokenPair, RefreshToken]:
    """
    Mint an access token and persist a new refresh token for ``user``.

    Must run inside the caller's transaction.
    """
    access = issue_access_token(user)
    raw_refresh = generate_token(32)
    expires_at = timezone.now() + timedelta(days=settings.REFRESH_TOKEN_LIFETIME_DAYS)

    record = RefreshToken.objects.create(
        user=user,
        token_hash=hash_string(raw_refresh),
        user_agent=user_agent[:512],
        device_id=device_id[:128],
        ip_address=ip_address or None,
        expires_at=expires_at,
    )

    pair = TokenPair(
        access_token=str(access),
        refresh_token=raw_refresh,
        access_expires_at=timezone.now() + settings.SIMPLE_JWT["ACCESS_TOKEN_LIFETIME"],
        refresh_expires_at=expires_at,
    )
    return pair, record

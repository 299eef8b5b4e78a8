"""
Small infrastructure helpers used by the accounts app.

- generate_token / generate_code: random secrets (refresh tokens, email codes)
- hash_string: digest stored in place of a secret
- get_client_ip: caller address recorded with a refresh token
"""

from __future__ import annotations

import hashlib
import secrets
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from django.http import HttpRequest


def generate_token(length: int = 32) -> str:
    """Random hex token of ``2 * length`` characters."""
    return secrets.token_hex(length)


def generate_code(length: int = 6) -> str:
    """
    Random uppercase hex code of ``length`` characters.

    Short enough to type from an email, e.g. "4F0A9C".
    """
    return secrets.token_hex((length + 1) // 2)[:length].upper()


def hash_string(value: str, algorithm: str = "sha256") -> str:
    return hashlib.new(algorithm, value.encode("utf-8")).hexdigest()


def get_client_ip(request: HttpRequest) -> str:
    # Behind a proxy the first X-Forwarded-For entry is the client
    forwarded_for = request.META.get("HTTP_X_FORWARDED_FOR")
    if forwarded_for:
        return forwarded_for.split(",")[0].strip()
    return request.META.get("REMOTE_ADDR", "")

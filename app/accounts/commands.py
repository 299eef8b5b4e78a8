"""
Command and query objects for the accounts app.

Views build these from the request; handlers in services.py and
queries.py consume them.
"""

from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID


@dataclass(frozen=True)
class CreateAccountCommand:
    firstname: str
    email: str
    password: str
    lastname: str | None = None


@dataclass(frozen=True)
class UpdateConfirmEmailTokenCommand:
    email: str


@dataclass(frozen=True)
class ConfirmEmailCommand:
    email: str
    code: str


@dataclass(frozen=True)
class CompleteAccountCommand:
    user_id: UUID
    shortname: str
    bio: str | None = None


@dataclass(frozen=True)
class LoginCommand:
    email: str
    password: str
    user_agent: str = ""
    device_id: str = ""
    ip_address: str | None = None


@dataclass(frozen=True)
class RefreshTokenCommand:
    refresh_token: str
    user_agent: str = ""
    device_id: str = ""
    ip_address: str | None = None


@dataclass(frozen=True)
class LogoutCommand:
    user_id: UUID
    refresh_token: str


@dataclass(frozen=True)
class UpdateUserCommand:
    user_id: UUID
    firstname: str | None = None
    lastname: str | None = None
    bio: str | None = None


@dataclass(frozen=True)
class UpdateUserShortnameCommand:
    user_id: UUID
    shortname: str


@dataclass(frozen=True)
class DeleteAccountCommand:
    user_id: UUID


@dataclass(frozen=True)
class GetUserQuery:
    user_id: UUID


@dataclass(frozen=True)
class UserMembershipQuery:
    user_id: UUID

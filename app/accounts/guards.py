"""
Actor guards shared by every guarded handler.

Handlers load the acting user through ``User.all_objects`` so that a
deleted user is reported as deleted rather than missing. The messages
differ between operations, so each handler passes its own
``ActorMessages``.

Usage:
    user, failure = load_actor(cls, command.user_id, GROUP_ACTOR_MESSAGES)
    if failure:
        return failure
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from accounts.models import User
from core.error_codes import ErrorCode

if TYPE_CHECKING:
    from uuid import UUID

    from core.handlers import CommandHandler
    from core.services import ServiceResult


@dataclass(frozen=True)
class ActorMessages:
    not_found: str = "User not found"
    not_verified: str = "User account is not verified"
    deleted: str = "User account has been deleted"
    # Some read operations report deletion before verification
    deleted_first: bool = False


DEFAULT_ACTOR_MESSAGES = ActorMessages()


def load_actor(
    handler: type[CommandHandler],
    user_id: UUID,
    messages: ActorMessages = DEFAULT_ACTOR_MESSAGES,
    *,
    require_verified: bool = True,
) -> tuple[User | None, ServiceResult | None]:
    """
    Load the acting user and run the actor guards.

    Order: existence -> verified -> deleted (or existence -> deleted ->
    verified when ``messages.deleted_first`` is set).

    Returns:
        (user, None) when every guard passes, (None, failure) otherwise
    """
    user = User.all_objects.filter(pk=user_id).first()
    if user is None:
        return None, handler.reject(messages.not_found, ErrorCode.USER_NOT_FOUND)

    checks = [
        (require_verified and not user.is_verified, messages.not_verified, ErrorCode.USER_NOT_VERIFIED),
        (user.is_deleted, messages.deleted, ErrorCode.USER_DELETED),
    ]
    if messages.deleted_first:
        checks.reverse()

    for failed, message, error_code in checks:
        if failed:
            return None, handler.reject(message, error_code)
    return user, None

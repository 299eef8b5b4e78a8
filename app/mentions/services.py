"""
Shortname registry operations.

MentionService is called from inside the guarded handlers of accounts
and chat, so it never opens its own outer transaction. Each write runs
in a savepoint: when the unique index rejects a shortname that a
concurrent request claimed after our advisory check, the savepoint is
rolled back and the caller gets the regular "taken" failure instead of
a database error.

Usage:
    if MentionService.is_taken(shortname):
        return cls.reject(SHORTNAME_TAKEN_MESSAGE, ErrorCode.SHORTNAME_ALREADY_TAKEN)

    result = MentionService.bind_to_chat(chat, shortname)
    if not result:
        return result
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from django.db import IntegrityError, transaction

from core.error_codes import ErrorCode
from core.services import BaseService, ServiceResult
from mentions.constants import SHORTNAME_TAKEN_MESSAGE
from mentions.models import ChatMention, Mention, UserMention

if TYPE_CHECKING:
    from collections.abc import Callable

    from accounts.models import User
    from chat.models import Chat


class MentionService(BaseService):
    @classmethod
    def is_taken(cls, shortname: str) -> bool:
        """Advisory uniqueness check, evaluated in guard order."""
        return Mention.objects.exists_by_shortname(shortname)

    @classmethod
    def bind_to_user(cls, user: User, shortname: str) -> ServiceResult[UserMention]:
        """Create the user's mention, or rename it if one exists."""

        def write() -> UserMention:
            mention = UserMention.objects.filter(user=user).first()
            if mention is None:
                return UserMention.objects.create(user=user, shortname=shortname)
            mention.shortname = shortname
            mention.save(update_fields=["shortname", "updated_at"])
            return mention

        return cls._claim(shortname, write)

    @classmethod
    def bind_to_chat(cls, chat: Chat, shortname: str) -> ServiceResult[ChatMention]:
        """Create the chat's mention, or rename it if one exists."""

        def write() -> ChatMention:
            mention = ChatMention.objects.filter(chat=chat).first()
            if mention is None:
                return ChatMention.objects.create(chat=chat, shortname=shortname)
            mention.shortname = shortname
            mention.save(update_fields=["shortname", "updated_at"])
            return mention

        return cls._claim(shortname, write)

    @classmethod
    def release_user(cls, user: User) -> int:
        """Delete the user's mention. Returns the number of mentions removed."""
        count, _ = Mention.objects.filter(usermention__user=user).delete()
        return 1 if count else 0

    @classmethod
    def release_chat(cls, chat: Chat) -> int:
        """Delete the chat's mention. Returns the number of mentions removed."""
        count, _ = Mention.objects.filter(chatmention__chat=chat).delete()
        return 1 if count else 0

    @classmethod
    def _claim(cls, shortname: str, write: Callable[[], Mention]) -> ServiceResult:
        try:
            with transaction.atomic():
                mention = write()
        except IntegrityError:
            if not Mention.objects.filter(shortname__iexact=shortname).exists():
                raise
            cls.get_logger().warning(f"Shortname {shortname} was claimed concurrently")
            return ServiceResult.failure(
                SHORTNAME_TAKEN_MESSAGE,
                error_code=ErrorCode.SHORTNAME_ALREADY_TAKEN,
            )

        cls.get_logger().info(f"Shortname {mention.shortname} bound")
        return ServiceResult.success(mention)

"""
Chat repositories.

ChatQuerySet backs both managers on Chat:
    Chat.objects      -> excludes soft-deleted chats (SoftDeleteManager)
    Chat.all_objects  -> includes them, used by guarded handlers
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from core.managers import SoftDeleteManager, SoftDeleteQuerySet

if TYPE_CHECKING:
    from uuid import UUID

    from accounts.models import User


class ChatQuerySet(SoftDeleteQuerySet):
    def groups(self) -> ChatQuerySet:
        return self.filter(type="group")

    def for_member(self, user: User) -> ChatQuerySet:
        return self.filter(members__user=user)

    def find_one_to_one(self, first_user_id: UUID, second_user_id: UUID):
        """Return the one-to-one chat between two users, deleted or not."""
        from chat.models import make_pair_key

        return self.filter(
            type="one_to_one",
            pair_key=make_pair_key(first_user_id, second_user_id),
        ).first()


class ChatManager(SoftDeleteManager.from_queryset(ChatQuerySet)):
    def create_personal(self, user: User):
        """Create the personal chat of ``user`` with its single membership."""
        from chat.constants import CHAT_CONFIG
        from chat.models import ChatMember, ChatType

        chat = self.create(
            type=ChatType.PERSONAL,
            name=CHAT_CONFIG.PERSONAL_CHAT_NAME,
            is_private=True,
        )
        ChatMember.objects.create(chat=chat, user=user)
        return chat

"""
Target guards shared by chat handlers.

Chats are loaded through ``Chat.all_objects`` so a deleted chat produces
its "deleted" error instead of "not found". Guard messages vary per
operation, so callers pass the wording they need.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from accounts.guards import ActorMessages
from chat.models import Chat, ChatMember, ChatType
from core.error_codes import ErrorCode

if TYPE_CHECKING:
    from uuid import UUID

    from accounts.models import User
    from core.handlers import CommandHandler
    from core.services import ServiceResult


GROUP_ACTOR_MESSAGES = ActorMessages(
    not_found="User not found",
    not_verified="User isn't verified",
    deleted="User is deleted",
)


@dataclass(frozen=True)
class GroupMessages:
    not_found: str = "Group not found"
    deleted: str = "Group is deleted"
    not_member: str = "User isn't member of group"
    not_creator: str = "User isn't creator of group"


DEFAULT_GROUP_MESSAGES = GroupMessages()


def load_group(
    handler: type[CommandHandler],
    group_id: UUID,
    messages: GroupMessages = DEFAULT_GROUP_MESSAGES,
) -> tuple[Chat | None, ServiceResult | None]:
    """
    Load a group chat. Ids of non-group chats are reported as not found.

    Order: existence -> deleted
    """
    chat = Chat.all_objects.filter(pk=group_id, type=ChatType.GROUP).first()
    if chat is None:
        return None, handler.reject(messages.not_found, ErrorCode.GROUP_NOT_FOUND)
    if chat.is_deleted:
        return None, handler.reject(messages.deleted, ErrorCode.GROUP_DELETED)
    return chat, None


def require_creator(
    handler: type[CommandHandler],
    chat: Chat,
    user: User,
    messages: GroupMessages = DEFAULT_GROUP_MESSAGES,
) -> tuple[ChatMember | None, ServiceResult | None]:
    """
    Membership then role guard.

    Order: member -> creator
    """
    member = chat.membership_of(user)
    if member is None:
        return None, handler.reject(messages.not_member, ErrorCode.NOT_A_MEMBER)
    if not member.is_creator:
        return None, handler.reject(messages.not_creator, ErrorCode.NOT_A_CREATOR)
    return member, None


def load_chat(
    handler: type[CommandHandler],
    chat_id: UUID,
    *,
    not_found: str = "Chat not found",
    deleted: str = "Chat has been deleted",
) -> tuple[Chat | None, ServiceResult | None]:
    """
    Load a chat of any type.

    Order: existence -> deleted
    """
    chat = Chat.all_objects.filter(pk=chat_id).first()
    if chat is None:
        return None, handler.reject(not_found, ErrorCode.CHAT_NOT_FOUND)
    if chat.is_deleted:
        return None, handler.reject(deleted, ErrorCode.CHAT_DELETED)
    return chat, None

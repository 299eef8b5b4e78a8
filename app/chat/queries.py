"""
Read-side handlers for chats and messages.

GetChatQueryHandler returns one of several view dataclasses; the
``kind`` field tells clients (and serializers) which shape they got.

Queries:
    GetChatQueryHandler: Chat details for a member (or anyone, for public groups)
    GetGroupMembersQueryHandler: Paginated, filterable member list of a group
    GetMessagesQueryHandler: Newest-first page of messages with chat info
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import TYPE_CHECKING

from django.db.models import Case, IntegerField, Q, Value, When

from accounts.constants import DELETED_USER_NAME
from accounts.guards import ActorMessages, load_actor
from chat.guards import load_chat
from chat.models import Chat, ChatMember, ChatRole, ChatType, Message
from chat.validators import GetChatValidator, GetGroupMembersValidator, GetMessagesValidator
from core.error_codes import ErrorCode
from core.handlers import QueryHandler
from core.services import ServiceResult

if TYPE_CHECKING:
    from uuid import UUID

    from chat.commands import GetChatQuery, GetGroupMembersQuery, GetMessagesQuery


# =============================================================================
# Views
# =============================================================================


@dataclass(frozen=True)
class PersonalChatView:
    chat_id: UUID
    name: str
    message_count: int
    kind: str = "personal"


@dataclass(frozen=True)
class OneToOneChatView:
    chat_id: UUID
    user_id: UUID
    firstname: str
    lastname: str
    shortname: str | None
    bio: str
    kind: str = "one_to_one"


@dataclass(frozen=True)
class GroupChatView:
    chat_id: UUID
    name: str
    description: str
    shortname: str | None
    member_count: int
    is_private: bool
    kind: str = "group"


@dataclass(frozen=True)
class DeletedChatView:
    chat_id: UUID
    is_deleted: bool = True
    kind: str = "deleted"


ChatView = PersonalChatView | OneToOneChatView | GroupChatView | DeletedChatView


@dataclass(frozen=True)
class GroupMemberView:
    user_id: UUID
    firstname: str
    lastname: str
    role: str | None
    nickname: str
    is_deleted: bool
    joined_at: datetime


@dataclass(frozen=True)
class GroupMembersPage:
    members: list[GroupMemberView]
    total_count: int
    offset: int
    limit: int

    @property
    def has_next_page(self) -> bool:
        return self.offset + self.limit < self.total_count

    @property
    def has_previous_page(self) -> bool:
        return self.offset > 0


@dataclass(frozen=True)
class MessageView:
    message_id: int
    chat_id: UUID
    user_id: UUID
    fullname: str
    nickname: str | None
    text: str
    is_edited: bool
    timestamp: datetime


@dataclass(frozen=True)
class PaginationInfo:
    offset: int
    limit: int
    total_count: int
    has_next_page: bool
    next_cursor: int | None


@dataclass(frozen=True)
class ChatInfo:
    chat_id: UUID
    chat_name: str
    is_private: bool
    user_role: str | None


@dataclass(frozen=True)
class MessagePage:
    pagination: PaginationInfo
    chat_info: ChatInfo
    messages: list[MessageView] = field(default_factory=list)


# =============================================================================
# Handlers
# =============================================================================


class GetChatQueryHandler(QueryHandler):
    validator_class = GetChatValidator

    @classmethod
    def execute(cls, query: GetChatQuery) -> ServiceResult[ChatView]:
        user, failure = load_actor(cls, query.user_id)
        if failure:
            return failure
        chat = Chat.all_objects.select_related("mention").filter(pk=query.chat_id).first()
        if chat is None:
            return cls.reject("Chat not found", ErrorCode.CHAT_NOT_FOUND)
        if not chat.is_public_group and chat.membership_of(user) is None:
            return cls.reject("Access was denied", ErrorCode.CHAT_ACCESS_DENIED)
        if chat.is_deleted:
            return ServiceResult.success(DeletedChatView(chat_id=chat.id))

        if chat.type == ChatType.PERSONAL:
            return ServiceResult.success(
                PersonalChatView(
                    chat_id=chat.id,
                    name=chat.name,
                    message_count=chat.messages.count(),
                )
            )
        if chat.type == ChatType.ONE_TO_ONE:
            return ServiceResult.success(cls._one_to_one_view(chat, user))
        return ServiceResult.success(
            GroupChatView(
                chat_id=chat.id,
                name=chat.name,
                description=chat.description,
                shortname=chat.shortname,
                member_count=chat.members.count(),
                is_private=chat.is_private,
            )
        )

    @staticmethod
    def _one_to_one_view(chat: Chat, viewer) -> ChatView:
        other = (
            chat.members.exclude(user=viewer)
            .select_related("user", "user__mention")
            .first()
        )
        # A chat whose other side was deleted is shown as deleted
        if other is None or other.user.is_deleted:
            return DeletedChatView(chat_id=chat.id)
        return OneToOneChatView(
            chat_id=chat.id,
            user_id=other.user.id,
            firstname=other.user.firstname,
            lastname=other.user.lastname,
            shortname=other.user.shortname,
            bio=other.user.bio,
        )


class GetGroupMembersQueryHandler(QueryHandler):
    validator_class = GetGroupMembersValidator
    actor_messages = ActorMessages(
        not_found="User not found",
        not_verified="User is not verified",
        deleted="User is deleted",
    )

    @classmethod
    def execute(cls, query: GetGroupMembersQuery) -> ServiceResult[GroupMembersPage]:
        user, failure = load_actor(cls, query.user_id, cls.actor_messages)
        if failure:
            return failure
        chat = Chat.all_objects.filter(pk=query.chat_id).first()
        if chat is None:
            return cls.reject("Group not found", ErrorCode.GROUP_NOT_FOUND)
        if not chat.is_group:
            return cls.reject("Chat is not a group", ErrorCode.NOT_A_GROUP)
        if chat.is_deleted:
            return cls.reject("Group is deleted", ErrorCode.GROUP_DELETED)
        if chat.membership_of(user) is None:
            return cls.reject("You are not a member of this group", ErrorCode.NOT_A_MEMBER)

        members = ChatMember.objects.filter(chat=chat).select_related("user")
        if not query.include_deleted:
            members = members.filter(user__is_deleted=False)
        if query.role:
            members = members.filter(role=query.role)
        if query.search_term:
            term = query.search_term.strip()
            members = members.filter(
                Q(user__firstname__icontains=term)
                | Q(user__lastname__icontains=term)
                | Q(nickname__icontains=term)
            )

        total_count = members.count()
        members = members.annotate(
            creator_first=Case(
                When(role=ChatRole.CREATOR, then=Value(0)),
                default=Value(1),
                output_field=IntegerField(),
            )
        ).order_by("creator_first", "created_at")
        page = members[query.offset : query.offset + query.limit]

        views = [
            GroupMemberView(
                user_id=member.user.id,
                firstname=member.user.firstname,
                lastname=member.user.lastname,
                role=member.role,
                nickname=member.nickname,
                is_deleted=member.user.is_deleted,
                joined_at=member.created_at,
            )
            for member in page
        ]
        cls.get_logger().info(f"Returned {len(views)} of {total_count} members for group {chat.id}")
        return ServiceResult.success(
            GroupMembersPage(
                members=views,
                total_count=total_count,
                offset=query.offset,
                limit=query.limit,
            )
        )


class GetMessagesQueryHandler(QueryHandler):
    validator_class = GetMessagesValidator
    actor_messages = ActorMessages(deleted_first=True)

    @classmethod
    def execute(cls, query: GetMessagesQuery) -> ServiceResult[MessagePage]:
        user, failure = load_actor(cls, query.user_id, cls.actor_messages)
        if failure:
            return failure
        chat, failure = load_chat(cls, query.chat_id)
        if failure:
            return failure
        membership = chat.membership_of(user)
        if membership is None and not chat.is_public_group:
            return cls.reject("You are not a member of this chat", ErrorCode.CHAT_ACCESS_DENIED)

        messages = Message.objects.filter(chat=chat)
        total_count = messages.count()
        # One extra row tells whether another page exists
        rows = list(
            messages.select_related("sender").order_by("-created_at", "-id")[
                query.offset : query.offset + query.limit + 1
            ]
        )
        has_next_page = len(rows) > query.limit
        rows = rows[: query.limit]

        nicknames = dict(
            ChatMember.objects.filter(chat=chat).values_list("user_id", "nickname")
        )
        views = [
            MessageView(
                message_id=message.id,
                chat_id=chat.id,
                user_id=message.sender_id,
                fullname=(
                    DELETED_USER_NAME if message.sender.is_deleted else message.sender.full_name
                ),
                nickname=nicknames.get(message.sender_id) or None,
                text=message.text,
                is_edited=message.is_edited,
                timestamp=message.created_at,
            )
            for message in rows
        ]
        return ServiceResult.success(
            MessagePage(
                messages=views,
                pagination=PaginationInfo(
                    offset=query.offset,
                    limit=query.limit,
                    total_count=total_count,
                    has_next_page=has_next_page,
                    next_cursor=rows[-1].id if rows else None,
                ),
                chat_info=ChatInfo(
                    chat_id=chat.id,
                    chat_name=chat.name,
                    is_private=chat.is_private,
                    user_role=membership.role if membership else None,
                ),
            )
        )

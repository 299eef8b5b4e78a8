"""
Read-side handlers for accounts.

Queries:
    GetUserQueryHandler: Public profile of a user (placeholder if deleted)
    UserMembershipQueryHandler: Chats the user belongs to
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from accounts.constants import DELETED_USER_NAME
from accounts.guards import ActorMessages, load_actor
from accounts.models import User
from chat.models import Chat, ChatType
from core.error_codes import ErrorCode
from core.handlers import QueryHandler
from core.services import ServiceResult

if TYPE_CHECKING:
    from uuid import UUID

    from accounts.commands import GetUserQuery, UserMembershipQuery


@dataclass(frozen=True)
class UserView:
    user_id: UUID
    firstname: str
    lastname: str
    shortname: str | None
    bio: str
    is_deleted: bool = False


@dataclass(frozen=True)
class DeletedUserView:
    user_id: UUID
    is_deleted: bool = True
    display_name: str = DELETED_USER_NAME


@dataclass(frozen=True)
class ChatSummary:
    id: UUID
    type: str
    name: str


@dataclass(frozen=True)
class UserMembershipView:
    user_id: UUID
    chats: list[ChatSummary] = field(default_factory=list)


class GetUserQueryHandler(QueryHandler):
    @classmethod
    def execute(cls, query: GetUserQuery) -> ServiceResult[UserView | DeletedUserView]:
        user = User.all_objects.select_related("mention").filter(pk=query.user_id).first()
        if user is None:
            return cls.reject("User not found", ErrorCode.USER_NOT_FOUND)
        if user.is_deleted:
            return ServiceResult.success(DeletedUserView(user_id=user.id))

        return ServiceResult.success(
            UserView(
                user_id=user.id,
                firstname=user.firstname,
                lastname=user.lastname,
                shortname=user.shortname,
                bio=user.bio,
            )
        )


class UserMembershipQueryHandler(QueryHandler):
    actor_messages = ActorMessages(deleted_first=True)

    @classmethod
    def execute(cls, query: UserMembershipQuery) -> ServiceResult[UserMembershipView]:
        user, failure = load_actor(cls, query.user_id, cls.actor_messages)
        if failure:
            return failure

        chats = (
            Chat.objects.for_member(user)
            .prefetch_related("members__user")
            .order_by("created_at")
        )
        # One-to-one names are only known after _display_name, so sort here
        summaries = sorted(
            (
                ChatSummary(id=chat.id, type=chat.type, name=cls._display_name(chat, user))
                for chat in chats
            ),
            key=lambda summary: summary.name,
        )
        return ServiceResult.success(UserMembershipView(user_id=user.id, chats=summaries))

    @staticmethod
    def _display_name(chat: Chat, viewer: User) -> str:
        """One-to-one chats have no name of their own; show the other member."""
        if chat.type != ChatType.ONE_TO_ONE:
            return chat.name
        for member in chat.members.all():
            if member.user_id != viewer.id:
                return member.user.full_name
        return chat.name

"""
Command and query objects for the chat app.

Views build these from the request; handlers in services.py and
queries.py consume them.
"""

from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID


@dataclass(frozen=True)
class CreateChatCommand:
    first_user_id: UUID
    second_user_id: UUID


@dataclass(frozen=True)
class CreateGroupCommand:
    user_id: UUID
    name: str
    description: str | None = None
    is_private: bool = True
    shortname: str | None = None


@dataclass(frozen=True)
class UpdateGroupCommand:
    user_id: UUID
    group_id: UUID
    name: str | None = None
    description: str | None = None


@dataclass(frozen=True)
class DeleteGroupCommand:
    user_id: UUID
    group_id: UUID


@dataclass(frozen=True)
class MakePrivateGroupCommand:
    user_id: UUID
    group_id: UUID


@dataclass(frozen=True)
class MakePublicGroupCommand:
    user_id: UUID
    group_id: UUID
    shortname: str


@dataclass(frozen=True)
class UpdateGroupShortnameCommand:
    user_id: UUID
    group_id: UUID
    shortname: str


@dataclass(frozen=True)
class SendMessageCommand:
    user_id: UUID
    chat_id: UUID
    text: str


@dataclass(frozen=True)
class UpdateMessageCommand:
    user_id: UUID
    chat_id: UUID
    message_id: int
    text: str


@dataclass(frozen=True)
class DeleteMessageCommand:
    user_id: UUID
    chat_id: UUID
    message_id: int


@dataclass(frozen=True)
class GetChatQuery:
    user_id: UUID
    chat_id: UUID


@dataclass(frozen=True)
class GetGroupMembersQuery:
    user_id: UUID
    chat_id: UUID
    offset: int = 0
    limit: int = 50
    search_term: str | None = None
    role: str | None = None
    include_deleted: bool = False


@dataclass(frozen=True)
class GetMessagesQuery:
    user_id: UUID
    chat_id: UUID
    limit: int = 20
    offset: int = 0

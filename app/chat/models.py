"""
Chat system models.

This module defines the data models for the chat system supporting:
- Personal chats (one member, created when an account is completed)
- One-to-one chats between exactly two users
- Group chats, public (with a ChatMention) or private

Models:
    Chat: Container for members and messages
    ChatMember: Membership of a user in a chat, with group role
    Message: Text message sent in a chat

Design Decisions:
    - One-to-one uniqueness is enforced by a conditional unique index on
      ``pair_key`` (the two member ids in canonical order)
    - Roles apply to group chats only; other chats store role=NULL
    - Chats and messages are soft deleted and stay addressable by id
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from django.conf import settings
from django.db import models
from django.db.models import Q

from chat.constants import CHAT_CONFIG, MESSAGE_CONFIG
from chat.managers import ChatManager, ChatQuerySet
from core.managers import SoftDeleteManager, SoftDeleteQuerySet
from core.model_mixins import SoftDeleteMixin, UUIDPrimaryKeyMixin
from core.models import BaseModel

if TYPE_CHECKING:
    from uuid import UUID


class ChatType(models.TextChoices):
    """
    Type of chat.

    PERSONAL: The owner's own chat, exactly one member
    ONE_TO_ONE: Exactly two members, no roles
    GROUP: Any number of members, creator/member roles
    """

    PERSONAL = "personal", "Personal"
    ONE_TO_ONE = "one_to_one", "One to one"
    GROUP = "group", "Group"


class ChatRole(models.TextChoices):
    """
    Role within a group chat.

    CREATOR: Can update, delete, publish/privatise and rename the group
    MEMBER: Can read and send messages

    Note: Personal and one-to-one members have role=NULL
    """

    CREATOR = "creator", "Creator"
    MEMBER = "member", "Member"


def make_pair_key(first_user_id: UUID, second_user_id: UUID) -> str:
    """Canonical key of a one-to-one chat, independent of argument order."""
    low, high = sorted([str(first_user_id), str(second_user_id)])
    return f"{low}:{high}"


class Chat(UUIDPrimaryKeyMixin, SoftDeleteMixin, BaseModel):
    """
    A chat between one or more users.

    Invariants:
        - A group chat is public iff it owns a ChatMention (``mention``)
        - ``pair_key`` is set for one-to-one chats only and is unique
          among them
    """

    type = models.CharField(max_length=16, choices=ChatType.choices)
    name = models.CharField(max_length=CHAT_CONFIG.NAME_MAX_LENGTH, blank=True, default="")
    description = models.TextField(
        max_length=CHAT_CONFIG.DESCRIPTION_MAX_LENGTH,
        blank=True,
        default="",
    )
    is_private = models.BooleanField(default=True)
    pair_key = models.CharField(max_length=80, null=True, blank=True, editable=False)

    objects = ChatManager()
    all_objects = ChatQuerySet.as_manager()

    class Meta:
        ordering = ["-created_at"]
        constraints = [
            models.UniqueConstraint(
                fields=["pair_key"],
                condition=Q(type="one_to_one"),
                name="chat_unique_one_to_one_pair",
            ),
        ]

    def __str__(self) -> str:
        return f"Chat({self.type}, {self.name or self.pk})"

    @property
    def is_group(self) -> bool:
        return self.type == ChatType.GROUP

    @property
    def is_public_group(self) -> bool:
        return self.is_group and not self.is_private

    @property
    def shortname(self) -> str | None:
        mention = getattr(self, "mention", None)
        return mention.shortname if mention else None

    def membership_of(self, user) -> ChatMember | None:
        return self.members.filter(user=user).first()


class ChatMember(BaseModel):
    """
    Membership of a user in a chat.

    ``created_at`` is the join time. Unique per (chat, user).
    """

    chat = models.ForeignKey(Chat, on_delete=models.CASCADE, related_name="members")
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="chat_memberships",
    )
    role = models.CharField(max_length=16, choices=ChatRole.choices, null=True, blank=True)
    nickname = models.CharField(max_length=CHAT_CONFIG.NICKNAME_MAX_LENGTH, blank=True, default="")

    class Meta:
        ordering = ["created_at"]
        constraints = [
            models.UniqueConstraint(fields=["chat", "user"], name="chat_member_unique"),
        ]

    def __str__(self) -> str:
        return f"ChatMember(chat={self.chat_id}, user={self.user_id}, role={self.role})"

    @property
    def is_creator(self) -> bool:
        return self.role == ChatRole.CREATOR


class Message(SoftDeleteMixin, BaseModel):
    """
    Text message in a chat.

    ``edited_at`` is set whenever the author changes the text.
    """

    id = models.BigAutoField(primary_key=True)
    chat = models.ForeignKey(Chat, on_delete=models.CASCADE, related_name="messages")
    sender = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="messages",
    )
    text = models.TextField(max_length=MESSAGE_CONFIG.MAX_TEXT_LENGTH)
    edited_at = models.DateTimeField(null=True, blank=True)

    objects = SoftDeleteManager()
    all_objects = SoftDeleteQuerySet.as_manager()

    class Meta:
        ordering = ["-created_at", "-id"]
        indexes = [
            models.Index(fields=["chat", "-created_at"], name="message_chat_created_idx"),
        ]

    def __str__(self) -> str:
        return f"Message({self.pk}, chat={self.chat_id})"

    @property
    def is_edited(self) -> bool:
        return self.edited_at is not None

"""
Mention models.

A mention is a globally unique shortname (``@shortname``) owned either by
a user or by a public group chat. Both variants share one table through
multi-table inheritance, so a single case-insensitive unique index covers
users and chats together.

Models:
    - Mention: Shared shortname row
    - UserMention: Mention owned by a user (one per user)
    - ChatMention: Mention owned by a public group (one per chat)

Invariant:
    A group chat is public iff it owns a ChatMention.
"""

from __future__ import annotations

from django.conf import settings
from django.db import models
from django.db.models.functions import Lower

from core.model_mixins import UUIDPrimaryKeyMixin
from core.models import BaseModel
from mentions.constants import SHORTNAME_MAX_LENGTH


class MentionQuerySet(models.QuerySet):
    def exists_by_shortname(self, shortname: str) -> bool:
        """Case-insensitive existence check across users and chats."""
        return self.filter(shortname__iexact=shortname).exists()

    def get_by_shortname(self, shortname: str) -> Mention | None:
        return self.filter(shortname__iexact=shortname).first()


class Mention(UUIDPrimaryKeyMixin, BaseModel):
    shortname = models.CharField(max_length=SHORTNAME_MAX_LENGTH)

    objects = MentionQuerySet.as_manager()

    class Meta:
        ordering = ["shortname"]
        constraints = [
            models.UniqueConstraint(
                Lower("shortname"),
                name="mention_shortname_ci_unique",
            ),
        ]

    def __str__(self) -> str:
        return f"@{self.shortname}"


class UserMention(Mention):
    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="mention",
    )

    class Meta:
        ordering = ["shortname"]


class ChatMention(Mention):
    chat = models.OneToOneField(
        "chat.Chat",
        on_delete=models.CASCADE,
        related_name="mention",
    )

    class Meta:
        ordering = ["shortname"]

"""
Model mixins shared by the domain models.

    UUIDPrimaryKeyMixin: UUID primary key (users, chats, mentions, tokens)
    SoftDeleteMixin: is_deleted / deleted_at instead of row removal

Usage:
    class Chat(UUIDPrimaryKeyMixin, SoftDeleteMixin, BaseModel):
        objects = ChatManager()                       # hides deleted chats
        all_objects = ChatQuerySet.as_manager()       # sees every chat

Mixins go before BaseModel in the bases list.
"""

from __future__ import annotations

import uuid

from django.db import models
from django.utils import timezone


class UUIDPrimaryKeyMixin(models.Model):
    """
    Users and chats appear in URLs, so their ids must not be guessable
    or reveal record counts.
    """

    id = models.UUIDField(
        primary_key=True,
        default=uuid.uuid4,
        editable=False,
        help_text="Unique identifier for this record",
    )

    class Meta:
        abstract = True


class SoftDeleteMixin(models.Model):
    """
    Marks rows as deleted instead of removing them.

    A soft-deleted row stays addressable by id through ``all_objects`` so
    guards can report "deleted" rather than "not found", and history
    (messages of a deleted user, members of a deleted group) survives.
    """

    is_deleted = models.BooleanField(
        default=False,
        db_index=True,
        help_text="Whether this record has been soft deleted",
    )
    deleted_at = models.DateTimeField(
        null=True,
        blank=True,
        help_text="Timestamp when this record was soft deleted",
    )

    class Meta:
        abstract = True

    def soft_delete(self) -> None:
        """Mark deleted. A second call keeps the first ``deleted_at``."""
        if self.is_deleted:
            return
        self.is_deleted = True
        self.deleted_at = timezone.now()
        self.save(update_fields=["is_deleted", "deleted_at", "updated_at"])

    def restore(self) -> None:
        if not self.is_deleted:
            return
        self.is_deleted = False
        self.deleted_at = None
        self.save(update_fields=["is_deleted", "deleted_at", "updated_at"])

    def hard_delete(self) -> None:
        """Remove the row for good."""
        super().delete()

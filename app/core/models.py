"""
Abstract base model shared by accounts, mentions and chat.

Usage:
    from core.model_mixins import SoftDeleteMixin
    from core.models import BaseModel

    class Message(SoftDeleteMixin, BaseModel):
        text = models.CharField(max_length=1024)
"""

from __future__ import annotations

from django.db import models


class BaseModel(models.Model):
    """
    Timestamps for every table.

    ``created_at`` is indexed: message pages and member lists order by it.
    """

    created_at = models.DateTimeField(auto_now_add=True, db_index=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True
        ordering = ["-created_at"]

    def __str__(self) -> str:
        return f"{type(self).__name__}({self.pk})"

"""
QuerySet and manager for models using SoftDeleteMixin.

Each soft-deletable model declares two managers:

    objects = SoftDeleteManager()                 # deleted rows hidden
    all_objects = SoftDeleteQuerySet.as_manager() # every row

Guarded handlers load actors and targets through ``all_objects`` so a
deleted entity produces its "deleted" error instead of "not found".
"""

from __future__ import annotations

from django.db import models
from django.utils import timezone


class SoftDeleteQuerySet(models.QuerySet):
    """
    ``delete()`` is soft on querysets too; ``hard_delete()`` removes rows.

    No default filtering here, so ``all_objects`` can use it as is.
    """

    def delete(self) -> tuple[int, dict[str, int]]:
        """
        Soft delete the active rows of the queryset.

        Already deleted rows keep their original ``deleted_at``. The
        return value has the same shape as Django's ``delete()``.
        """
        count = self.filter(is_deleted=False).update(is_deleted=True, deleted_at=timezone.now())
        return count, {self.model._meta.label: count}

    def hard_delete(self) -> tuple[int, dict[str, int]]:
        return super().delete()

    def restore(self) -> int:
        return self.filter(is_deleted=True).update(is_deleted=False, deleted_at=None)

    def deleted(self) -> SoftDeleteQuerySet:
        return self.filter(is_deleted=True)

    def active(self) -> SoftDeleteQuerySet:
        return self.filter(is_deleted=False)


class SoftDeleteManager(models.Manager.from_queryset(SoftDeleteQuerySet)):
    """Default manager: hides soft-deleted rows."""

    def get_queryset(self) -> SoftDeleteQuerySet:
        return super().get_queryset().filter(is_deleted=False)

    def deleted(self) -> SoftDeleteQuerySet:
        return self._queryset_class(self.model, using=self._db).filter(is_deleted=True)

    def with_deleted(self) -> SoftDeleteQuerySet:
        return self._queryset_class(self.model, using=self._db)

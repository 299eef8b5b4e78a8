"""
Tests for SoftDeleteMixin in core/model_mixins.py.

This module tests:
- soft_delete() sets is_deleted and deleted_at
- restore() clears is_deleted and deleted_at
- hard_delete() permanently removes the record
- Idempotency of soft_delete and restore

Message is used as the concrete model; any SoftDeleteMixin model
behaves the same.
"""

from datetime import datetime, timedelta
from datetime import timezone as dt_timezone

import pytest
from django.utils import timezone
from freezegun import freeze_time

from chat.models import Message
from chat.tests.factories import MessageFactory


@pytest.fixture
def message(db):
    return MessageFactory()


# =============================================================================
# soft_delete()
# =============================================================================


class TestSoftDelete:
    def test_sets_flag_and_timestamp(self, message):
        with freeze_time("2026-03-01 12:00:00"):
            message.soft_delete()

        message.refresh_from_db()
        assert message.is_deleted is True
        assert message.deleted_at == datetime(2026, 3, 1, 12, tzinfo=dt_timezone.utc)

    def test_idempotent(self, message):
        """
        A second soft_delete keeps the first timestamp.

        Why it matters: deleted_at records when the entity went away.
        """
        message.soft_delete()
        first = message.deleted_at

        with freeze_time(timezone.now() + timedelta(hours=1)):
            message.soft_delete()

        message.refresh_from_db()
        assert message.deleted_at == first

    def test_row_still_exists(self, message):
        message.soft_delete()

        assert Message.all_objects.filter(pk=message.pk).exists()
        assert not Message.objects.filter(pk=message.pk).exists()


# =============================================================================
# restore() / hard_delete()
# =============================================================================


class TestRestore:
    def test_restore_clears_fields(self, message):
        message.soft_delete()

        message.restore()

        message.refresh_from_db()
        assert message.is_deleted is False
        assert message.deleted_at is None

    def test_restore_active_is_noop(self, message):
        updated_at = message.updated_at

        message.restore()

        message.refresh_from_db()
        assert message.updated_at == updated_at


class TestHardDelete:
    def test_removes_row(self, message):
        message.hard_delete()

        assert not Message.all_objects.filter(pk=message.pk).exists()

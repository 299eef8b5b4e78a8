"""
Tests for the shortname registry.

MentionService keeps a single namespace of shortnames shared by users
and public groups. These tests cover binding, renaming, releasing and
the savepoint that turns a lost race into the regular "taken" failure.
"""

from unittest.mock import patch

import pytest
from django.db import IntegrityError, transaction

from accounts.tests.factories import UserFactory
from chat.tests.factories import GroupFactory, PublicGroupFactory
from core.error_codes import ErrorCode
from mentions.constants import SHORTNAME_TAKEN_MESSAGE
from mentions.models import ChatMention, Mention, UserMention
from mentions.services import MentionService


# =============================================================================
# Model constraints
# =============================================================================


class TestMentionConstraints:
    def test_shortname_unique_case_insensitive(self, db):
        """
        The database refuses shortnames differing only by case.

        Why it matters: The index is the final arbiter under concurrency.
        """
        UserFactory(shortname="Ada_L")

        with pytest.raises(IntegrityError), transaction.atomic():
            UserMention.objects.create(user=UserFactory(), shortname="ada_l")

    def test_users_and_chats_share_namespace(self, db):
        UserFactory(shortname="team_room")

        with pytest.raises(IntegrityError), transaction.atomic():
            ChatMention.objects.create(chat=GroupFactory(), shortname="TEAM_ROOM")

    def test_str(self, db):
        assert str(Mention(shortname="ada_l")) == "@ada_l"


# =============================================================================
# MentionService
# =============================================================================


class TestIsTaken:
    def test_case_insensitive(self, db):
        UserFactory(shortname="Ada_L")

        assert MentionService.is_taken("ada_l") is True
        assert MentionService.is_taken("ADA_L") is True
        assert MentionService.is_taken("grace") is False


class TestBindToUser:
    def test_creates_mention(self, db):
        user = UserFactory()

        result = MentionService.bind_to_user(user, "ada_l")

        assert result.success
        assert UserMention.objects.get(user=user).shortname == "ada_l"

    def test_renames_existing_mention(self, db):
        """
        A second bind renames the same row.

        Why it matters: A user owns at most one shortname.
        """
        user = UserFactory(shortname="ada_l")
        mention_id = UserMention.objects.get(user=user).pk

        result = MentionService.bind_to_user(user, "countess")

        assert result.success
        assert result.data.pk == mention_id
        assert Mention.objects.count() == 1

    def test_taken_maps_to_failure(self, db):
        """
        A unique violation becomes SHORTNAME_ALREADY_TAKEN, not an error.

        Why it matters: Two requests racing for the same shortname must
        both get a well-formed answer.
        """
        UserFactory(shortname="ada_l")
        user = UserFactory()

        result = MentionService.bind_to_user(user, "ADA_L")

        assert not result.success
        assert result.error == SHORTNAME_TAKEN_MESSAGE
        assert result.error_code == ErrorCode.SHORTNAME_ALREADY_TAKEN
        assert not UserMention.objects.filter(user=user).exists()

    def test_unrelated_integrity_error_propagates(self, db):
        """Integrity errors not caused by a taken shortname are re-raised."""
        user = UserFactory()

        with patch.object(
            UserMention.objects, "create", side_effect=IntegrityError("fk violation")
        ):
            with pytest.raises(IntegrityError):
                MentionService.bind_to_user(user, "ada_l")


class TestBindToChat:
    def test_creates_and_renames(self, db):
        group = GroupFactory()

        first = MentionService.bind_to_chat(group, "team_room")
        second = MentionService.bind_to_chat(group, "team_hall")

        assert first.success and second.success
        assert ChatMention.objects.get(chat=group).shortname == "team_hall"

    def test_taken_by_user(self, db):
        UserFactory(shortname="team_room")

        result = MentionService.bind_to_chat(GroupFactory(), "team_room")

        assert result.error_code == ErrorCode.SHORTNAME_ALREADY_TAKEN


class TestRelease:
    def test_release_user(self, db):
        user = UserFactory(shortname="ada_l")

        assert MentionService.release_user(user) == 1
        assert not Mention.objects.exists()
        assert MentionService.release_user(user) == 0

    def test_release_chat(self, db):
        """
        Releasing frees the shortname for anyone.

        Why it matters: Private and deleted groups must not hold names.
        """
        group = PublicGroupFactory(shortname="team_room")

        assert MentionService.release_chat(group) == 1
        assert MentionService.is_taken("team_room") is False

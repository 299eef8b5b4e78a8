"""
Tests for chat models and managers.

This module tests:
- Chat: type helpers, pair key uniqueness, soft delete visibility
- ChatMember: one membership per user and chat
- Message: edit flag, soft delete
- ChatManager / ChatQuerySet: personal chat creation, one-to-one lookup
"""

from uuid import uuid4

import pytest
from django.db import IntegrityError, transaction
from django.utils import timezone

from accounts.tests.factories import UserFactory
from chat.constants import CHAT_CONFIG
from chat.models import Chat, ChatMember, ChatRole, ChatType, Message, make_pair_key
from chat.tests.factories import (
    ChatMemberFactory,
    GroupFactory,
    MessageFactory,
    OneToOneChatFactory,
    PublicGroupFactory,
)


# =============================================================================
# Chat
# =============================================================================


class TestChatModel:
    def test_pair_key_is_order_independent(self):
        """
        The pair key is the same whichever user starts the chat.

        Why it matters: Uniqueness of one-to-one chats relies on it.
        """
        first, second = uuid4(), uuid4()

        assert make_pair_key(first, second) == make_pair_key(second, first)

    def test_one_to_one_pair_is_unique(self, db):
        first, second = UserFactory(), UserFactory()
        OneToOneChatFactory(first_user=first, second_user=second)

        with pytest.raises(IntegrityError), transaction.atomic():
            Chat.objects.create(
                type=ChatType.ONE_TO_ONE,
                pair_key=make_pair_key(second.id, first.id),
            )

    def test_public_group_flags(self, db):
        group = PublicGroupFactory(shortname="team_room")

        assert group.is_group is True
        assert group.is_public_group is True
        assert group.shortname == "team_room"

    def test_private_group_has_no_shortname(self, db):
        group = GroupFactory()

        assert group.is_public_group is False
        assert group.shortname is None

    def test_membership_of(self, db):
        creator = UserFactory()
        group = GroupFactory(creator=creator)

        assert group.membership_of(creator).role == ChatRole.CREATOR
        assert group.membership_of(UserFactory()) is None

    def test_soft_delete_hides_chat(self, db):
        """
        Deleted chats disappear from Chat.objects but stay addressable.

        Why it matters: Guards report "deleted" rather than "not found".
        """
        group = GroupFactory()

        group.soft_delete()

        assert not Chat.objects.filter(pk=group.pk).exists()
        assert Chat.all_objects.get(pk=group.pk).deleted_at is not None

    def test_soft_delete_keeps_first_timestamp(self, db):
        group = GroupFactory()
        group.soft_delete()
        first_deleted_at = group.deleted_at

        group.soft_delete()

        assert group.deleted_at == first_deleted_at

    def test_restore(self, db):
        group = GroupFactory(is_deleted=True)

        group.restore()

        assert Chat.objects.filter(pk=group.pk).exists()


class TestChatMemberModel:
    def test_member_unique_per_chat(self, db):
        """A user can join a chat once."""
        user = UserFactory()
        group = GroupFactory(creator=user)

        with pytest.raises(IntegrityError), transaction.atomic():
            ChatMember.objects.create(chat=group, user=user)

    def test_one_to_one_members_have_no_role(self, db):
        chat = OneToOneChatFactory()

        assert set(chat.members.values_list("role", flat=True)) == {None}


class TestMessageModel:
    def test_is_edited(self, db):
        message = MessageFactory()
        assert message.is_edited is False

        message.edited_at = timezone.now()

        assert message.is_edited is True

    def test_queryset_delete_is_soft(self, db):
        """
        QuerySet.delete() soft deletes; hard_delete() removes rows.

        Why it matters: A bulk delete must never lose history by accident.
        """
        chat = GroupFactory()
        MessageFactory.create_batch(2, chat=chat)

        count, _ = Message.objects.filter(chat=chat).delete()

        assert count == 2
        assert Message.objects.filter(chat=chat).count() == 0
        assert Message.all_objects.filter(chat=chat).count() == 2

        Message.all_objects.filter(chat=chat).hard_delete()
        assert Message.all_objects.filter(chat=chat).count() == 0

    def test_default_ordering_newest_first(self, db):
        chat = GroupFactory()
        older = MessageFactory(chat=chat)
        newer = MessageFactory(chat=chat)

        assert list(Message.objects.filter(chat=chat)) == [newer, older]


# =============================================================================
# Managers
# =============================================================================


class TestChatManager:
    def test_create_personal(self, db):
        user = UserFactory()

        chat = Chat.objects.create_personal(user)

        assert chat.type == ChatType.PERSONAL
        assert chat.name == CHAT_CONFIG.PERSONAL_CHAT_NAME
        assert chat.membership_of(user).role is None

    def test_find_one_to_one_includes_deleted(self, db):
        """
        The lookup sees deleted chats through all_objects.

        Why it matters: A deleted one-to-one chat still blocks a new one.
        """
        first, second = UserFactory(), UserFactory()
        chat = OneToOneChatFactory(first_user=first, second_user=second, is_deleted=True)

        assert Chat.all_objects.find_one_to_one(second.id, first.id) == chat

    def test_for_member_and_groups(self, db):
        user = UserFactory()
        group = GroupFactory(creator=user)
        OneToOneChatFactory(first_user=user)
        GroupFactory()

        assert list(Chat.objects.for_member(user).groups()) == [group]

    def test_member_factory_defaults_to_member_role(self, db):
        assert ChatMemberFactory().role == ChatRole.MEMBER

"""
Tests for chat read-side handlers.

This module tests:
- GetChatQueryHandler: view shape per chat type, access rules
- GetGroupMembersQueryHandler: guards, filters, ordering, paging
- GetMessagesQueryHandler: newest-first pages, chat info, sender display
"""

from uuid import uuid4

import pytest

from accounts.constants import DELETED_USER_NAME
from accounts.tests.factories import UserFactory
from chat.commands import GetChatQuery, GetGroupMembersQuery, GetMessagesQuery
from chat.models import Chat, ChatRole
from chat.queries import (
    DeletedChatView,
    GetChatQueryHandler,
    GetGroupMembersQueryHandler,
    GetMessagesQueryHandler,
    GroupChatView,
    OneToOneChatView,
    PersonalChatView,
)
from chat.tests.factories import ChatMemberFactory, GroupFactory, MessageFactory
from core.error_codes import ErrorCode


# =============================================================================
# GetChat
# =============================================================================


class TestGetChatQueryHandler:
    def test_personal_chat(self, db, creator_user):
        chat = Chat.objects.create_personal(creator_user)
        MessageFactory.create_batch(2, chat=chat, sender=creator_user)

        result = GetChatQueryHandler.handle(
            GetChatQuery(user_id=creator_user.id, chat_id=chat.id)
        )

        assert result.data == PersonalChatView(
            chat_id=chat.id, name=chat.name, message_count=2
        )

    def test_one_to_one_shows_other_user(self, db, one_to_one_chat, creator_user, member_user):
        """
        A one-to-one chat is presented as the other participant.

        Why it matters: Both users see each other, never themselves.
        """
        result = GetChatQueryHandler.handle(
            GetChatQuery(user_id=creator_user.id, chat_id=one_to_one_chat.id)
        )

        assert isinstance(result.data, OneToOneChatView)
        assert result.data.user_id == member_user.id
        assert result.data.shortname == "kat_j"

    def test_one_to_one_with_deleted_user(self, db, one_to_one_chat, creator_user, member_user):
        member_user.soft_delete()

        result = GetChatQueryHandler.handle(
            GetChatQuery(user_id=creator_user.id, chat_id=one_to_one_chat.id)
        )

        assert result.data == DeletedChatView(chat_id=one_to_one_chat.id)

    def test_group(self, db, public_group, member_user):
        result = GetChatQueryHandler.handle(
            GetChatQuery(user_id=member_user.id, chat_id=public_group.id)
        )

        assert isinstance(result.data, GroupChatView)
        assert result.data.member_count == 2
        assert result.data.shortname == "compilers"
        assert result.data.kind == "group"

    def test_public_group_readable_by_outsider(self, db, public_group, outsider_user):
        result = GetChatQueryHandler.handle(
            GetChatQuery(user_id=outsider_user.id, chat_id=public_group.id)
        )

        assert result.success

    def test_private_group_denied_to_outsider(self, db, private_group, outsider_user):
        """
        Private chats are visible to members only.

        Why it matters: Existence of a private group isn't leaked as data.
        """
        result = GetChatQueryHandler.handle(
            GetChatQuery(user_id=outsider_user.id, chat_id=private_group.id)
        )

        assert result.error == "Access was denied"
        assert result.error_code == ErrorCode.CHAT_ACCESS_DENIED

    def test_deleted_group_for_member(self, db, deleted_group, creator_user):
        result = GetChatQueryHandler.handle(
            GetChatQuery(user_id=creator_user.id, chat_id=deleted_group.id)
        )

        assert result.data.kind == "deleted"

    def test_deleted_group_denied_to_outsider(self, db, deleted_group, outsider_user):
        result = GetChatQueryHandler.handle(
            GetChatQuery(user_id=outsider_user.id, chat_id=deleted_group.id)
        )

        assert result.error_code == ErrorCode.CHAT_ACCESS_DENIED

    def test_missing_chat(self, db, creator_user):
        result = GetChatQueryHandler.handle(GetChatQuery(user_id=creator_user.id, chat_id=uuid4()))

        assert result.error == "Chat not found"


# =============================================================================
# GetGroupMembers
# =============================================================================


class TestGetGroupMembersQueryHandler:
    def test_creator_listed_first(self, db, private_group, creator_user, member_user):
        """
        The creator heads the list, the rest follow in join order.

        Why it matters: Clients render the owner at the top.
        """
        late = UserFactory()
        ChatMemberFactory(chat=private_group, user=late)

        result = GetGroupMembersQueryHandler.handle(
            GetGroupMembersQuery(user_id=member_user.id, chat_id=private_group.id)
        )

        ids = [m.user_id for m in result.data.members]
        assert ids == [creator_user.id, member_user.id, late.id]
        assert result.data.members[0].role == ChatRole.CREATOR
        assert result.data.total_count == 3

    def test_deleted_users_hidden_by_default(self, db, private_group, creator_user):
        ChatMemberFactory(chat=private_group, user=UserFactory(is_deleted=True))

        hidden = GetGroupMembersQueryHandler.handle(
            GetGroupMembersQuery(user_id=creator_user.id, chat_id=private_group.id)
        )
        shown = GetGroupMembersQueryHandler.handle(
            GetGroupMembersQuery(
                user_id=creator_user.id, chat_id=private_group.id, include_deleted=True
            )
        )

        assert hidden.data.total_count == 2
        assert shown.data.total_count == 3

    def test_role_filter(self, db, private_group, creator_user, member_user):
        result = GetGroupMembersQueryHandler.handle(
            GetGroupMembersQuery(
                user_id=creator_user.id, chat_id=private_group.id, role=ChatRole.MEMBER
            )
        )

        assert [m.user_id for m in result.data.members] == [member_user.id]

    @pytest.mark.parametrize("term", ["katherine", "JOHNSON", "navig"])
    def test_search_matches_names_and_nickname(self, db, private_group, creator_user, member_user, term):
        result = GetGroupMembersQueryHandler.handle(
            GetGroupMembersQuery(user_id=creator_user.id, chat_id=private_group.id, search_term=term)
        )

        assert [m.user_id for m in result.data.members] == [member_user.id]

    def test_paging_flags(self, db, private_group, creator_user):
        ChatMemberFactory.create_batch(3, chat=private_group)

        result = GetGroupMembersQueryHandler.handle(
            GetGroupMembersQuery(user_id=creator_user.id, chat_id=private_group.id, offset=2, limit=2)
        )

        assert len(result.data.members) == 2
        assert result.data.total_count == 5
        assert result.data.has_next_page is True
        assert result.data.has_previous_page is True

    def test_outsider(self, db, private_group, outsider_user):
        result = GetGroupMembersQueryHandler.handle(
            GetGroupMembersQuery(user_id=outsider_user.id, chat_id=private_group.id)
        )

        assert result.error == "You are not a member of this group"

    def test_not_a_group(self, db, one_to_one_chat, creator_user):
        result = GetGroupMembersQueryHandler.handle(
            GetGroupMembersQuery(user_id=creator_user.id, chat_id=one_to_one_chat.id)
        )

        assert result.error == "Chat is not a group"

    def test_deleted_group(self, db, deleted_group, creator_user):
        result = GetGroupMembersQueryHandler.handle(
            GetGroupMembersQuery(user_id=creator_user.id, chat_id=deleted_group.id)
        )

        assert result.error == "Group is deleted"

    def test_unverified_actor(self, db, private_group, unverified_user):
        result = GetGroupMembersQueryHandler.handle(
            GetGroupMembersQuery(user_id=unverified_user.id, chat_id=private_group.id)
        )

        assert result.error == "User is not verified"

    def test_limit_bounds(self, db, private_group, creator_user):
        result = GetGroupMembersQueryHandler.handle(
            GetGroupMembersQuery(user_id=creator_user.id, chat_id=private_group.id, limit=0)
        )

        assert "limit" in result.errors


# =============================================================================
# GetMessages
# =============================================================================


class TestGetMessagesQueryHandler:
    def test_newest_first_with_chat_info(
        self, db, private_group, member_user, creator_message, member_message
    ):
        """
        Messages come newest first along with the caller's role.

        Why it matters: Clients render from the bottom and page upwards.
        """
        result = GetMessagesQueryHandler.handle(
            GetMessagesQuery(user_id=member_user.id, chat_id=private_group.id)
        )

        page = result.data
        assert [m.message_id for m in page.messages] == [member_message.id, creator_message.id]
        assert page.messages[0].nickname == "Navigator"
        assert page.messages[1].nickname == "Creator"
        assert page.chat_info.user_role == ChatRole.MEMBER
        assert page.chat_info.chat_name == "Compilers"

    def test_pagination(self, db, private_group, creator_user):
        messages = [MessageFactory(chat=private_group, sender=creator_user) for _ in range(3)]

        result = GetMessagesQueryHandler.handle(
            GetMessagesQuery(user_id=creator_user.id, chat_id=private_group.id, limit=2)
        )

        pagination = result.data.pagination
        assert pagination.total_count == 3
        assert pagination.has_next_page is True
        assert pagination.next_cursor == messages[1].id

    def test_last_page(self, db, private_group, creator_user, creator_message):
        result = GetMessagesQueryHandler.handle(
            GetMessagesQuery(user_id=creator_user.id, chat_id=private_group.id, offset=0, limit=5)
        )

        assert result.data.pagination.has_next_page is False
        assert result.data.pagination.next_cursor == creator_message.id

    def test_deleted_messages_skipped(self, db, private_group, creator_user, creator_message):
        MessageFactory(chat=private_group, sender=creator_user, is_deleted=True)

        result = GetMessagesQueryHandler.handle(
            GetMessagesQuery(user_id=creator_user.id, chat_id=private_group.id)
        )

        assert result.data.pagination.total_count == 1

    def test_deleted_sender_display_name(self, db, private_group, creator_user, member_user, member_message):
        member_user.soft_delete()

        result = GetMessagesQueryHandler.handle(
            GetMessagesQuery(user_id=creator_user.id, chat_id=private_group.id)
        )

        assert result.data.messages[0].fullname == DELETED_USER_NAME

    def test_empty_nickname_is_none(self, db, public_group, member_user):
        MessageFactory(chat=public_group, sender=member_user)

        result = GetMessagesQueryHandler.handle(
            GetMessagesQuery(user_id=member_user.id, chat_id=public_group.id)
        )

        assert result.data.messages[0].nickname is None

    def test_public_group_readable_by_outsider(self, db, public_group, outsider_user):
        result = GetMessagesQueryHandler.handle(
            GetMessagesQuery(user_id=outsider_user.id, chat_id=public_group.id)
        )

        assert result.success
        assert result.data.chat_info.user_role is None

    def test_private_chat_denied(self, db, private_group, outsider_user):
        result = GetMessagesQueryHandler.handle(
            GetMessagesQuery(user_id=outsider_user.id, chat_id=private_group.id)
        )

        assert result.error == "You are not a member of this chat"
        assert result.error_code == ErrorCode.CHAT_ACCESS_DENIED

    def test_deleted_chat(self, db, deleted_group, creator_user):
        result = GetMessagesQueryHandler.handle(
            GetMessagesQuery(user_id=creator_user.id, chat_id=deleted_group.id)
        )

        assert result.error == "Chat has been deleted"

    def test_deletion_reported_before_verification(self, db, private_group):
        """A deleted, unverified caller is reported as deleted."""
        actor = UserFactory(unverified=True, is_deleted=True)

        result = GetMessagesQueryHandler.handle(
            GetMessagesQuery(user_id=actor.id, chat_id=private_group.id)
        )

        assert result.error == "User account has been deleted"

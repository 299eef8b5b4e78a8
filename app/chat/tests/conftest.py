"""
Test configuration and fixtures for chat tests.

This module provides:
- User fixtures with different group roles
- Chat fixtures (private and public groups, one-to-one)
- Message fixtures
- API client helpers for authenticated requests

Usage:
    def test_example(private_group, creator_client):
        response = creator_client.get(f"/api/v1/chats/{private_group.id}/")
        assert response.status_code == 200
"""

import pytest
from rest_framework.test import APIClient

from accounts.tests.factories import UserFactory
from accounts.tokens import issue_access_token
from chat.tests.factories import (
    ChatMemberFactory,
    GroupFactory,
    MessageFactory,
    OneToOneChatFactory,
    PublicGroupFactory,
)


# =============================================================================
# User Fixtures
# =============================================================================


@pytest.fixture
def creator_user(db):
    """Verified user who creates the test groups."""
    return UserFactory(firstname="Grace", lastname="Hopper", shortname="grace_h")


@pytest.fixture
def member_user(db):
    """Verified user who is a plain member of the test groups."""
    return UserFactory(firstname="Katherine", lastname="Johnson", shortname="kat_j")


@pytest.fixture
def outsider_user(db):
    """Verified user who belongs to no test chat."""
    return UserFactory(firstname="Edsger", lastname="Dijkstra")


@pytest.fixture
def unverified_user(db):
    """Confirmed email, account not completed."""
    return UserFactory(unverified=True)


@pytest.fixture
def deleted_user(db):
    """Soft-deleted verified user."""
    return UserFactory(is_deleted=True)


# =============================================================================
# Chat Fixtures
# =============================================================================


@pytest.fixture
def private_group(db, creator_user, member_user):
    """Private group: creator_user (creator) and member_user (member)."""
    group = GroupFactory(creator=creator_user, name="Compilers", description="Parsing")
    ChatMemberFactory(chat=group, user=member_user, nickname="Navigator")
    return group


@pytest.fixture
def public_group(db, creator_user, member_user):
    """Public group @compilers: creator_user (creator) and member_user (member)."""
    group = PublicGroupFactory(creator=creator_user, name="Compilers", shortname="compilers")
    ChatMemberFactory(chat=group, user=member_user)
    return group


@pytest.fixture
def deleted_group(db, creator_user):
    """Soft-deleted group created by creator_user."""
    return GroupFactory(creator=creator_user, is_deleted=True)


@pytest.fixture
def one_to_one_chat(db, creator_user, member_user):
    """One-to-one chat between creator_user and member_user."""
    return OneToOneChatFactory(first_user=creator_user, second_user=member_user)


# =============================================================================
# Message Fixtures
# =============================================================================


@pytest.fixture
def creator_message(db, private_group, creator_user):
    """Message sent by creator_user in private_group."""
    return MessageFactory(chat=private_group, sender=creator_user, text="First!")


@pytest.fixture
def member_message(db, private_group, member_user):
    """Message sent by member_user in private_group."""
    return MessageFactory(chat=private_group, sender=member_user, text="Hello")


# =============================================================================
# API Client Fixtures
# =============================================================================


@pytest.fixture
def api_client():
    """Unauthenticated API client."""
    return APIClient()


@pytest.fixture
def authenticated_client_factory(db):
    """
    Factory to create authenticated clients for any user.

    Usage:
        def test_example(authenticated_client_factory, some_user):
            client = authenticated_client_factory(some_user)
            response = client.post("/api/v1/chats/groups/", {...})
    """

    def _make_client(user):
        client = APIClient()
        client.credentials(HTTP_AUTHORIZATION=f"Bearer {issue_access_token(user)}")
        return client

    return _make_client


@pytest.fixture
def creator_client(authenticated_client_factory, creator_user):
    """API client authenticated as the creator user."""
    return authenticated_client_factory(creator_user)


@pytest.fixture
def member_client(authenticated_client_factory, member_user):
    """API client authenticated as the member user."""
    return authenticated_client_factory(member_user)


@pytest.fixture
def outsider_client(authenticated_client_factory, outsider_user):
    """API client authenticated as a user outside every test chat."""
    return authenticated_client_factory(outsider_user)

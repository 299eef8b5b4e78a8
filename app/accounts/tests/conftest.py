"""
Test configuration and fixtures for accounts tests.

This module provides:
- User fixtures for every account state (registered, confirmed,
  verified, deleted)
- Refresh token fixtures with known raw values
- API client helpers for authenticated requests

Usage:
    def test_example(user_client):
        response = user_client.get("/api/v1/users/me/")
        assert response.status_code == 200
"""

import pytest
from rest_framework.test import APIClient

from accounts.tests.factories import (
    PendingConfirmationUserFactory,
    RefreshTokenFactory,
    UserFactory,
)
from accounts.tokens import issue_access_token, issue_profile_completion_token


# =============================================================================
# User Fixtures
# =============================================================================


@pytest.fixture
def user(db):
    """Verified user owning the shortname ``ada_l``."""
    return UserFactory(firstname="Ada", lastname="Lovelace", shortname="ada_l")


@pytest.fixture
def other_user(db):
    """Another verified user."""
    return UserFactory(firstname="Alan", lastname="Turing", shortname="alan_t")


@pytest.fixture
def pending_user(db):
    """Registered user waiting for email confirmation (code A1B2C3)."""
    return PendingConfirmationUserFactory(email="pending@gmail.com")


@pytest.fixture
def confirmed_user(db):
    """Email confirmed, account not completed yet."""
    return UserFactory(unverified=True, email="confirmed@gmail.com")


@pytest.fixture
def deleted_user(db):
    """Soft-deleted verified user."""
    return UserFactory(is_deleted=True)


# =============================================================================
# Refresh Token Fixtures
# =============================================================================


@pytest.fixture
def refresh_token(db, user):
    """Live refresh token of ``user``; raw value is ``live-refresh``."""
    return RefreshTokenFactory(user=user, raw_token="live-refresh")


# =============================================================================
# API Client Fixtures
# =============================================================================


@pytest.fixture
def api_client():
    """Unauthenticated API client for public endpoints."""
    return APIClient()


@pytest.fixture
def authenticated_client_factory(db):
    """
    Factory to create authenticated clients for any user.

    Usage:
        def test_example(authenticated_client_factory, some_user):
            client = authenticated_client_factory(some_user)
            response = client.get("/api/v1/users/me/")
    """

    def _make_client(user):
        client = APIClient()
        client.credentials(HTTP_AUTHORIZATION=f"Bearer {issue_access_token(user)}")
        return client

    return _make_client


@pytest.fixture
def user_client(authenticated_client_factory, user):
    """API client authenticated as ``user``."""
    return authenticated_client_factory(user)


@pytest.fixture
def completion_client(confirmed_user):
    """API client holding the profile-completion token of ``confirmed_user``."""
    client = APIClient()
    client.credentials(
        HTTP_AUTHORIZATION=f"Bearer {issue_profile_completion_token(confirmed_user)}"
    )
    return client

"""
Tests for accounts models and managers.

This module tests:
- User: creation through UserManager, soft delete visibility, display name
- RefreshToken: revocation and the cleanup lookups of RefreshTokenQuerySet

Test Organization:
    - Each model has its own test class
    - Tests use descriptive names following the pattern: test_<scenario>_<expected_outcome>

Dependencies:
    - freezegun for expiry checks
    - Factory Boy fixtures from conftest.py
"""

from datetime import timedelta

import pytest
from django.db import IntegrityError
from django.utils import timezone
from freezegun import freeze_time

from accounts.constants import DELETED_USER_NAME
from accounts.models import RefreshToken, User
from accounts.tests.factories import RefreshTokenFactory, UserFactory


# =============================================================================
# User Model Tests
# =============================================================================


class TestUserModel:
    """Tests for the User model and UserManager."""

    def test_create_user_requires_email(self, db):
        """
        UserManager refuses to create a user without an email.

        Why it matters: Email is the login identifier.
        """
        with pytest.raises(ValueError):
            User.objects.create_user(email="", password="TestPass123", firstname="Ada")

    def test_create_user_hashes_password(self, db):
        """
        Passwords are stored hashed, never in clear.

        Why it matters: A leaked database must not leak passwords.
        """
        user = User.objects.create_user(
            email="ada@gmail.com", password="TestPass123", firstname="Ada"
        )

        assert user.password != "TestPass123"
        assert user.check_password("TestPass123")

    def test_new_user_is_unconfirmed_and_unverified(self, db):
        """
        A registered account starts unconfirmed and not completed.

        Why it matters: Chat operations require a verified account.
        """
        user = User.objects.create_user(
            email="ada@gmail.com", password="TestPass123", firstname="Ada"
        )

        assert user.email_confirmed is False
        assert user.is_verified is False
        assert user.is_deleted is False

    def test_email_must_be_unique(self, db, user):
        """
        Two accounts cannot share an email.

        Why it matters: Login would be ambiguous.
        """
        with pytest.raises(IntegrityError):
            User.objects.create_user(email=user.email, password="TestPass123", firstname="X")

    def test_create_superuser_is_confirmed_and_verified(self, db):
        """
        Superusers skip the confirmation flow.

        Why it matters: Admins are created from the command line, not by email.
        """
        admin = User.objects.create_superuser(email="admin@gmail.com", password="AdminPass1")

        assert admin.is_staff and admin.is_superuser
        assert admin.email_confirmed and admin.is_verified

    def test_default_manager_hides_deleted_users(self, db, user, deleted_user):
        """
        User.objects excludes soft-deleted users, all_objects keeps them.

        Why it matters: Deleted users must stay addressable by id.
        """
        assert list(User.objects.filter(pk=deleted_user.pk)) == []
        assert User.all_objects.filter(pk=deleted_user.pk).exists()
        assert User.objects.filter(pk=user.pk).exists()

    def test_full_name_of_deleted_user_is_placeholder(self, db):
        """
        A deleted user is displayed as "Deleted User".

        Why it matters: Message authors keep a readable name after deletion.
        """
        user = UserFactory(firstname="Ada", lastname="Lovelace")
        assert user.full_name == "Ada Lovelace"

        user.soft_delete()

        assert user.full_name == DELETED_USER_NAME

    def test_shortname_reads_user_mention(self, db, user):
        """The shortname property reads the bound UserMention."""
        assert user.shortname == "ada_l"

    def test_shortname_is_none_without_mention(self, db):
        """Users without a mention have no shortname."""
        assert UserFactory().shortname is None

    @freeze_time("2024-05-01 12:00:00")
    def test_confirmation_code_expired_after_expiry(self, db):
        """
        The confirmation code is valid strictly before its expiry.

        Why it matters: Codes are short-lived secrets.
        """
        user = UserFactory(
            unconfirmed=True,
            email_confirmation_token="ABC123",
            email_confirmation_token_expiry=timezone.now() + timedelta(minutes=5),
        )
        assert user.confirmation_code_expired() is False

        with freeze_time("2024-05-01 12:05:00"):
            assert user.confirmation_code_expired() is True


# =============================================================================
# RefreshToken Model Tests
# =============================================================================


class TestRefreshTokenModel:
    """Tests for RefreshToken and RefreshTokenQuerySet."""

    def test_get_by_token_finds_row_by_hash(self, db, refresh_token):
        """
        Raw tokens are looked up through their hash.

        Why it matters: Only the hash is stored.
        """
        assert RefreshToken.objects.get_by_token("live-refresh") == refresh_token
        assert RefreshToken.objects.get_by_token("unknown") is None

    def test_revoke_sets_flag_and_timestamp(self, db, refresh_token):
        """Revoking marks the row and records when."""
        assert refresh_token.revoke() is True

        refresh_token.refresh_from_db()
        assert refresh_token.is_revoked is True
        assert refresh_token.revoked_at is not None

    def test_revoke_is_idempotent(self, db, refresh_token):
        """
        A second revoke writes nothing.

        Why it matters: Logout may be retried.
        """
        refresh_token.revoke()
        first_revoked_at = refresh_token.revoked_at

        assert refresh_token.revoke() is False
        refresh_token.refresh_from_db()
        assert refresh_token.revoked_at == first_revoked_at

    def test_expired_and_active_lookups(self, db, user):
        """expired() and active() partition tokens by expiry and revocation."""
        live = RefreshTokenFactory(user=user)
        expired = RefreshTokenFactory(user=user, expired=True)
        revoked = RefreshTokenFactory(user=user, revoked=True)

        assert set(RefreshToken.objects.expired()) == {expired}
        assert set(RefreshToken.objects.active()) == {live}
        assert revoked.is_expired is False

    def test_revoked_before_cutoff(self, db, user):
        """revoked_before() only returns tokens revoked before the cutoff."""
        old = RefreshTokenFactory(
            user=user,
            is_revoked=True,
            revoked_at=timezone.now() - timedelta(days=40),
        )
        RefreshTokenFactory(user=user, revoked=True)

        cutoff = timezone.now() - timedelta(days=30)
        assert list(RefreshToken.objects.revoked_before(cutoff)) == [old]

    def test_revoke_all_for_user(self, db, user, other_user):
        """
        Every live token of the user is revoked, other users untouched.

        Why it matters: Deleting an account must end all its sessions.
        """
        RefreshTokenFactory(user=user)
        RefreshTokenFactory(user=user)
        foreign = RefreshTokenFactory(user=other_user)

        assert RefreshToken.objects.revoke_all_for_user(user) == 2
        foreign.refresh_from_db()
        assert foreign.is_revoked is False

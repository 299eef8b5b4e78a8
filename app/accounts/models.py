"""
Accounts models.

This module defines:
- User: Email-based account with profile fields and confirmation state
- RefreshToken: Opaque refresh token record (stored as a hash)

Related files:
    - managers.py: UserManager and RefreshTokenQuerySet
    - services.py: Account command handlers
    - tokens.py: Access/refresh token issuance

Security:
    - Passwords hashed with Django's configured hasher
    - Refresh tokens stored as SHA-256 hashes, never in clear
"""

from __future__ import annotations

from django.conf import settings
from django.contrib.auth.models import AbstractBaseUser, PermissionsMixin
from django.db import models
from django.utils import timezone

from accounts.constants import BIO_MAX_LENGTH, DELETED_USER_NAME, NAME_MAX_LENGTH
from accounts.managers import RefreshTokenQuerySet, UserManager
from core.model_mixins import SoftDeleteMixin, UUIDPrimaryKeyMixin
from core.models import BaseModel


class User(AbstractBaseUser, PermissionsMixin, UUIDPrimaryKeyMixin, SoftDeleteMixin, BaseModel):
    """
    Account of a chat participant.

    Lifecycle:
        registered -> email_confirmed -> is_verified (account completed)
        Any state -> is_deleted (soft delete, still addressable by id)

    Fields:
        email: Login identifier, unique
        firstname, lastname, bio: Public profile
        email_confirmed: Set once the confirmation code was accepted
        email_confirmation_token: Pending 6-character code (cleared on use)
        is_verified: Set when the account is completed with a shortname
    """

    email = models.EmailField(
        unique=True,
        max_length=254,
        help_text="User's email address (login identifier)",
    )
    firstname = models.CharField(max_length=NAME_MAX_LENGTH)
    lastname = models.CharField(max_length=NAME_MAX_LENGTH, blank=True, default="")
    bio = models.TextField(max_length=BIO_MAX_LENGTH, blank=True, default="")

    email_confirmed = models.BooleanField(default=False)
    email_confirmation_token = models.CharField(max_length=6, blank=True, default="")
    email_confirmation_token_expiry = models.DateTimeField(null=True, blank=True)
    is_verified = models.BooleanField(
        default=False,
        help_text="Whether the account has been completed (shortname chosen)",
    )

    is_active = models.BooleanField(default=True)
    is_staff = models.BooleanField(default=False)

    USERNAME_FIELD = "email"
    REQUIRED_FIELDS = ["firstname"]

    objects = UserManager()
    all_objects = models.Manager()

    class Meta:
        verbose_name = "user"
        verbose_name_plural = "users"
        ordering = ["-created_at"]
        base_manager_name = "all_objects"

    def __str__(self) -> str:
        return self.email

    @property
    def full_name(self) -> str:
        if self.is_deleted:
            return DELETED_USER_NAME
        return f"{self.firstname} {self.lastname}".strip()

    @property
    def shortname(self) -> str | None:
        mention = getattr(self, "mention", None)
        return mention.shortname if mention else None

    def has_pending_confirmation(self) -> bool:
        return bool(self.email_confirmation_token)

    def confirmation_code_expired(self) -> bool:
        expiry = self.email_confirmation_token_expiry
        return expiry is None or expiry <= timezone.now()


class RefreshToken(UUIDPrimaryKeyMixin, BaseModel):
    """
    Opaque refresh token issued at login.

    Revoked on logout or rotation, expired once ``expires_at`` passes.
    Expired and long-revoked rows are removed by the cleanup tasks.
    """

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="refresh_tokens",
    )
    token_hash = models.CharField(max_length=64, unique=True)
    is_revoked = models.BooleanField(default=False)
    revoked_at = models.DateTimeField(null=True, blank=True)
    user_agent = models.CharField(max_length=512, blank=True, default="")
    device_id = models.CharField(max_length=128, blank=True, default="")
    ip_address = models.GenericIPAddressField(null=True, blank=True)
    expires_at = models.DateTimeField(db_index=True)

    objects = RefreshTokenQuerySet.as_manager()

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["user", "is_revoked"], name="refresh_user_revoked_idx"),
        ]

    def __str__(self) -> str:
        return f"RefreshToken(user={self.user_id}, revoked={self.is_revoked})"

    @property
    def is_expired(self) -> bool:
        return self.expires_at <= timezone.now()

    def revoke(self) -> bool:
        """
        Revoke this token.

        Returns:
            False if the token was already revoked (nothing written)
        """
        if self.is_revoked:
            return False
        self.is_revoked = True
        self.revoked_at = timezone.now()
        self.save(update_fields=["is_revoked", "revoked_at", "updated_at"])
        return True

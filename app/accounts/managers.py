"""
Managers for the accounts models.

- UserManager: email-based user creation, excludes soft-deleted users
- RefreshTokenQuerySet: lookups and sweeps over stored refresh tokens

Security:
    - Passwords are hashed via set_password()
    - Refresh tokens are looked up by their SHA-256 hash only
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from django.contrib.auth.models import BaseUserManager
from django.db import models
from django.utils import timezone

from core.helpers import hash_string
from core.managers import SoftDeleteQuerySet

if TYPE_CHECKING:
    from datetime import datetime


class UserManager(BaseUserManager.from_queryset(SoftDeleteQuerySet)):
    """
    Default manager for User: email-based creation, hides deleted users.

    Use ``User.all_objects`` to address deleted users by id.

    Usage:
        user = User.objects.create_user(
            email="user@gmail.com",
            password="securepassword",
            firstname="Ada",
        )
    """

    def get_queryset(self) -> SoftDeleteQuerySet:
        return super().get_queryset().filter(is_deleted=False)

    def create_user(self, email, password=None, **extra_fields):
        """
        Create and save a regular user with the given email and password.

        Raises:
            ValueError: If email is not provided
        """
        if not email:
            raise ValueError("The Email field must be set")

        email = self.normalize_email(email)
        extra_fields.setdefault("is_staff", False)
        extra_fields.setdefault("is_superuser", False)

        user = self.model(email=email, **extra_fields)
        if password:
            user.set_password(password)
        else:
            user.set_unusable_password()

        user.save(using=self._db)
        return user

    def create_superuser(self, email, password=None, **extra_fields):
        """
        Create and save a superuser. Superusers skip email confirmation.

        Raises:
            ValueError: If is_staff or is_superuser is not True
        """
        extra_fields.setdefault("is_staff", True)
        extra_fields.setdefault("is_superuser", True)
        extra_fields.setdefault("email_confirmed", True)
        extra_fields.setdefault("is_verified", True)
        extra_fields.setdefault("firstname", "Admin")

        if extra_fields.get("is_staff") is not True:
            raise ValueError("Superuser must have is_staff=True.")
        if extra_fields.get("is_superuser") is not True:
            raise ValueError("Superuser must have is_superuser=True.")

        return self.create_user(email, password, **extra_fields)


class RefreshTokenQuerySet(models.QuerySet):
    """
    Lookups over stored refresh tokens.

    Expiry is checked at read time; rows are only removed by the
    cleanup tasks.
    """

    def get_by_token(self, raw_token: str):
        """Return the stored row for a raw token, or None."""
        return self.select_related("user").filter(token_hash=hash_string(raw_token)).first()

    def active(self) -> RefreshTokenQuerySet:
        return self.filter(is_revoked=False, expires_at__gt=timezone.now())

    def expired(self) -> RefreshTokenQuerySet:
        return self.filter(expires_at__lte=timezone.now())

    def revoked_before(self, cutoff: datetime) -> RefreshTokenQuerySet:
        return self.filter(is_revoked=True, revoked_at__lt=cutoff)

    def revoke_all_for_user(self, user) -> int:
        """Revoke every live token of ``user``. Returns the number revoked."""
        return self.filter(user=user, is_revoked=False).update(
            is_revoked=True,
            revoked_at=timezone.now(),
        )

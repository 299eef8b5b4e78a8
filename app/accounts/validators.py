"""
Validators for account commands.

Each validator is a DRF Serializer run by CommandHandler.validate()
over the command's fields before the handler executes. Field names
match the command dataclasses.
"""

from __future__ import annotations

import re

from django.conf import settings
from django.core.validators import RegexValidator
from rest_framework import serializers

from accounts.constants import (
    BIO_MAX_LENGTH,
    CONFIRMATION_CODE_LENGTH,
    FORBIDDEN_BIO_PATTERNS,
    NAME_MAX_LENGTH,
    NAME_PATTERN,
    PASSWORD_MAX_LENGTH,
    PASSWORD_MIN_LENGTH,
)
from mentions.validators import ShortnameField

_FORBIDDEN_BIO_RE = re.compile("|".join(FORBIDDEN_BIO_PATTERNS), re.IGNORECASE)
_CONSECUTIVE_SPECIALS_RE = re.compile(r"['\-\s]{2,}")


class NameField(serializers.CharField):
    """Person name: letters, spaces, apostrophes and hyphens."""

    def __init__(self, **kwargs):
        kwargs.setdefault("max_length", NAME_MAX_LENGTH)
        super().__init__(**kwargs)
        self.validators.append(
            RegexValidator(
                NAME_PATTERN,
                message="Name may contain only letters, spaces, apostrophes and hyphens",
                code="INVALID_NAME",
            )
        )

    def to_internal_value(self, data):
        value = super().to_internal_value(data)
        if _CONSECUTIVE_SPECIALS_RE.search(value):
            raise serializers.ValidationError(
                "Name cannot contain consecutive special characters",
                code="INVALID_NAME",
            )
        if value[:1] in "'-" or value[-1:] in "'-":
            raise serializers.ValidationError(
                "Name cannot start or end with a special character",
                code="INVALID_NAME",
            )
        return value


class BioField(serializers.CharField):
    def __init__(self, **kwargs):
        kwargs.setdefault("max_length", BIO_MAX_LENGTH)
        kwargs.setdefault("required", False)
        kwargs.setdefault("allow_blank", True)
        kwargs.setdefault("allow_null", True)
        super().__init__(**kwargs)

    def to_internal_value(self, data):
        value = super().to_internal_value(data)
        if _FORBIDDEN_BIO_RE.search(value):
            raise serializers.ValidationError(
                "Bio contains forbidden content",
                code="INVALID_CONTENT",
            )
        return value


class AllowedEmailField(serializers.EmailField):
    """Email restricted to the configured provider domains, lowercased."""

    def to_internal_value(self, data):
        value = super().to_internal_value(data).lower()
        domain = value.rsplit("@", 1)[-1]
        if domain not in settings.ALLOWED_EMAIL_DOMAINS:
            raise serializers.ValidationError(
                "Allowed only Gmail, Yahoo, Yandex and Mail emails",
                code="EMAIL_DOMAIN_NOT_ALLOWED",
            )
        return value


class CreateAccountValidator(serializers.Serializer):
    firstname = NameField(min_length=1)
    lastname = NameField(required=False, allow_blank=True, allow_null=True)
    email = AllowedEmailField(max_length=254)
    password = serializers.CharField(
        min_length=PASSWORD_MIN_LENGTH,
        max_length=PASSWORD_MAX_LENGTH,
        trim_whitespace=False,
    )


class UpdateConfirmEmailTokenValidator(serializers.Serializer):
    email = AllowedEmailField(max_length=254)


class ConfirmEmailValidator(serializers.Serializer):
    email = serializers.EmailField(max_length=254)
    code = serializers.RegexField(
        rf"^[0-9A-Fa-f]{{{CONFIRMATION_CODE_LENGTH}}}$",
        error_messages={"invalid": "Confirmation code must be 6 hexadecimal characters"},
    )

    def validate_email(self, value: str) -> str:
        return value.lower()


class CompleteAccountValidator(serializers.Serializer):
    user_id = serializers.UUIDField()
    shortname = ShortnameField()
    bio = BioField()


class LoginValidator(serializers.Serializer):
    email = serializers.EmailField(max_length=254)
    password = serializers.CharField(trim_whitespace=False, max_length=128)

    def validate_email(self, value: str) -> str:
        return value.lower()


class RefreshTokenValidator(serializers.Serializer):
    refresh_token = serializers.CharField(
        error_messages={
            "required": "Refresh Token is required",
            "blank": "Refresh Token is required",
            "null": "Refresh Token is required",
        },
    )


class LogoutValidator(RefreshTokenValidator):
    pass


class UpdateUserValidator(serializers.Serializer):
    user_id = serializers.UUIDField()
    firstname = NameField(required=False, allow_null=True)
    lastname = NameField(required=False, allow_null=True, allow_blank=True)
    bio = BioField()

    def validate(self, attrs):
        if all(attrs.get(name) is None for name in ("firstname", "lastname", "bio")):
            raise serializers.ValidationError(
                "At least one field must be provided for update",
                code="REQUEST_EMPTY",
            )
        return attrs


class UpdateUserShortnameValidator(serializers.Serializer):
    user_id = serializers.UUIDField()
    shortname = ShortnameField()

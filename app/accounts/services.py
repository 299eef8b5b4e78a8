"""
Account command handlers.

Each handler follows the guarded transition shape of core.handlers:
validate, load, guards in fixed order, mutate, commit. Guard messages
are part of the public API and must not change.

Handlers:
    CreateAccountHandler: Register and queue a confirmation code
    UpdateConfirmEmailTokenHandler: Issue a fresh confirmation code
    ConfirmEmailHandler: Accept the code, return a profile-completion token
    CompleteAccountHandler: Claim a shortname and verify the account
    LoginHandler: Exchange credentials for an access/refresh token pair
    RefreshTokenHandler: Rotate a refresh token
    LogoutHandler: Revoke a refresh token (idempotent)
    UpdateUserHandler: Change profile fields
    UpdateUserShortnameHandler: Rename the user's mention
    DeleteAccountHandler: Soft delete the account

Related files:
    - commands.py: Command dataclasses
    - validators.py: Field validation run before each handler
    - queries.py: Read-side handlers
"""

from __future__ import annotations

import secrets
from dataclasses import dataclass
from datetime import timedelta
from typing import TYPE_CHECKING

from django.conf import settings
from django.db import transaction
from django.utils import timezone

from accounts.guards import ActorMessages, load_actor
from accounts.models import RefreshToken, User
from accounts.tokens import issue_profile_completion_token, issue_token_pair
from accounts.validators import (
    CompleteAccountValidator,
    ConfirmEmailValidator,
    CreateAccountValidator,
    LoginValidator,
    LogoutValidator,
    RefreshTokenValidator,
    UpdateConfirmEmailTokenValidator,
    UpdateUserShortnameValidator,
    UpdateUserValidator,
)
from chat.models import Chat
from core.error_codes import ErrorCode
from core.handlers import CommandHandler
from core.helpers import generate_code
from core.services import ServiceResult
from mentions.constants import SHORTNAME_TAKEN_MESSAGE
from mentions.services import MentionService

if TYPE_CHECKING:
    from datetime import datetime
    from uuid import UUID

    from accounts.commands import (
        CompleteAccountCommand,
        ConfirmEmailCommand,
        CreateAccountCommand,
        DeleteAccountCommand,
        LoginCommand,
        LogoutCommand,
        RefreshTokenCommand,
        UpdateConfirmEmailTokenCommand,
        UpdateUserCommand,
        UpdateUserShortnameCommand,
    )
    from accounts.tokens import TokenPair


INVALID_CREDENTIALS_MESSAGE = "Invalid email or password!"


@dataclass(frozen=True)
class ConfirmationCodeIssued:
    user_id: UUID
    email: str
    expires_at: datetime


@dataclass(frozen=True)
class EmailConfirmed:
    user_id: UUID
    access_token: str


@dataclass(frozen=True)
class AuthenticatedSession:
    user: User
    tokens: TokenPair


@dataclass(frozen=True)
class ProfileUpdated:
    user_id: UUID
    firstname: str
    lastname: str
    bio: str
    updated_at: datetime
    changed_fields: dict[str, bool]


def _assign_confirmation_code(user: User) -> datetime:
    user.email_confirmation_token = generate_code()
    user.email_confirmation_token_expiry = timezone.now() + timedelta(
        minutes=settings.CONFIRMATION_CODE_TTL_MINUTES
    )
    return user.email_confirmation_token_expiry


def _queue_confirmation_email(handler: type[CommandHandler], user_id: UUID) -> None:
    """Queue the confirmation email once the surrounding transaction commits."""
    from accounts.tasks import send_confirmation_email

    def enqueue() -> None:
        try:
            send_confirmation_email.delay(str(user_id))
        except Exception as exc:
            # The account is already committed; the user can ask for a resend.
            handler.handle_exception(exc, f"Queueing confirmation email for user {user_id}")

    transaction.on_commit(enqueue)


class CreateAccountHandler(CommandHandler):
    validator_class = CreateAccountValidator

    @classmethod
    def execute(cls, command: CreateAccountCommand) -> ServiceResult[ConfirmationCodeIssued]:
        existing = User.all_objects.filter(email__iexact=command.email).first()
        if existing is not None:
            if existing.is_verified:
                return cls.reject("Email has already been used", ErrorCode.EMAIL_ALREADY_USED)
            if existing.email_confirmed:
                return cls.reject("Email has already been confirmed", ErrorCode.EMAIL_ALREADY_CONFIRMED)
            return cls.reject("Email has awaited confirmation", ErrorCode.EMAIL_AWAITING_CONFIRMATION)

        user = User(
            email=command.email,
            firstname=command.firstname,
            lastname=command.lastname or "",
        )
        user.set_password(command.password)
        expires_at = _assign_confirmation_code(user)
        user.save()

        _queue_confirmation_email(cls, user.id)
        cls.get_logger().info(f"Account {user.id} registered")
        return ServiceResult.success(
            ConfirmationCodeIssued(user_id=user.id, email=user.email, expires_at=expires_at)
        )


class UpdateConfirmEmailTokenHandler(CommandHandler):
    validator_class = UpdateConfirmEmailTokenValidator

    @classmethod
    def execute(cls, command: UpdateConfirmEmailTokenCommand) -> ServiceResult[ConfirmationCodeIssued]:
        user = User.objects.filter(email__iexact=command.email).first()
        if user is None:
            return cls.reject("Email not registered", ErrorCode.EMAIL_NOT_REGISTERED)
        if user.email_confirmed:
            return cls.reject("Email has already been confirmed", ErrorCode.EMAIL_ALREADY_CONFIRMED)

        expires_at = _assign_confirmation_code(user)
        user.save(
            update_fields=[
                "email_confirmation_token",
                "email_confirmation_token_expiry",
                "updated_at",
            ]
        )

        _queue_confirmation_email(cls, user.id)
        return ServiceResult.success(
            ConfirmationCodeIssued(user_id=user.id, email=user.email, expires_at=expires_at)
        )


class ConfirmEmailHandler(CommandHandler):
    validator_class = ConfirmEmailValidator

    @classmethod
    def execute(cls, command: ConfirmEmailCommand) -> ServiceResult[EmailConfirmed]:
        user = User.objects.filter(email__iexact=command.email).first()
        if user is None:
            return cls.reject("User not found", ErrorCode.USER_NOT_FOUND)
        if user.email_confirmed:
            return cls.reject("Email address is already confirmed", ErrorCode.EMAIL_ALREADY_CONFIRMED)
        if not user.has_pending_confirmation():
            return cls.reject(
                "No confirmation code found for this user",
                ErrorCode.CONFIRMATION_CODE_NOT_FOUND,
            )
        if user.confirmation_code_expired():
            return cls.reject("Confirmation code has expired", ErrorCode.CONFIRMATION_CODE_EXPIRED)
        if not secrets.compare_digest(
            user.email_confirmation_token.upper(),
            command.code.upper(),
        ):
            return cls.reject("Invalid confirmation code", ErrorCode.INVALID_CONFIRMATION_CODE)

        user.email_confirmed = True
        user.email_confirmation_token = ""
        user.email_confirmation_token_expiry = None
        user.save(
            update_fields=[
                "email_confirmed",
                "email_confirmation_token",
                "email_confirmation_token_expiry",
                "updated_at",
            ]
        )

        return ServiceResult.success(
            EmailConfirmed(user_id=user.id, access_token=issue_profile_completion_token(user))
        )


class CompleteAccountHandler(CommandHandler):
    validator_class = CompleteAccountValidator

    @classmethod
    def execute(cls, command: CompleteAccountCommand) -> ServiceResult[User]:
        user = User.all_objects.filter(pk=command.user_id).first()
        if user is None:
            return cls.reject("User not found", ErrorCode.USER_NOT_FOUND)
        if user.is_deleted:
            return cls.reject("User account has been deleted", ErrorCode.USER_DELETED)
        if user.is_verified:
            return cls.reject("Account has already been completed", ErrorCode.ACCOUNT_ALREADY_COMPLETED)
        if not user.email_confirmed:
            return cls.reject("Email address is not confirmed", ErrorCode.EMAIL_NOT_CONFIRMED)
        if MentionService.is_taken(command.shortname):
            return cls.reject(SHORTNAME_TAKEN_MESSAGE, ErrorCode.SHORTNAME_ALREADY_TAKEN)

        bound = MentionService.bind_to_user(user, command.shortname)
        if not bound:
            return bound

        user.bio = command.bio or ""
        user.is_verified = True
        user.save(update_fields=["bio", "is_verified", "updated_at"])
        Chat.objects.create_personal(user)

        cls.get_logger().info(f"Account {user.id} completed as @{command.shortname}")
        return ServiceResult.success(user)


class LoginHandler(CommandHandler):
    validator_class = LoginValidator

    @classmethod
    def execute(cls, command: LoginCommand) -> ServiceResult[AuthenticatedSession]:
        user = User.objects.filter(email__iexact=command.email).first()
        if user is None:
            # Hash anyway so unknown emails take as long as wrong passwords
            User().set_password(command.password)
            return cls.reject(INVALID_CREDENTIALS_MESSAGE, ErrorCode.INVALID_CREDENTIALS)
        if not user.check_password(command.password):
            return cls.reject(INVALID_CREDENTIALS_MESSAGE, ErrorCode.INVALID_CREDENTIALS)
        if not user.email_confirmed:
            return cls.reject("Email address is not confirmed", ErrorCode.EMAIL_NOT_CONFIRMED)

        tokens, _ = issue_token_pair(
            user,
            user_agent=command.user_agent,
            device_id=command.device_id,
            ip_address=command.ip_address,
        )
        user.last_login = timezone.now()
        user.save(update_fields=["last_login"])

        return ServiceResult.success(AuthenticatedSession(user=user, tokens=tokens))


class RefreshTokenHandler(CommandHandler):
    validator_class = RefreshTokenValidator

    @classmethod
    def execute(cls, command: RefreshTokenCommand) -> ServiceResult[AuthenticatedSession]:
        record = RefreshToken.objects.select_for_update().get_by_token(command.refresh_token)
        if record is None:
            return cls.reject("Refresh Token not found", ErrorCode.REFRESH_TOKEN_NOT_FOUND)

        user = User.all_objects.filter(pk=record.user_id).first()
        if user is None:
            return cls.reject("Access forbidden", ErrorCode.ACCESS_FORBIDDEN)
        if user.is_deleted:
            return cls.reject("User was deleted", ErrorCode.USER_DELETED)
        if record.is_revoked:
            return cls.reject("Refresh Token was revoked", ErrorCode.REFRESH_TOKEN_REVOKED)
        if record.is_expired:
            return cls.reject("Refresh Token is expired", ErrorCode.REFRESH_TOKEN_EXPIRED)

        record.revoke()
        tokens, _ = issue_token_pair(
            user,
            user_agent=command.user_agent or record.user_agent,
            device_id=command.device_id or record.device_id,
            ip_address=command.ip_address,
        )
        return ServiceResult.success(AuthenticatedSession(user=user, tokens=tokens))


class LogoutHandler(CommandHandler):
    validator_class = LogoutValidator

    @classmethod
    def execute(cls, command: LogoutCommand) -> ServiceResult[None]:
        record = RefreshToken.objects.get_by_token(command.refresh_token)
        if record is None:
            return cls.reject("Refresh Token not found", ErrorCode.REFRESH_TOKEN_NOT_FOUND)
        if record.user_id != command.user_id:
            return cls.reject("Access forbidden", ErrorCode.ACCESS_FORBIDDEN)

        if not record.revoke():
            cls.get_logger().info(f"Refresh token {record.id} was already revoked")
        return ServiceResult.success(None)


class UpdateUserHandler(CommandHandler):
    validator_class = UpdateUserValidator
    actor_messages = ActorMessages(
        not_verified="User account must be verified before updating profile",
        deleted="Cannot update profile for deleted user account",
    )

    @classmethod
    def execute(cls, command: UpdateUserCommand) -> ServiceResult[ProfileUpdated]:
        user, failure = load_actor(cls, command.user_id, cls.actor_messages)
        if failure:
            return failure

        changed = {
            "firstname_changed": command.firstname is not None and command.firstname != user.firstname,
            "lastname_changed": command.lastname is not None and command.lastname != user.lastname,
            "bio_changed": command.bio is not None and command.bio != user.bio,
        }
        if not any(changed.values()):
            return cls.reject(
                "No changes were detected in the provided data",
                ErrorCode.NO_CHANGES_DETECTED,
            )

        update_fields = ["updated_at"]
        if changed["firstname_changed"]:
            user.firstname = command.firstname
            update_fields.append("firstname")
        if changed["lastname_changed"]:
            user.lastname = command.lastname
            update_fields.append("lastname")
        if changed["bio_changed"]:
            user.bio = command.bio
            update_fields.append("bio")
        user.save(update_fields=update_fields)

        return ServiceResult.success(
            ProfileUpdated(
                user_id=user.id,
                firstname=user.firstname,
                lastname=user.lastname,
                bio=user.bio,
                updated_at=user.updated_at,
                changed_fields=changed,
            )
        )


class UpdateUserShortnameHandler(CommandHandler):
    validator_class = UpdateUserShortnameValidator

    @classmethod
    def execute(cls, command: UpdateUserShortnameCommand) -> ServiceResult[dict]:
        user, failure = load_actor(cls, command.user_id)
        if failure:
            return failure
        if MentionService.is_taken(command.shortname):
            return cls.reject(SHORTNAME_TAKEN_MESSAGE, ErrorCode.SHORTNAME_ALREADY_TAKEN)

        bound = MentionService.bind_to_user(user, command.shortname)
        if not bound:
            return bound
        return ServiceResult.success({"user_id": user.id, "shortname": bound.data.shortname})


class DeleteAccountHandler(CommandHandler):
    @classmethod
    def execute(cls, command: DeleteAccountCommand) -> ServiceResult[None]:
        user, failure = load_actor(cls, command.user_id, require_verified=False)
        if failure:
            return failure

        revoked = RefreshToken.objects.revoke_all_for_user(user)
        MentionService.release_user(user)
        user.soft_delete()

        cls.get_logger().info(f"Account {user.id} deleted, {revoked} refresh tokens revoked")
        return ServiceResult.success(None)

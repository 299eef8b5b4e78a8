"""
Views for accounts endpoints.

Endpoints:
    POST   /api/v1/auth/register/              - Create account, send code
    POST   /api/v1/auth/confirm-email/         - Confirm email with code
    POST   /api/v1/auth/confirm-email/resend/  - Send a fresh code
    POST   /api/v1/auth/complete/              - Choose shortname, verify account
    POST   /api/v1/auth/login/                 - Obtain token pair
    POST   /api/v1/auth/refresh/               - Rotate refresh token
    POST   /api/v1/auth/logout/                - Revoke refresh token
    GET    /api/v1/users/me/                   - Own profile
    PATCH  /api/v1/users/me/                   - Update profile
    DELETE /api/v1/users/me/                   - Delete account
    PUT    /api/v1/users/me/shortname/         - Change shortname
    GET    /api/v1/users/me/chats/             - Chats the user belongs to
    GET    /api/v1/users/{id}/                 - Public profile

Views only translate HTTP into commands and results into responses;
all rules live in the handlers (services.py, queries.py).
"""

from __future__ import annotations

from dataclasses import asdict

from django.conf import settings
from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.views import APIView

from accounts.commands import (
    CompleteAccountCommand,
    ConfirmEmailCommand,
    CreateAccountCommand,
    DeleteAccountCommand,
    GetUserQuery,
    LoginCommand,
    LogoutCommand,
    RefreshTokenCommand,
    UpdateConfirmEmailTokenCommand,
    UpdateUserCommand,
    UpdateUserShortnameCommand,
    UserMembershipQuery,
)
from accounts.permissions import IsProfileCompletionAccess
from accounts.queries import GetUserQueryHandler, UserMembershipQueryHandler
from accounts.serializers import (
    PublicUserSerializer,
    SessionSerializer,
    UserMembershipSerializer,
    UserSerializer,
)
from accounts.services import (
    CompleteAccountHandler,
    ConfirmEmailHandler,
    CreateAccountHandler,
    DeleteAccountHandler,
    LoginHandler,
    LogoutHandler,
    RefreshTokenHandler,
    UpdateConfirmEmailTokenHandler,
    UpdateUserHandler,
    UpdateUserShortnameHandler,
)
from accounts.validators import (
    CompleteAccountValidator,
    ConfirmEmailValidator,
    CreateAccountValidator,
    LoginValidator,
    RefreshTokenValidator,
    UpdateConfirmEmailTokenValidator,
    UpdateUserShortnameValidator,
    UpdateUserValidator,
)
from core.handlers import command_from_data
from core.helpers import get_client_ip
from core.responses import result_response


def _client_context(request) -> dict:
    return {
        "user_agent": request.META.get("HTTP_USER_AGENT", ""),
        "device_id": request.headers.get("X-Device-Id", ""),
        "ip_address": get_client_ip(request) or None,
    }


def _set_auth_cookies(response, session) -> None:
    tokens = session.tokens
    common = {
        "httponly": True,
        "secure": settings.AUTH_COOKIE_SECURE,
        "samesite": settings.AUTH_COOKIE_SAMESITE,
    }
    response.set_cookie(
        settings.ACCESS_TOKEN_COOKIE_NAME,
        tokens.access_token,
        expires=tokens.access_expires_at,
        **common,
    )
    response.set_cookie(
        settings.REFRESH_TOKEN_COOKIE_NAME,
        tokens.refresh_token,
        expires=tokens.refresh_expires_at,
        path=settings.REFRESH_TOKEN_COOKIE_PATH,
        **common,
    )


def _clear_auth_cookies(response) -> None:
    response.delete_cookie(settings.ACCESS_TOKEN_COOKIE_NAME)
    response.delete_cookie(
        settings.REFRESH_TOKEN_COOKIE_NAME,
        path=settings.REFRESH_TOKEN_COOKIE_PATH,
    )


def _refresh_token_from(request) -> str | None:
    return request.data.get("refresh_token") or request.COOKIES.get(
        settings.REFRESH_TOKEN_COOKIE_NAME
    )


class PublicAPIView(APIView):
    """Endpoints reachable without an access token."""

    permission_classes = [AllowAny]
    authentication_classes = []


# =============================================================================
# Registration & confirmation
# =============================================================================


class RegisterView(PublicAPIView):
    @extend_schema(
        operation_id="register",
        summary="Create account",
        description="Creates an unconfirmed account and emails a 6-character confirmation code.",
        request=CreateAccountValidator,
        responses={201: OpenApiResponse(description="Confirmation code sent")},
        tags=["Auth"],
    )
    def post(self, request):
        command = command_from_data(CreateAccountCommand, request.data)
        result = CreateAccountHandler.handle(command)
        return result_response(result, status.HTTP_201_CREATED, serialize=asdict)


class ResendConfirmationCodeView(PublicAPIView):
    @extend_schema(
        operation_id="resend_confirmation_code",
        summary="Resend confirmation code",
        request=UpdateConfirmEmailTokenValidator,
        tags=["Auth"],
    )
    def post(self, request):
        command = command_from_data(UpdateConfirmEmailTokenCommand, request.data)
        result = UpdateConfirmEmailTokenHandler.handle(command)
        return result_response(result, serialize=asdict)


class ConfirmEmailView(PublicAPIView):
    @extend_schema(
        operation_id="confirm_email",
        summary="Confirm email",
        description="Returns a short-lived token that can only complete the account.",
        request=ConfirmEmailValidator,
        tags=["Auth"],
    )
    def post(self, request):
        command = command_from_data(ConfirmEmailCommand, request.data)
        result = ConfirmEmailHandler.handle(command)
        return result_response(result, serialize=asdict)


class CompleteAccountView(APIView):
    permission_classes = [IsProfileCompletionAccess]

    @extend_schema(
        operation_id="complete_account",
        summary="Complete account",
        description="Claims a shortname, sets the bio and marks the account verified.",
        request=CompleteAccountValidator,
        tags=["Auth"],
    )
    def post(self, request):
        command = command_from_data(CompleteAccountCommand, request.data, user_id=request.user.id)
        result = CompleteAccountHandler.handle(command)
        return result_response(result, serialize=lambda user: UserSerializer(user).data)


# =============================================================================
# Sessions
# =============================================================================


class LoginView(PublicAPIView):
    @extend_schema(
        operation_id="login",
        summary="Log in",
        request=LoginValidator,
        responses={200: SessionSerializer},
        tags=["Auth"],
    )
    def post(self, request):
        command = command_from_data(LoginCommand, request.data, **_client_context(request))
        result = LoginHandler.handle(command)
        response = result_response(result, serialize=lambda s: SessionSerializer(s).data)
        if result:
            _set_auth_cookies(response, result.data)
        return response


class RefreshView(PublicAPIView):
    @extend_schema(
        operation_id="refresh_token",
        summary="Rotate refresh token",
        description="Accepts the refresh token from the body or the refresh cookie.",
        request=RefreshTokenValidator,
        responses={200: SessionSerializer},
        tags=["Auth"],
    )
    def post(self, request):
        command = command_from_data(
            RefreshTokenCommand,
            request.data,
            refresh_token=_refresh_token_from(request),
            **_client_context(request),
        )
        result = RefreshTokenHandler.handle(command)
        response = result_response(result, serialize=lambda s: SessionSerializer(s).data)
        if result:
            _set_auth_cookies(response, result.data)
        return response


class LogoutView(APIView):
    @extend_schema(
        operation_id="logout",
        summary="Log out",
        request=RefreshTokenValidator,
        tags=["Auth"],
    )
    def post(self, request):
        command = LogoutCommand(user_id=request.user.id, refresh_token=_refresh_token_from(request))
        result = LogoutHandler.handle(command)
        response = result_response(result)
        if result:
            _clear_auth_cookies(response)
        return response


# =============================================================================
# Users
# =============================================================================


class MeView(APIView):
    @extend_schema(
        operation_id="get_me",
        summary="Get own profile",
        responses={200: PublicUserSerializer},
        tags=["Users"],
    )
    def get(self, request):
        result = GetUserQueryHandler.handle(GetUserQuery(user_id=request.user.id))
        return result_response(result, serialize=asdict)

    @extend_schema(
        operation_id="update_me",
        summary="Update own profile",
        request=UpdateUserValidator,
        tags=["Users"],
    )
    def patch(self, request):
        command = command_from_data(UpdateUserCommand, request.data, user_id=request.user.id)
        result = UpdateUserHandler.handle(command)
        return result_response(result, serialize=asdict)

    @extend_schema(
        operation_id="delete_me",
        summary="Delete own account",
        request=None,
        tags=["Users"],
    )
    def delete(self, request):
        result = DeleteAccountHandler.handle(DeleteAccountCommand(user_id=request.user.id))
        response = result_response(result)
        if result:
            _clear_auth_cookies(response)
        return response


class MyShortnameView(APIView):
    @extend_schema(
        operation_id="update_my_shortname",
        summary="Change own shortname",
        request=UpdateUserShortnameValidator,
        tags=["Users"],
    )
    def put(self, request):
        command = command_from_data(UpdateUserShortnameCommand, request.data, user_id=request.user.id)
        return result_response(UpdateUserShortnameHandler.handle(command))


class MyChatsView(APIView):
    @extend_schema(
        operation_id="list_my_chats",
        summary="List own chats",
        responses={200: UserMembershipSerializer},
        tags=["Users"],
    )
    def get(self, request):
        result = UserMembershipQueryHandler.handle(UserMembershipQuery(user_id=request.user.id))
        return result_response(result, serialize=asdict)


class UserDetailView(APIView):
    @extend_schema(
        operation_id="get_user",
        summary="Get user profile",
        responses={200: PublicUserSerializer},
        tags=["Users"],
    )
    def get(self, request, user_id):
        result = GetUserQueryHandler.handle(GetUserQuery(user_id=user_id))
        return result_response(result, serialize=asdict)

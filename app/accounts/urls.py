"""
URL configuration for accounts.

Two pattern lists are exported and mounted in config/urls.py:
    auth_patterns -> /api/v1/auth/
    user_patterns -> /api/v1/users/
"""

from django.urls import path

from accounts.views import (
    CompleteAccountView,
    ConfirmEmailView,
    LoginView,
    LogoutView,
    MeView,
    MyChatsView,
    MyShortnameView,
    RefreshView,
    RegisterView,
    ResendConfirmationCodeView,
    UserDetailView,
)

auth_patterns = (
    [
        path("register/", RegisterView.as_view(), name="register"),
        path("confirm-email/", ConfirmEmailView.as_view(), name="confirm-email"),
        path(
            "confirm-email/resend/",
            ResendConfirmationCodeView.as_view(),
            name="resend-confirmation-code",
        ),
        path("complete/", CompleteAccountView.as_view(), name="complete"),
        path("login/", LoginView.as_view(), name="login"),
        path("refresh/", RefreshView.as_view(), name="refresh"),
        path("logout/", LogoutView.as_view(), name="logout"),
    ],
    "auth",
)

user_patterns = (
    [
        path("me/", MeView.as_view(), name="me"),
        path("me/shortname/", MyShortnameView.as_view(), name="me-shortname"),
        path("me/chats/", MyChatsView.as_view(), name="me-chats"),
        path("<uuid:user_id>/", UserDetailView.as_view(), name="detail"),
    ],
    "users",
)

"""
URL configuration for the chat backend.

URL Structure:
    /                              - ReDoc API documentation
    /admin/                        - Django admin interface
    /health/                       - Health check endpoint (for load balancers, Docker)
    /schema/                       - OpenAPI schema (YAML)
    /api/v1/auth/                  - Registration and sessions
        register/                  - Create account
        confirm-email/             - Confirm email with code
        confirm-email/resend/      - Send a fresh code
        complete/                  - Choose shortname, verify account
        login/                     - Email/password login
        refresh/                   - Rotate refresh token
        logout/                    - Revoke refresh token
    /api/v1/users/                 - Users
        me/                        - Own profile (GET/PATCH/DELETE)
        me/shortname/              - Change shortname
        me/chats/                  - Chats the user belongs to
        {id}/                      - Public profile
    /api/v1/chats/                 - Chats and groups
        {id}/                      - Chat details
        groups/                    - Create group
        groups/{id}/               - Update/delete group
        groups/{id}/public/        - Make group public
        groups/{id}/private/       - Make group private
        groups/{id}/shortname/     - Change group shortname
        groups/{id}/members/       - Group members
    /api/v1/messages/              - Messages
        chats/{id}/                - List/send
        chats/{id}/{message_id}/   - Edit/delete

For more information, see:
https://docs.djangoproject.com/en/5.2/topics/http/urls/
"""

from django.contrib import admin
from django.urls import include, path
from drf_spectacular.views import SpectacularAPIView, SpectacularRedocView

from accounts.urls import auth_patterns, user_patterns
from chat.urls import chat_patterns, message_patterns
from core.views import health_check

# =============================================================================
# API v1 Routes
# =============================================================================
# All routes here are prefixed with /api/v1/ automatically
api_v1_patterns = [
    path("auth/", include(auth_patterns)),
    path("users/", include(user_patterns)),
    path("chats/", include(chat_patterns)),
    path("messages/", include(message_patterns)),
]

urlpatterns = [
    # Documentation
    path("", SpectacularRedocView.as_view(url_name="schema"), name="redoc"),
    path("schema/", SpectacularAPIView.as_view(), name="schema"),
    # Admin
    path("admin/", admin.site.urls),
    # Health check (Docker, Kubernetes, load balancers)
    path("health/", health_check, name="health_check"),
    # API v1
    path("api/v1/", include(api_v1_patterns)),
]

# =============================================================================
# Admin Site Customization
# =============================================================================
admin.site.site_header = "Chat Admin"
admin.site.site_title = "Chat Admin Portal"
admin.site.index_title = "Accounts, chats and messages"

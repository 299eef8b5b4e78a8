"""
URL configuration for chats and messages.

Two pattern lists are exported and mounted in config/urls.py:
    chat_patterns    -> /api/v1/chats/
    message_patterns -> /api/v1/messages/

URL Structure:
    Chats:
        /                               POST
        /{id}/                          GET
    Groups:
        /groups/                        POST
        /groups/{id}/                   PATCH, DELETE
        /groups/{id}/public/            POST
        /groups/{id}/private/           POST
        /groups/{id}/shortname/         PUT
        /groups/{id}/members/           GET
    Messages:
        /chats/{id}/                    GET, POST
        /chats/{id}/{message_id}/       PATCH, DELETE
"""

from django.urls import path

from chat.views import ChatViewSet, GroupViewSet, MessageViewSet

chat_patterns = (
    [
        path("", ChatViewSet.as_view({"post": "create"}), name="chat-list"),
        path("groups/", GroupViewSet.as_view({"post": "create"}), name="group-list"),
        path(
            "groups/<uuid:pk>/",
            GroupViewSet.as_view({"patch": "partial_update", "delete": "destroy"}),
            name="group-detail",
        ),
        path(
            "groups/<uuid:pk>/public/",
            GroupViewSet.as_view({"post": "public"}),
            name="group-public",
        ),
        path(
            "groups/<uuid:pk>/private/",
            GroupViewSet.as_view({"post": "private"}),
            name="group-private",
        ),
        path(
            "groups/<uuid:pk>/shortname/",
            GroupViewSet.as_view({"put": "shortname"}),
            name="group-shortname",
        ),
        path(
            "groups/<uuid:pk>/members/",
            GroupViewSet.as_view({"get": "members"}),
            name="group-members",
        ),
        path("<uuid:pk>/", ChatViewSet.as_view({"get": "retrieve"}), name="chat-detail"),
    ],
    "chats",
)

message_patterns = (
    [
        path(
            "chats/<uuid:chat_pk>/",
            MessageViewSet.as_view({"get": "list", "post": "create"}),
            name="message-list",
        ),
        path(
            "chats/<uuid:chat_pk>/<int:pk>/",
            MessageViewSet.as_view({"patch": "partial_update", "delete": "destroy"}),
            name="message-detail",
        ),
    ],
    "messages",
)

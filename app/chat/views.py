"""
Views for chat and message endpoints.

Endpoints:
    POST   /api/v1/chats/                              - Create one-to-one chat
    GET    /api/v1/chats/{id}/                         - Chat details
    POST   /api/v1/chats/groups/                       - Create group
    PATCH  /api/v1/chats/groups/{id}/                  - Update group
    DELETE /api/v1/chats/groups/{id}/                  - Delete group
    POST   /api/v1/chats/groups/{id}/public/           - Make group public
    POST   /api/v1/chats/groups/{id}/private/          - Make group private
    PUT    /api/v1/chats/groups/{id}/shortname/        - Change group shortname
    GET    /api/v1/chats/groups/{id}/members/          - List group members
    GET    /api/v1/messages/chats/{id}/                - Page of messages
    POST   /api/v1/messages/chats/{id}/                - Send message
    PATCH  /api/v1/messages/chats/{id}/{message_id}/   - Edit own message
    DELETE /api/v1/messages/chats/{id}/{message_id}/   - Delete own message

The acting user always comes from the access token, never from the body.
"""

from __future__ import annotations

from dataclasses import asdict

from drf_spectacular.utils import OpenApiParameter, extend_schema, extend_schema_view
from rest_framework import status, viewsets
from rest_framework.decorators import action

from chat.commands import (
    CreateChatCommand,
    CreateGroupCommand,
    DeleteGroupCommand,
    DeleteMessageCommand,
    GetChatQuery,
    GetGroupMembersQuery,
    GetMessagesQuery,
    MakePrivateGroupCommand,
    MakePublicGroupCommand,
    SendMessageCommand,
    UpdateGroupCommand,
    UpdateGroupShortnameCommand,
    UpdateMessageCommand,
)
from chat.queries import GetChatQueryHandler, GetGroupMembersQueryHandler, GetMessagesQueryHandler
from chat.serializers import (
    ChatSerializer,
    CreateChatRequestSerializer,
    GroupMembersPageSerializer,
    MessageSerializer,
)
from chat.services import (
    CreateChatHandler,
    CreateGroupHandler,
    DeleteGroupHandler,
    DeleteMessageHandler,
    MakePrivateGroupHandler,
    MakePublicGroupHandler,
    SendMessageHandler,
    UpdateGroupHandler,
    UpdateGroupShortnameHandler,
    UpdateMessageHandler,
)
from chat.validators import (
    CreateGroupValidator,
    GroupShortnameValidator,
    SendMessageValidator,
    UpdateGroupValidator,
)
from core.handlers import command_from_data
from core.responses import result_response


def _chat_data(chat):
    return ChatSerializer(chat).data


def _message_data(message):
    return MessageSerializer(message).data


@extend_schema_view(
    create=extend_schema(
        operation_id="create_chat",
        summary="Create one-to-one chat",
        request=CreateChatRequestSerializer,
        responses={201: ChatSerializer},
        tags=["Chats"],
    ),
    retrieve=extend_schema(
        operation_id="get_chat",
        summary="Get chat",
        description=(
            "Returns a view whose ``kind`` is personal, one_to_one, group or deleted. "
            "Public groups are visible to non-members."
        ),
        tags=["Chats"],
    ),
)
class ChatViewSet(viewsets.ViewSet):
    """
    Chats of any type.

    create:
        Create a one-to-one chat between the caller and ``user_id``.

    retrieve:
        Chat details, shaped by chat type.
    """

    def create(self, request):
        command = CreateChatCommand(
            first_user_id=request.user.id,
            second_user_id=request.data.get("user_id"),
        )
        result = CreateChatHandler.handle(command)
        return result_response(result, status.HTTP_201_CREATED, serialize=_chat_data)

    def retrieve(self, request, pk=None):
        result = GetChatQueryHandler.handle(GetChatQuery(user_id=request.user.id, chat_id=pk))
        return result_response(result, serialize=asdict)


@extend_schema_view(
    create=extend_schema(
        operation_id="create_group",
        summary="Create group",
        description="A public group needs a shortname; the caller becomes its creator.",
        request=CreateGroupValidator,
        responses={201: ChatSerializer},
        tags=["Groups"],
    ),
    partial_update=extend_schema(
        operation_id="update_group",
        summary="Update group",
        request=UpdateGroupValidator,
        responses={200: ChatSerializer},
        tags=["Groups"],
    ),
    destroy=extend_schema(
        operation_id="delete_group",
        summary="Delete group",
        request=None,
        tags=["Groups"],
    ),
)
class GroupViewSet(viewsets.ViewSet):
    """
    Group chat management. Mutations are limited to the group creator.
    """

    def create(self, request):
        command = command_from_data(CreateGroupCommand, request.data, user_id=request.user.id)
        result = CreateGroupHandler.handle(command)
        return result_response(result, status.HTTP_201_CREATED, serialize=_chat_data)

    def partial_update(self, request, pk=None):
        command = command_from_data(
            UpdateGroupCommand,
            request.data,
            user_id=request.user.id,
            group_id=pk,
        )
        return result_response(UpdateGroupHandler.handle(command), serialize=_chat_data)

    def destroy(self, request, pk=None):
        command = DeleteGroupCommand(user_id=request.user.id, group_id=pk)
        return result_response(DeleteGroupHandler.handle(command))

    @extend_schema(
        operation_id="make_group_public",
        summary="Make group public",
        request=GroupShortnameValidator,
        responses={200: ChatSerializer},
        tags=["Groups"],
    )
    @action(detail=True, methods=["post"])
    def public(self, request, pk=None):
        command = command_from_data(
            MakePublicGroupCommand,
            request.data,
            user_id=request.user.id,
            group_id=pk,
        )
        return result_response(MakePublicGroupHandler.handle(command), serialize=_chat_data)

    @extend_schema(
        operation_id="make_group_private",
        summary="Make group private",
        request=None,
        responses={200: ChatSerializer},
        tags=["Groups"],
    )
    @action(detail=True, methods=["post"])
    def private(self, request, pk=None):
        command = MakePrivateGroupCommand(user_id=request.user.id, group_id=pk)
        return result_response(MakePrivateGroupHandler.handle(command), serialize=_chat_data)

    @extend_schema(
        operation_id="update_group_shortname",
        summary="Change group shortname",
        request=GroupShortnameValidator,
        responses={200: ChatSerializer},
        tags=["Groups"],
    )
    @action(detail=True, methods=["put"])
    def shortname(self, request, pk=None):
        command = command_from_data(
            UpdateGroupShortnameCommand,
            request.data,
            user_id=request.user.id,
            group_id=pk,
        )
        return result_response(UpdateGroupShortnameHandler.handle(command), serialize=_chat_data)

    @extend_schema(
        operation_id="list_group_members",
        summary="List group members",
        description="Creator first, then by join time.",
        parameters=[
            OpenApiParameter("offset", int, description="Members to skip"),
            OpenApiParameter("limit", int, description="Page size (1-200)"),
            OpenApiParameter("search_term", str, description="Matches names and nickname"),
            OpenApiParameter("role", str, enum=["creator", "member"]),
            OpenApiParameter("include_deleted", bool),
        ],
        responses={200: GroupMembersPageSerializer},
        tags=["Groups"],
    )
    @action(detail=True, methods=["get"])
    def members(self, request, pk=None):
        query = command_from_data(
            GetGroupMembersQuery,
            request.query_params,
            user_id=request.user.id,
            chat_id=pk,
        )
        result = GetGroupMembersQueryHandler.handle(query)
        return result_response(result, serialize=lambda page: GroupMembersPageSerializer(page).data)


@extend_schema_view(
    list=extend_schema(
        operation_id="list_messages",
        summary="List messages",
        description="Newest first. Members only, except for public groups.",
        parameters=[
            OpenApiParameter("offset", int),
            OpenApiParameter("limit", int, description="Page size (1-100)"),
        ],
        tags=["Messages"],
    ),
    create=extend_schema(
        operation_id="send_message",
        summary="Send message",
        request=SendMessageValidator,
        responses={201: MessageSerializer},
        tags=["Messages"],
    ),
    partial_update=extend_schema(
        operation_id="edit_message",
        summary="Edit own message",
        request=SendMessageValidator,
        responses={200: MessageSerializer},
        tags=["Messages"],
    ),
    destroy=extend_schema(
        operation_id="delete_message",
        summary="Delete own message",
        request=None,
        tags=["Messages"],
    ),
)
class MessageViewSet(viewsets.ViewSet):
    """
    Messages nested under a chat.
    """

    def list(self, request, chat_pk=None):
        query = command_from_data(
            GetMessagesQuery,
            request.query_params,
            user_id=request.user.id,
            chat_id=chat_pk,
        )
        return result_response(GetMessagesQueryHandler.handle(query), serialize=asdict)

    def create(self, request, chat_pk=None):
        command = command_from_data(
            SendMessageCommand,
            request.data,
            user_id=request.user.id,
            chat_id=chat_pk,
        )
        result = SendMessageHandler.handle(command)
        return result_response(result, status.HTTP_201_CREATED, serialize=_message_data)

    def partial_update(self, request, chat_pk=None, pk=None):
        command = command_from_data(
            UpdateMessageCommand,
            request.data,
            user_id=request.user.id,
            chat_id=chat_pk,
            message_id=pk,
        )
        return result_response(UpdateMessageHandler.handle(command), serialize=_message_data)

    def destroy(self, request, chat_pk=None, pk=None):
        command = DeleteMessageCommand(user_id=request.user.id, chat_id=chat_pk, message_id=pk)
        return result_response(DeleteMessageHandler.handle(command))

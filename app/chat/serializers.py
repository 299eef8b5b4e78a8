"""
Response serializers for chat endpoints.

Request bodies are validated by chat/validators.py inside the handlers;
these serializers shape handler results. Query views (dataclasses from
queries.py) are serialized with ``dataclasses.asdict`` except where a
computed property has to be exposed.
"""

from rest_framework import serializers

from chat.models import Chat, Message


class ChatSerializer(serializers.ModelSerializer):
    shortname = serializers.CharField(read_only=True, allow_null=True)

    class Meta:
        model = Chat
        fields = [
            "id",
            "type",
            "name",
            "description",
            "is_private",
            "shortname",
            "created_at",
        ]
        read_only_fields = fields


class MessageSerializer(serializers.ModelSerializer):
    chat_id = serializers.UUIDField(read_only=True)
    sender_id = serializers.UUIDField(read_only=True)
    is_edited = serializers.BooleanField(read_only=True)

    class Meta:
        model = Message
        fields = [
            "id",
            "chat_id",
            "sender_id",
            "text",
            "is_edited",
            "edited_at",
            "created_at",
        ]
        read_only_fields = fields


class GroupMemberSerializer(serializers.Serializer):
    user_id = serializers.UUIDField()
    firstname = serializers.CharField()
    lastname = serializers.CharField()
    role = serializers.CharField(allow_null=True)
    nickname = serializers.CharField()
    is_deleted = serializers.BooleanField()
    joined_at = serializers.DateTimeField()


class GroupMembersPageSerializer(serializers.Serializer):
    members = GroupMemberSerializer(many=True)
    total_count = serializers.IntegerField()
    offset = serializers.IntegerField()
    limit = serializers.IntegerField()
    has_next_page = serializers.BooleanField()
    has_previous_page = serializers.BooleanField()


class CreateChatRequestSerializer(serializers.Serializer):
    """Body of POST /chats/: the other participant."""

    user_id = serializers.UUIDField()

"""
Response serializers for accounts endpoints.

Request bodies are described by the validators in validators.py; the
serializers here shape handler results for the response envelope.
"""

from rest_framework import serializers

from accounts.models import User


class UserSerializer(serializers.ModelSerializer):
    """The authenticated user's own account."""

    shortname = serializers.CharField(read_only=True, allow_null=True)

    class Meta:
        model = User
        fields = [
            "id",
            "email",
            "firstname",
            "lastname",
            "bio",
            "shortname",
            "email_confirmed",
            "is_verified",
            "created_at",
        ]
        read_only_fields = fields


class SessionSerializer(serializers.Serializer):
    """Token pair returned by login and refresh."""

    access_token = serializers.CharField(source="tokens.access_token")
    refresh_token = serializers.CharField(source="tokens.refresh_token")
    access_expires_at = serializers.DateTimeField(source="tokens.access_expires_at")
    refresh_expires_at = serializers.DateTimeField(source="tokens.refresh_expires_at")
    user = UserSerializer()


class PublicUserSerializer(serializers.Serializer):
    user_id = serializers.UUIDField()
    firstname = serializers.CharField(required=False)
    lastname = serializers.CharField(required=False)
    shortname = serializers.CharField(required=False, allow_null=True)
    bio = serializers.CharField(required=False)
    is_deleted = serializers.BooleanField()
    display_name = serializers.CharField(required=False)


class ChatSummarySerializer(serializers.Serializer):
    id = serializers.UUIDField()
    type = serializers.CharField()
    name = serializers.CharField()


class UserMembershipSerializer(serializers.Serializer):
    user_id = serializers.UUIDField()
    chats = ChatSummarySerializer(many=True)

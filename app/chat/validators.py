"""
Validators for chat commands and queries.

Each validator is a DRF Serializer run by CommandHandler.validate()
before the handler executes. Field names match the command dataclasses.
"""

from __future__ import annotations

from rest_framework import serializers

from chat.constants import CHAT_CONFIG, MESSAGE_CONFIG
from chat.models import ChatRole
from mentions.validators import ShortnameField


def _text_field(**kwargs) -> serializers.CharField:
    return serializers.CharField(
        min_length=MESSAGE_CONFIG.MIN_TEXT_LENGTH,
        max_length=MESSAGE_CONFIG.MAX_TEXT_LENGTH,
        **kwargs,
    )


class CreateChatValidator(serializers.Serializer):
    first_user_id = serializers.UUIDField()
    second_user_id = serializers.UUIDField()

    def validate(self, attrs):
        if attrs["first_user_id"] == attrs["second_user_id"]:
            raise serializers.ValidationError(
                "FirstUserId and SecondUserId must be different",
                code="SAME_USER",
            )
        return attrs


class CreateGroupValidator(serializers.Serializer):
    user_id = serializers.UUIDField()
    name = serializers.CharField(
        min_length=CHAT_CONFIG.NAME_MIN_LENGTH,
        max_length=CHAT_CONFIG.NAME_MAX_LENGTH,
    )
    description = serializers.CharField(
        max_length=CHAT_CONFIG.DESCRIPTION_MAX_LENGTH,
        required=False,
        allow_blank=True,
    )
    is_private = serializers.BooleanField(default=True)
    shortname = ShortnameField(required=False)

    def validate(self, attrs):
        if not attrs.get("is_private", True) and not attrs.get("shortname"):
            raise serializers.ValidationError(
                {"shortname": ["Shortname is required for a public group"]},
                code="required",
            )
        return attrs


class UpdateGroupValidator(serializers.Serializer):
    user_id = serializers.UUIDField()
    group_id = serializers.UUIDField()
    name = serializers.CharField(
        min_length=CHAT_CONFIG.NAME_MIN_LENGTH,
        max_length=CHAT_CONFIG.NAME_MAX_LENGTH,
        required=False,
    )
    description = serializers.CharField(
        max_length=CHAT_CONFIG.DESCRIPTION_MAX_LENGTH,
        required=False,
        allow_blank=True,
    )

    def validate(self, attrs):
        if "name" not in attrs and "description" not in attrs:
            raise serializers.ValidationError(
                "At least one field must be provided for update",
                code="REQUEST_EMPTY",
            )
        return attrs


class GroupActionValidator(serializers.Serializer):
    user_id = serializers.UUIDField()
    group_id = serializers.UUIDField()


class GroupShortnameValidator(GroupActionValidator):
    shortname = ShortnameField()


class SendMessageValidator(serializers.Serializer):
    user_id = serializers.UUIDField()
    chat_id = serializers.UUIDField()
    text = _text_field()


class UpdateMessageValidator(SendMessageValidator):
    message_id = serializers.IntegerField(min_value=1)


class DeleteMessageValidator(serializers.Serializer):
    user_id = serializers.UUIDField()
    chat_id = serializers.UUIDField()
    message_id = serializers.IntegerField(min_value=1)


class GetChatValidator(serializers.Serializer):
    user_id = serializers.UUIDField()
    chat_id = serializers.UUIDField()


class GetGroupMembersValidator(GetChatValidator):
    offset = serializers.IntegerField(min_value=0, default=0)
    limit = serializers.IntegerField(
        min_value=1,
        max_value=CHAT_CONFIG.MEMBERS_MAX_LIMIT,
        default=CHAT_CONFIG.MEMBERS_DEFAULT_LIMIT,
    )
    search_term = serializers.CharField(
        max_length=CHAT_CONFIG.MEMBERS_SEARCH_MAX_LENGTH,
        required=False,
        allow_blank=True,
    )
    role = serializers.ChoiceField(choices=ChatRole.choices, required=False)
    include_deleted = serializers.BooleanField(default=False)


class GetMessagesValidator(GetChatValidator):
    limit = serializers.IntegerField(
        min_value=1,
        max_value=MESSAGE_CONFIG.MAX_PAGE_SIZE,
        default=MESSAGE_CONFIG.DEFAULT_PAGE_SIZE,
    )
    offset = serializers.IntegerField(min_value=0, default=0)

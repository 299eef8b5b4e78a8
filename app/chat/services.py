"""
Chat command handlers.

Each handler follows the guarded transition shape of core.handlers:
validate, load, guards in fixed order, mutate, commit. Guard messages
are part of the public API and must not change.

Handlers:
    CreateChatHandler: One-to-one chat between two users
    CreateGroupHandler: Group chat, public groups claim a shortname
    UpdateGroupHandler: Rename / re-describe a group
    DeleteGroupHandler: Soft delete a group and release its shortname
    MakePrivateGroupHandler: Hide a group, release its shortname
    MakePublicGroupHandler: Publish a group under a shortname
    UpdateGroupShortnameHandler: Rename a public group's shortname
    SendMessageHandler / UpdateMessageHandler / DeleteMessageHandler

Side effects on mentions go through mentions.services.MentionService
so the public-iff-mention invariant is maintained in one place.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from django.db import IntegrityError, transaction
from django.utils import timezone

from accounts.guards import ActorMessages, load_actor
from chat.constants import CHAT_CONFIG
from chat.guards import (
    GROUP_ACTOR_MESSAGES,
    GroupMessages,
    load_chat,
    load_group,
    require_creator,
)
from chat.models import Chat, ChatMember, ChatRole, ChatType, Message, make_pair_key
from chat.validators import (
    CreateChatValidator,
    CreateGroupValidator,
    DeleteMessageValidator,
    GroupActionValidator,
    GroupShortnameValidator,
    SendMessageValidator,
    UpdateGroupValidator,
    UpdateMessageValidator,
)
from core.error_codes import ErrorCode
from core.handlers import CommandHandler
from core.services import ServiceResult
from mentions.constants import SHORTNAME_TAKEN_MESSAGE
from mentions.services import MentionService

if TYPE_CHECKING:
    from chat.commands import (
        CreateChatCommand,
        CreateGroupCommand,
        DeleteGroupCommand,
        DeleteMessageCommand,
        MakePrivateGroupCommand,
        MakePublicGroupCommand,
        SendMessageCommand,
        UpdateGroupCommand,
        UpdateGroupShortnameCommand,
        UpdateMessageCommand,
    )


CHAT_EXISTS_MESSAGE = "Chat has already been created"


# =============================================================================
# Chats and groups
# =============================================================================


class CreateChatHandler(CommandHandler):
    validator_class = CreateChatValidator

    first_user_messages = ActorMessages(
        not_found="First user not found",
        not_verified="First user account is not verified",
        deleted="First user account has been deleted",
    )
    second_user_messages = ActorMessages(
        not_found="Second user not found",
        not_verified="Second user account is not verified",
        deleted="Second user account has been deleted",
    )

    @classmethod
    def execute(cls, command: CreateChatCommand) -> ServiceResult[Chat]:
        first, failure = load_actor(cls, command.first_user_id, cls.first_user_messages)
        if failure:
            return failure
        second, failure = load_actor(cls, command.second_user_id, cls.second_user_messages)
        if failure:
            return failure
        if Chat.all_objects.find_one_to_one(first.id, second.id) is not None:
            return cls.reject(CHAT_EXISTS_MESSAGE, ErrorCode.CHAT_ALREADY_EXISTS)

        try:
            with transaction.atomic():
                chat = Chat.objects.create(
                    type=ChatType.ONE_TO_ONE,
                    is_private=True,
                    pair_key=make_pair_key(first.id, second.id),
                )
        except IntegrityError:
            if Chat.all_objects.find_one_to_one(first.id, second.id) is None:
                raise
            # A concurrent request created the same pair after our check
            return cls.reject(CHAT_EXISTS_MESSAGE, ErrorCode.CHAT_ALREADY_EXISTS)

        ChatMember.objects.bulk_create(
            [ChatMember(chat=chat, user=first), ChatMember(chat=chat, user=second)]
        )
        cls.get_logger().info(f"One-to-one chat {chat.id} created for {first.id} and {second.id}")
        return ServiceResult.success(chat)


class CreateGroupHandler(CommandHandler):
    validator_class = CreateGroupValidator

    @classmethod
    def execute(cls, command: CreateGroupCommand) -> ServiceResult[Chat]:
        user, failure = load_actor(cls, command.user_id)
        if failure:
            return failure
        is_public = not command.is_private
        if is_public and MentionService.is_taken(command.shortname):
            return cls.reject(SHORTNAME_TAKEN_MESSAGE, ErrorCode.SHORTNAME_ALREADY_TAKEN)

        chat = Chat.objects.create(
            type=ChatType.GROUP,
            name=command.name,
            description=command.description or "",
            is_private=command.is_private,
        )
        ChatMember.objects.create(
            chat=chat,
            user=user,
            role=ChatRole.CREATOR,
            nickname=CHAT_CONFIG.CREATOR_NICKNAME,
        )
        if is_public:
            bound = MentionService.bind_to_chat(chat, command.shortname)
            if not bound:
                return bound

        cls.get_logger().info(f"Group {chat.id} created by {user.id} (public={is_public})")
        return ServiceResult.success(chat)


class UpdateGroupHandler(CommandHandler):
    validator_class = UpdateGroupValidator

    @classmethod
    def execute(cls, command: UpdateGroupCommand) -> ServiceResult[Chat]:
        user, failure = load_actor(cls, command.user_id, GROUP_ACTOR_MESSAGES)
        if failure:
            return failure
        chat, failure = load_group(cls, command.group_id)
        if failure:
            return failure
        _, failure = require_creator(cls, chat, user)
        if failure:
            return failure

        update_fields = ["updated_at"]
        if command.name is not None:
            chat.name = command.name
            update_fields.append("name")
        if command.description is not None:
            chat.description = command.description
            update_fields.append("description")
        chat.save(update_fields=update_fields)
        return ServiceResult.success(chat)


class DeleteGroupHandler(CommandHandler):
    validator_class = GroupActionValidator
    group_messages = GroupMessages(
        not_member="You aren't member",
        not_creator="You don't have access",
    )

    @classmethod
    def execute(cls, command: DeleteGroupCommand) -> ServiceResult[None]:
        user, failure = load_actor(cls, command.user_id)
        if failure:
            return failure
        chat, failure = load_chat(cls, command.group_id, deleted="Chat was deleted")
        if failure:
            return failure
        if chat.type != ChatType.GROUP:
            return cls.reject("Only group chats can be deleted", ErrorCode.NOT_A_GROUP)
        _, failure = require_creator(cls, chat, user, cls.group_messages)
        if failure:
            return failure

        MentionService.release_chat(chat)
        chat.is_private = True
        chat.save(update_fields=["is_private", "updated_at"])
        chat.soft_delete()

        cls.get_logger().info(f"Group {chat.id} deleted by {user.id}")
        return ServiceResult.success(None)


class MakePrivateGroupHandler(CommandHandler):
    validator_class = GroupActionValidator

    @classmethod
    def execute(cls, command: MakePrivateGroupCommand) -> ServiceResult[Chat]:
        user, failure = load_actor(cls, command.user_id, GROUP_ACTOR_MESSAGES)
        if failure:
            return failure
        chat, failure = load_group(cls, command.group_id)
        if failure:
            return failure
        if chat.is_private:
            return cls.reject("Group is private", ErrorCode.GROUP_ALREADY_PRIVATE)
        _, failure = require_creator(cls, chat, user)
        if failure:
            return failure

        chat.is_private = True
        chat.save(update_fields=["is_private", "updated_at"])
        MentionService.release_chat(chat)
        return ServiceResult.success(chat)


class MakePublicGroupHandler(CommandHandler):
    validator_class = GroupShortnameValidator

    @classmethod
    def execute(cls, command: MakePublicGroupCommand) -> ServiceResult[Chat]:
        user, failure = load_actor(cls, command.user_id, GROUP_ACTOR_MESSAGES)
        if failure:
            return failure
        chat, failure = load_group(cls, command.group_id)
        if failure:
            return failure
        if not chat.is_private:
            return cls.reject("Group is public", ErrorCode.GROUP_ALREADY_PUBLIC)
        _, failure = require_creator(cls, chat, user)
        if failure:
            return failure
        if MentionService.is_taken(command.shortname):
            return cls.reject(SHORTNAME_TAKEN_MESSAGE, ErrorCode.SHORTNAME_ALREADY_TAKEN)

        chat.is_private = False
        chat.save(update_fields=["is_private", "updated_at"])
        bound = MentionService.bind_to_chat(chat, command.shortname)
        if not bound:
            return bound
        return ServiceResult.success(chat)


class UpdateGroupShortnameHandler(CommandHandler):
    validator_class = GroupShortnameValidator

    @classmethod
    def execute(cls, command: UpdateGroupShortnameCommand) -> ServiceResult[Chat]:
        user, failure = load_actor(cls, command.user_id, GROUP_ACTOR_MESSAGES)
        if failure:
            return failure
        chat, failure = load_group(cls, command.group_id)
        if failure:
            return failure
        if chat.is_private:
            return cls.reject("Group is private", ErrorCode.GROUP_ALREADY_PRIVATE)
        _, failure = require_creator(cls, chat, user)
        if failure:
            return failure
        if MentionService.is_taken(command.shortname):
            return cls.reject(SHORTNAME_TAKEN_MESSAGE, ErrorCode.SHORTNAME_ALREADY_TAKEN)

        bound = MentionService.bind_to_chat(chat, command.shortname)
        if not bound:
            return bound
        return ServiceResult.success(chat)


# =============================================================================
# Messages
# =============================================================================


class SendMessageHandler(CommandHandler):
    validator_class = SendMessageValidator

    @classmethod
    def execute(cls, command: SendMessageCommand) -> ServiceResult[Message]:
        user, failure = load_actor(cls, command.user_id)
        if failure:
            return failure
        chat, failure = load_chat(cls, command.chat_id)
        if failure:
            return failure
        if chat.membership_of(user) is None:
            return cls.reject("You are not member of chat", ErrorCode.NOT_A_MEMBER)

        message = Message.objects.create(chat=chat, sender=user, text=command.text)
        return ServiceResult.success(message)


class _OwnMessageHandler(CommandHandler):
    """Shared guards for operations on the caller's own message."""

    not_author_message = "User can edit only own messages"

    @classmethod
    def load_own_message(cls, command) -> tuple[Message | None, ServiceResult | None]:
        user, failure = load_actor(cls, command.user_id)
        if failure:
            return None, failure
        chat, failure = load_chat(cls, command.chat_id)
        if failure:
            return None, failure
        if chat.membership_of(user) is None:
            return None, cls.reject("You are not member of chat", ErrorCode.NOT_A_MEMBER)

        message = Message.objects.filter(pk=command.message_id, chat=chat).first()
        if message is None:
            return None, cls.reject("Message not found", ErrorCode.MESSAGE_NOT_FOUND)
        if message.sender_id != user.id:
            return None, cls.reject(cls.not_author_message, ErrorCode.NOT_MESSAGE_AUTHOR)
        return message, None


class UpdateMessageHandler(_OwnMessageHandler):
    validator_class = UpdateMessageValidator

    @classmethod
    def execute(cls, command: UpdateMessageCommand) -> ServiceResult[Message]:
        message, failure = cls.load_own_message(command)
        if failure:
            return failure

        message.text = command.text
        message.edited_at = timezone.now()
        message.save(update_fields=["text", "edited_at", "updated_at"])
        return ServiceResult.success(message)


class DeleteMessageHandler(_OwnMessageHandler):
    validator_class = DeleteMessageValidator
    not_author_message = "User can delete only own messages"

    @classmethod
    def execute(cls, command: DeleteMessageCommand) -> ServiceResult[None]:
        message, failure = cls.load_own_message(command)
        if failure:
            return failure

        message.soft_delete()
        return ServiceResult.success(None)

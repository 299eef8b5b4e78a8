"""
Chat app: personal, one-to-one and group chats with messages.

This app handles:
- One-to-one chats (one per pair of users)
- Groups with creator/member roles, public groups addressable by shortname
- Sending, editing and soft deleting messages

Related apps:
    - accounts: User model, actor guards
    - mentions: Shortnames of public groups

Usage:
    from chat.commands import SendMessageCommand
    from chat.services import SendMessageHandler

    result = SendMessageHandler.handle(
        SendMessageCommand(user_id=user.id, chat_id=chat.id, text="Hello!")
    )
"""

"""
Chat application configuration.

This app provides the chat system with:
- Personal, one-to-one and group chats
- Creator/member roles in groups, public groups addressable by shortname
- Messages with editing and soft deletion
"""

from django.apps import AppConfig


class ChatConfig(AppConfig):
    """Configuration for the chat application."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "chat"
    verbose_name = "Chat"

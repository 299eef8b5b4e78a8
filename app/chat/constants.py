"""
Constants for the chat module.

Import example:
    from chat.constants import CHAT_CONFIG, MESSAGE_CONFIG
"""

from typing import Final


class CHAT_CONFIG:
    """Limits for chats and groups."""

    NAME_MIN_LENGTH: Final[int] = 1
    NAME_MAX_LENGTH: Final[int] = 128
    DESCRIPTION_MAX_LENGTH: Final[int] = 1024
    NICKNAME_MAX_LENGTH: Final[int] = 64

    PERSONAL_CHAT_NAME: Final[str] = "Personal"
    CREATOR_NICKNAME: Final[str] = "Creator"

    # Group member listing
    MEMBERS_DEFAULT_LIMIT: Final[int] = 50
    MEMBERS_MAX_LIMIT: Final[int] = 200
    MEMBERS_SEARCH_MAX_LENGTH: Final[int] = 100


class MESSAGE_CONFIG:
    """Limits for messages."""

    MIN_TEXT_LENGTH: Final[int] = 1
    MAX_TEXT_LENGTH: Final[int] = 1024

    DEFAULT_PAGE_SIZE: Final[int] = 20
    MAX_PAGE_SIZE: Final[int] = 100

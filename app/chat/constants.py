"""
Constants and configuration for chat module features.

This module centralizes configuration values for:
- Chat membership rules (private/group sizes, group naming)
- Message listing (page sizes)
- Attachment handling (storage folders, per-message limits)

Import example:
    from chat.constants import CHAT_CONFIG, MESSAGE_CONFIG
"""

from typing import Final


# =============================================================================
# Chat Configuration
# =============================================================================


class CHAT_CONFIG:
    """Configuration for chat membership and group metadata."""

    PRIVATE_CHAT_MEMBERS: Final[int] = 2
    MIN_GROUP_MEMBERS: Final[int] = 3

    # Derived group names never exceed this many characters
    GROUP_NAME_MAX_LENGTH: Final[int] = 40
    GROUP_NAME_SEPARATOR: Final[str] = ", "
    GROUP_NAME_FALLBACK: Final[str] = "New group"

    GROUP_AVATAR_FOLDER: Final[str] = "group_avatars"


# =============================================================================
# Message Configuration
# =============================================================================


class MESSAGE_CONFIG:
    """Configuration for message listing."""

    DEFAULT_PAGE: Final[int] = 1
    DEFAULT_PAGE_SIZE: Final[int] = 20
    # Upper bound is settings.MESSAGE_PAGE_SIZE_MAX


# =============================================================================
# Attachment Configuration
# =============================================================================


class ATTACHMENT_CONFIG:
    """Configuration for message attachments."""

    FOLDER: Final[str] = "chat_attachments"
    MAX_FILES_PER_MESSAGE: Final[int] = 10

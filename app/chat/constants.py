"""
Constants for chat input limits.

Page sizes are settings (CHAT_MESSAGE_PAGE_SIZE, CHAT_MESSAGE_MAX_PAGE_SIZE)
because deployments tune them; the values here are fixed by the client.

Import example:
    from chat.constants import MESSAGE_CONFIG, GROUP_CONFIG
"""

from typing import Final


class MESSAGE_CONFIG:
    """Limits for message payloads."""

    MAX_CONTENT_LENGTH: Final[int] = 10000  # Characters
    MAX_MEDIA_URL_LENGTH: Final[int] = 1000


class GROUP_CONFIG:
    """Limits for group payloads."""

    MAX_NAME_LENGTH: Final[int] = 200
    MAX_DESCRIPTION_LENGTH: Final[int] = 2000
    MAX_MEMBERS_PER_REQUEST: Final[int] = 500

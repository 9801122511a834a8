"""
OpenAPI schema customizations for drf-spectacular.

Groups operations into tags by URL prefix so ReDoc shows one section per
area of the API. Views may still set tags= in @extend_schema; the hook only
fills in operations that have the generator's default tag.

Tag naming follows the pattern: [App Name] - [Group Name]
Examples:
- Auth
- Chat - Conversations
- Chat - Groups
- Notifications
"""

import re

API_PREFIX = re.compile(r"^/api/v[0-9]+")

# Ordered (prefix, tag) pairs; the first matching prefix wins.
PATH_TAGS = [
    ("/auth/", "Auth"),
    ("/users/", "Auth - Contacts"),
    ("/conversations/", "Chat - Conversations"),
    ("/messages/", "Chat - Messages"),
    ("/groups/", "Chat - Groups"),
    ("/notifications/", "Notifications"),
]

TAG_DESCRIPTIONS = {
    "Auth": "Sign-in and current user retrieval.",
    "Auth - Contacts": "Users the caller is allowed to message, by role.",
    "Chat - Conversations": "Direct conversation list with last message and unread counts.",
    "Chat - Messages": "Cursor-paginated direct message history and sending.",
    "Chat - Groups": "Group lifecycle, membership and group messages.",
    "Notifications": "Push token registration for the mobile client.",
}


def group_endpoints_by_path(result, generator, request, public):
    """
    Postprocessing hook to group API endpoints by function.

    The /api/vN prefix is dropped before matching against PATH_TAGS.
    """
    paths = result.get("paths", {})

    for path, methods in paths.items():
        relative = API_PREFIX.sub("", path)
        tag = next((name for prefix, name in PATH_TAGS if relative.startswith(prefix)), None)
        if tag is None:
            continue
        for operation in methods.values():
            if not isinstance(operation, dict):
                continue
            operation["tags"] = [tag]

    result["tags"] = [
        {"name": name, "description": description}
        for name, description in TAG_DESCRIPTIONS.items()
    ]
    return result

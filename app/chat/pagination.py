"""
Cursor pagination for message threads.

Both direct and group threads are paged the same way:
- Order by id, newest first
- Apply `id < cursor` when a cursor is given
- Fetch limit + 1 rows; the extra row only signals that older messages exist
- Return the page oldest-first for natural reading order

The cursor is the id of the oldest message on the returned page. Passing it
back yields the next older page; nothing is skipped or repeated, and
messages inserted after the cursor was issued never shift older pages.

Design Decisions:
    - Stateless: the cursor is a plain message id, nothing is kept server side
    - Not DRF's CursorPagination: clients send a raw id and expect
      {messages, nextCursor} rather than next/previous links
    - Invalid limits fall back to the default; invalid cursors are rejected
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from django.conf import settings

from core.helpers import parse_positive_int
from core.services import ErrorKind, ServiceResult

if TYPE_CHECKING:
    from django.db.models import QuerySet

    from chat.models import Message


@dataclass
class MessagePage:
    """One page of a thread, oldest message first."""

    messages: list[Message] = field(default_factory=list)
    next_cursor: int | None = None


class ThreadCursorPaginator:
    """
    Keyset paginator over message ids.

    Usage:
        result = ThreadCursorPaginator.from_params(limit="20", cursor=None)
        if not result.success:
            return result
        page = result.data.paginate(thread_queryset)
    """

    def __init__(self, limit: int | None = None, cursor: int | None = None):
        self.limit = limit or settings.CHAT_MESSAGE_PAGE_SIZE
        self.cursor = cursor

    @classmethod
    def from_params(cls, limit=None, cursor=None) -> ServiceResult[ThreadCursorPaginator]:
        """
        Build a paginator from raw query parameters.

        Returns:
            ServiceResult with the paginator, or a VALIDATION failure
            (INVALID_CURSOR) when the cursor is not a positive integer.
        """
        parsed_limit = parse_positive_int(
            limit,
            default=settings.CHAT_MESSAGE_PAGE_SIZE,
            maximum=settings.CHAT_MESSAGE_MAX_PAGE_SIZE,
        )

        parsed_cursor = None
        if cursor not in (None, ""):
            parsed_cursor = parse_positive_int(cursor)
            if parsed_cursor is None:
                return ServiceResult.failure(
                    "Invalid cursor",
                    error_code="INVALID_CURSOR",
                    kind=ErrorKind.VALIDATION,
                    errors={"cursor": ["Must be a message id."]},
                )

        return ServiceResult.success(cls(limit=parsed_limit, cursor=parsed_cursor))

    def paginate(self, queryset: QuerySet[Message]) -> MessagePage:
        """Fetch one page from a thread queryset."""
        queryset = queryset.order_by("-id")
        if self.cursor is not None:
            queryset = queryset.filter(id__lt=self.cursor)

        rows = list(queryset[: self.limit + 1])
        has_more = len(rows) > self.limit
        rows = rows[: self.limit]

        next_cursor = rows[-1].pk if has_more else None
        rows.reverse()
        return MessagePage(messages=rows, next_cursor=next_cursor)

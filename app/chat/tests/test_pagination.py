"""
Tests for ThreadCursorPaginator.

Covers:
- Parameter parsing: limit fallback and cap, cursor validation
- Completeness: walking every page yields each message exactly once
- Stability: new messages never shift pages behind an issued cursor
"""

import pytest

from chat.models import Message
from chat.pagination import ThreadCursorPaginator
from chat.tests.factories import DirectMessageFactory


def walk_thread(queryset, limit):
    """Follow nextCursor until exhausted; return all pages newest-first."""
    pages = []
    cursor = None
    while True:
        page = ThreadCursorPaginator(limit=limit, cursor=cursor).paginate(queryset)
        pages.append(page)
        if page.next_cursor is None:
            return pages
        cursor = page.next_cursor


class TestFromParams:
    @pytest.fixture(autouse=True)
    def page_sizes(self, settings):
        settings.CHAT_MESSAGE_PAGE_SIZE = 20
        settings.CHAT_MESSAGE_MAX_PAGE_SIZE = 100

    @pytest.mark.parametrize("raw", [None, "", "abc", "0", "-5", "2.5"])
    def test_invalid_limit_falls_back_to_default(self, raw):
        result = ThreadCursorPaginator.from_params(limit=raw)

        assert result.success
        assert result.data.limit == 20

    def test_limit_capped_at_maximum(self):
        assert ThreadCursorPaginator.from_params(limit="500").data.limit == 100

    def test_valid_limit_used(self):
        assert ThreadCursorPaginator.from_params(limit="7").data.limit == 7

    @pytest.mark.parametrize("raw", [None, ""])
    def test_missing_cursor_starts_at_newest(self, raw):
        assert ThreadCursorPaginator.from_params(cursor=raw).data.cursor is None

    @pytest.mark.parametrize("raw", ["abc", "0", "-3"])
    def test_malformed_cursor_rejected(self, raw):
        result = ThreadCursorPaginator.from_params(cursor=raw)

        assert not result.success
        assert result.error_code == "INVALID_CURSOR"
        assert "cursor" in result.errors

    def test_numeric_cursor_parsed(self):
        assert ThreadCursorPaginator.from_params(cursor="42").data.cursor == 42


class TestPaginate:
    def test_empty_thread(self, db):
        page = ThreadCursorPaginator(limit=10).paginate(Message.objects.all())

        assert page.messages == []
        assert page.next_cursor is None

    def test_first_page_is_newest_in_reading_order(self, organization, volunteer):
        messages = DirectMessageFactory.create_batch(5, sender=organization, receiver=volunteer)

        page = ThreadCursorPaginator(limit=3).paginate(Message.objects.all())

        assert [m.pk for m in page.messages] == [m.pk for m in messages[2:]]
        assert page.next_cursor == messages[2].pk

    def test_exact_fit_has_no_next_cursor(self, organization, volunteer):
        DirectMessageFactory.create_batch(4, sender=organization, receiver=volunteer)

        page = ThreadCursorPaginator(limit=4).paginate(Message.objects.all())

        assert len(page.messages) == 4
        assert page.next_cursor is None

    @pytest.mark.parametrize("total", [1, 6, 10, 23])
    @pytest.mark.parametrize("limit", [1, 3, 10])
    def test_walking_pages_returns_every_message_once(
        self, organization, volunteer, total, limit
    ):
        """
        Concatenating all pages reproduces the thread exactly.

        Why it matters: A client scrolling back through history must never
        miss a message or see one twice.
        """
        messages = DirectMessageFactory.create_batch(
            total, sender=organization, receiver=volunteer
        )

        pages = walk_thread(Message.objects.all(), limit)

        seen = []
        for page in reversed(pages):
            ids = [m.pk for m in page.messages]
            assert ids == sorted(ids)
            assert len(ids) <= limit
            seen.extend(ids)
        assert seen == [m.pk for m in messages]

    def test_new_messages_do_not_shift_older_pages(self, organization, volunteer):
        """
        Why it matters: Messages arriving while a user scrolls back must
        not duplicate or hide older history.
        """
        DirectMessageFactory.create_batch(12, sender=organization, receiver=volunteer)
        queryset = Message.objects.all()

        first = ThreadCursorPaginator(limit=5).paginate(queryset)
        expected = ThreadCursorPaginator(limit=5, cursor=first.next_cursor).paginate(queryset)

        DirectMessageFactory.create_batch(3, sender=volunteer, receiver=organization)
        second = ThreadCursorPaginator(limit=5, cursor=first.next_cursor).paginate(queryset)

        assert [m.pk for m in second.messages] == [m.pk for m in expected.messages]
        assert second.next_cursor == expected.next_cursor

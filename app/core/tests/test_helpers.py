"""Tests for core.helpers."""

import pytest

from core.helpers import page_bounds, parse_positive_int, total_pages


@pytest.mark.parametrize(
    "value,expected",
    [
        ("5", 5),
        (5, 5),
        (None, 10),
        ("", 10),
        ("abc", 10),
        ("0", 10),
        ("-1", 10),
        ("500", 50),
    ],
)
def test_parse_positive_int(value, expected):
    assert parse_positive_int(value, default=10, maximum=50) == expected


def test_parse_positive_int_without_default():
    assert parse_positive_int("nope") is None


@pytest.mark.parametrize("page,per_page,expected", [(1, 20, (0, 20)), (3, 50, (100, 150))])
def test_page_bounds(page, per_page, expected):
    assert page_bounds(page, per_page) == expected


@pytest.mark.parametrize("total,per_page,expected", [(0, 50, 0), (50, 50, 1), (51, 50, 2), (5, 0, 0)])
def test_total_pages(total, per_page, expected):
    assert total_pages(total, per_page) == expected

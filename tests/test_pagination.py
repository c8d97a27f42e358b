from __future__ import annotations

import pytest

from expense_tracker.v1_0.entities import build_pagination, page_offset
from expense_tracker.v1_0.services.analytics_service import share_percentage


def test_pagination_arithmetic():
    p = build_pagination(page=3, page_size=20, total_count=95)
    assert p.total_pages == 5
    assert p.has_next_page is True
    assert p.has_previous_page is True
    assert p.offset == 40
    assert page_offset(3, 20) == 40


def test_last_and_first_pages():
    last = build_pagination(page=5, page_size=20, total_count=95)
    assert last.has_next_page is False
    first = build_pagination(page=1, page_size=20, total_count=95)
    assert first.has_previous_page is False


def test_empty_result_has_no_pages():
    p = build_pagination(page=1, page_size=20, total_count=0)
    assert p.total_pages == 0
    assert p.has_next_page is False


def test_pagination_serializes_camel_case():
    dumped = build_pagination(page=2, page_size=10, total_count=11).model_dump(by_alias=True)
    assert dumped == {
        "page": 2,
        "pageSize": 10,
        "totalCount": 11,
        "totalPages": 2,
        "hasNextPage": False,
        "hasPreviousPage": True,
    }


@pytest.mark.parametrize(
    "total,overall,expected",
    [
        (60.0, 100.0, 60.0),
        (1.0, 3.0, 33.3),
        (2.0, 3.0, 66.7),
        (1.0, 8.0, 12.5),
        (0.5, 400.0, 0.1),
        (5.0, 0.0, 0.0),
    ],
)
def test_share_percentage(total, overall, expected):
    assert share_percentage(total, overall) == pytest.approx(expected)

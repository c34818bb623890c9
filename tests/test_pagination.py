from __future__ import annotations

import pytest

from folio.services.pagination import Page, page_offset


@pytest.mark.parametrize(
    "page,limit,expected", [(1, 10, 0), (2, 10, 10), (3, 50, 100)]
)
def test_page_offset(page, limit, expected):
    assert page_offset(page, limit) == expected


def test_middle_page():
    page = Page(items=[], total=21, page=2, limit=10)
    assert page.total_pages == 3
    assert page.has_next_page is True
    assert page.has_prev_page is True


def test_last_page_and_empty_result():
    assert Page(items=[], total=20, page=2, limit=10).has_next_page is False
    empty = Page(items=[], total=0, page=1, limit=10)
    assert empty.pagination() == {
        "current_page": 1,
        "total_pages": 0,
        "has_next_page": False,
        "has_prev_page": False,
    }

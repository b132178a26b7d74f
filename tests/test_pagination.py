"""Tests for the page envelope."""

from clinic.schemas.common import Page


def test_page_count_rounds_up() -> None:
    page = Page[int].build([1, 2], total=5, page=0, size=2)

    assert page.pages == 3
    assert page.items == [1, 2]


def test_empty_listing() -> None:
    page = Page[int].build([], total=0, page=0, size=10)

    assert page.pages == 0
    assert page.total == 0

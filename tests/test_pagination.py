import pytest

from reward_search.errors import InvalidPageRequestError
from reward_search.pagination import paginate, slice_page, total_pages, validate_page_request


@pytest.mark.parametrize(
    "total, size, expected",
    [(0, 10, 0), (1, 1, 1), (3, 10, 1), (10, 10, 1), (11, 10, 2), (101, 50, 3)],
)
def test_total_pages_is_ceiling(total, size, expected):
    assert total_pages(total, size) == expected


def test_zero_page_size_is_rejected():
    with pytest.raises(InvalidPageRequestError):
        validate_page_request(0, 0)
    with pytest.raises(InvalidPageRequestError):
        total_pages(5, 0)


def test_negative_page_number_is_rejected():
    with pytest.raises(InvalidPageRequestError):
        validate_page_request(-1, 10)


def test_page_past_the_end_keeps_totals():
    page = paginate([], total_elements=7, page_number=5, page_size=3)

    assert page.content == []
    assert page.page_number == 5
    assert page.page_size == 3
    assert page.total_elements == 7
    assert page.total_pages == 3


def test_paginate_refuses_oversized_content():
    with pytest.raises(ValueError):
        paginate([1, 2, 3], total_elements=3, page_number=0, page_size=2)


def test_content_length_matches_remaining_items():
    for total in range(0, 13):
        items = list(range(total))
        for size in range(1, 6):
            for number in range(0, 5):
                page = slice_page(items, number, size)
                assert len(page.content) == min(size, max(0, total - number * size))
                assert page.total_pages == -(-total // size)
                assert page.content == items[number * size:(number + 1) * size]

"""Page envelope construction shared by both search shapes."""
from __future__ import annotations

from typing import List, Sequence, TypeVar

from .entities import Page
from .errors import InvalidPageRequestError

T = TypeVar("T")


def validate_page_request(page_number: int, page_size: int) -> None:
    if page_size < 1:
        raise InvalidPageRequestError(f"page size must be at least 1, got {page_size}")
    if page_number < 0:
        raise InvalidPageRequestError(f"page number must not be negative, got {page_number}")


def page_offset(page_number: int, page_size: int) -> int:
    return page_number * page_size


def total_pages(total_elements: int, page_size: int) -> int:
    """Return ``ceil(total_elements / page_size)`` without floating point."""

    if page_size < 1:
        raise InvalidPageRequestError(f"page size must be at least 1, got {page_size}")
    return -(-total_elements // page_size)


def paginate(content: Sequence[T], total_elements: int, page_number: int, page_size: int) -> Page[T]:
    """Wrap one page of ``content`` with totals.

    The page number is not clamped: asking past the last page yields empty
    content together with the real totals.
    """

    items: List[T] = list(content)
    if len(items) > page_size:
        raise ValueError(f"page holds {len(items)} items but page size is {page_size}")
    return Page(
        content=items,
        page_number=page_number,
        page_size=page_size,
        total_elements=total_elements,
        total_pages=total_pages(total_elements, page_size),
    )


def slice_page(items: Sequence[T], page_number: int, page_size: int) -> Page[T]:
    """Paginate an already ordered, fully materialized sequence."""

    validate_page_request(page_number, page_size)
    start = page_offset(page_number, page_size)
    return paginate(items[start:start + page_size], len(items), page_number, page_size)

"""
Fixed-size pagination with clamp-on-shrink and a free-text page control.
"""

import logging
import math
from typing import List, Sequence, Tuple, TypeVar

logger = logging.getLogger(__name__)

PAGE_SIZE = 5

T = TypeVar("T")


def count_pages(n: int, page_size: int = PAGE_SIZE) -> int:
    """Number of pages for n items; an empty sequence still has one page."""
    return max(1, math.ceil(n / page_size))


def page_bounds(page: int, n: int, page_size: int = PAGE_SIZE) -> Tuple[int, int]:
    """Half-open index range ``[start, end)`` of a 1-based page, clipped to n."""
    start = min((page - 1) * page_size, n)
    end = min(page * page_size, n)
    return start, end


def page_window(items: Sequence[T], page: int, page_size: int = PAGE_SIZE) -> List[T]:
    start, end = page_bounds(page, len(items), page_size)
    return list(items[start:end])


class Pager:
    """Tracks the current page over a sequence that may change between renders."""

    def __init__(self, page_size: int = PAGE_SIZE):
        if page_size < 1:
            raise ValueError(f"Page size must be positive, got {page_size}")
        self.page_size = page_size
        self._items: Tuple = ()
        self._current_page = 1
        self._page_input = "0"

    def update(self, items: Sequence) -> None:
        """Replace the backing sequence, clamping the current page if it shrank."""
        self._items = tuple(items)
        if self._current_page > self.total_pages:
            logger.info(f"Clamping page {self._current_page} to {self.total_pages}")
            self._current_page = self.total_pages
        self._sync_input()

    @property
    def total_items(self) -> int:
        return len(self._items)

    @property
    def total_pages(self) -> int:
        return count_pages(self.total_items, self.page_size)

    @property
    def current_page(self) -> int:
        return self._current_page

    @property
    def window(self) -> List:
        return page_window(self._items, self._current_page, self.page_size)

    @property
    def page_start(self) -> int:
        """1-based position of the first item on the page, 0 when empty."""
        if self.total_items == 0:
            return 0
        return (self._current_page - 1) * self.page_size + 1

    @property
    def page_end(self) -> int:
        """1-based position of the last item on the page, 0 when empty."""
        if self.total_items == 0:
            return 0
        return min(self.page_start + self.page_size - 1, self.total_items)

    @property
    def disabled(self) -> bool:
        return self.total_items == 0

    @property
    def page_input(self) -> str:
        """Text shown in the go-to-page control."""
        return self._page_input

    def go_to_page(self, page: int) -> None:
        if self.disabled:
            return
        self._current_page = min(max(1, int(page)), self.total_pages)
        self._sync_input()

    def next_page(self) -> None:
        self.go_to_page(self._current_page + 1)

    def previous_page(self) -> None:
        self.go_to_page(self._current_page - 1)

    def set_page_input(self, text: str) -> None:
        """Store typed text, keeping digits only."""
        self._page_input = "".join(ch for ch in text if ch in "0123456789")

    def commit_page_input(self) -> None:
        if self.disabled:
            return
        if not self._page_input:
            self._sync_input()
            return
        self.go_to_page(int(self._page_input))

    def _sync_input(self) -> None:
        self._page_input = "0" if self.disabled else str(self._current_page)

"""Main browser state: visible book ids, cursor, filtering and sorting.

The browser never holds references to books across operations. It stores
ids only and resolves them against the bookcase whenever it needs content,
so a book removed behind its back is simply skipped.
"""

from __future__ import annotations

import enum
import logging
import random
from collections.abc import Callable, Sequence
from dataclasses import dataclass

from booktop.bookcase import Bookcase
from booktop.models import Book, Filter, ReadState, Sorting

logger = logging.getLogger(__name__)


# ============================================================================
# Navigation arithmetic (shared with SelectionList)
# ============================================================================


def move_by(current: int, delta: int, length: int) -> int | None:
    """Move ``current`` by ``delta`` within ``[0, length)``.

    Overflow past either end sticks at that end rather than wrapping.
    Returns None when ``length`` is zero.
    """
    if length <= 0:
        return None
    return max(0, min(current + delta, length - 1))


def move_to(n: int, length: int) -> int | None:
    """Resolve a user-facing row address to an index.

    ``n < 0`` counts from the end (-1 is the last row), ``n == 0`` is the
    first row, and ``n > 0`` is 1-based. Out-of-range addresses clamp.
    Returns None when ``length`` is zero.
    """
    if length <= 0:
        return None
    if n < 0:
        index = length + n
    elif n == 0:
        index = 0
    else:
        index = n - 1
    return max(0, min(index, length - 1))


# ============================================================================
# Pure projections over (bookcase, ids)
# ============================================================================


@dataclass(slots=True, frozen=True)
class BookRow:
    """One rendered table row."""

    book_id: int
    symbol: str
    title: str
    author: str


def project_rows(bookcase: Bookcase, ids: Sequence[int]) -> list[BookRow]:
    """Build table rows for ``ids``, skipping ids no longer in the bookcase."""
    rows: list[BookRow] = []
    for entry in bookcase.get_books_by_ids(ids):
        if entry is None:
            continue
        book_id, book = entry
        rows.append(BookRow(book_id, book.read.symbol, book.title, book.author))
    return rows


def filter_ids(bookcase: Bookcase, ids: Sequence[int], book_filter: Filter) -> list[int]:
    """Return the ordered subsequence of ``ids`` whose book matches the filter."""
    return [
        entry[0]
        for entry in bookcase.get_books_by_ids(ids)
        if entry is not None and book_filter.matches(entry[1])
    ]


def sort_ids(bookcase: Bookcase, ids: Sequence[int], sorting: Sorting) -> list[int]:
    """Order ``ids`` by the books' title or author (ordinal, ascending).

    Membership is unchanged; ids missing from the bookcase sort last.
    """

    def _key(book_id: int) -> tuple[int, str]:
        book = bookcase.get_book(book_id)
        if book is None:
            return (1, "")
        return (0, book.sort_key(sorting))

    return sorted(ids, key=_key)


# ============================================================================
# Browser state
# ============================================================================


class Popup(enum.Enum):
    """Which modal dialog, if any, currently owns input."""

    NONE = "none"
    FILTER = "filter"
    EDITOR = "editor"


class BrowserState:
    """Authoritative VisibleSet and Cursor for the main view."""

    def __init__(self, bookcase: Bookcase) -> None:
        self.bookcase = bookcase
        self.visible_ids: list[int] = bookcase.get_ids()
        self.cursor: int | None = 0 if self.visible_ids else None
        self.sorting: Sorting | None = None
        self.filtered: bool = False
        self.popup: Popup = Popup.NONE

    def __len__(self) -> int:
        return len(self.visible_ids)

    # -- navigation ---------------------------------------------------------

    def move_by(self, delta: int) -> None:
        if self.cursor is None:
            return
        self.cursor = move_by(self.cursor, delta, len(self.visible_ids))

    def move_to(self, n: int) -> None:
        if self.cursor is None:
            return
        self.cursor = move_to(n, len(self.visible_ids))

    def random_jump(self, rng: random.Random | None = None) -> None:
        """Move the cursor to a uniformly random visible row."""
        if not self.visible_ids:
            return
        self.cursor = (rng or random).randrange(len(self.visible_ids))

    def current_id(self) -> int | None:
        if self.cursor is None:
            return None
        return self.visible_ids[self.cursor]

    def current_book(self) -> Book | None:
        book_id = self.current_id()
        if book_id is None:
            return None
        return self.bookcase.get_book(book_id)

    def _reset_cursor(self) -> None:
        self.cursor = 0 if self.visible_ids else None

    # -- filtering and sorting ---------------------------------------------

    def apply_filter(self, book_filter: Filter) -> None:
        """Narrow the visible ids to those matching ``book_filter``.

        Filters compose: previously hidden ids are never re-included until
        :meth:`reset_visible` is called.
        """
        before = len(self.visible_ids)
        self.visible_ids = filter_ids(self.bookcase, self.visible_ids, book_filter)
        self.filtered = True
        self._reset_cursor()
        logger.debug("Filter applied: %s, visible %d -> %d", book_filter, before, len(self))

    def reset_visible(self) -> None:
        """Restore the visible ids to every id in the bookcase."""
        self.visible_ids = self.bookcase.get_ids()
        self.filtered = False
        self.sorting = None
        self._reset_cursor()

    def sort(self, sorting: Sorting) -> None:
        """Reorder the visible ids in place, keeping the cursor index."""
        self.visible_ids = sort_ids(self.bookcase, self.visible_ids, sorting)
        self.sorting = sorting

    def rows(self) -> list[BookRow]:
        return project_rows(self.bookcase, self.visible_ids)

    # -- mutation -----------------------------------------------------------

    def _mutate_current(self, mutate: Callable[[Book], None]) -> bool:
        book_id = self.current_id()
        if book_id is None:
            return False
        book = self.bookcase.get_book(book_id)
        if book is None:
            logger.debug("Visible id %d is stale; skipping quick action", book_id)
            return False
        mutate(book)
        return True

    def set_current_state(self, state: ReadState) -> bool:
        """Set the read state of the book under the cursor."""
        actions: dict[ReadState, Callable[[Book], None]] = {
            ReadState.READING: Book.start,
            ReadState.READ: Book.finish,
            ReadState.STOPPED: Book.stop,
            ReadState.UNREAD: Book.reset,
        }
        return self._mutate_current(actions[state])

    def start_current(self) -> bool:
        return self.set_current_state(ReadState.READING)

    def finish_current(self) -> bool:
        return self.set_current_state(ReadState.READ)

    def stop_current(self) -> bool:
        return self.set_current_state(ReadState.STOPPED)

    def reset_current(self) -> bool:
        return self.set_current_state(ReadState.UNREAD)

    def replace(self, book_id: int, book: Book) -> None:
        """Overwrite the book stored at ``book_id``."""
        self.bookcase.replace_book(book_id, book)


__all__ = [
    "BookRow",
    "BrowserState",
    "Popup",
    "filter_ids",
    "move_by",
    "move_to",
    "project_rows",
    "sort_ids",
]

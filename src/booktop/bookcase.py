"""The bookcase: an id-keyed collection of books and its CRUD operations."""

from __future__ import annotations

import logging
import random
from collections.abc import Iterable

from booktop.errors import EmptyBookcaseError
from booktop.models import DEFAULT_BOOKCASE_NAME, DEFAULT_BOOKCASE_VERSION, Book

logger = logging.getLogger(__name__)


class Bookcase:
    """Named collection of books keyed by small positive integer ids.

    Iteration order is always ascending by id. Ids are allocated as
    ``max(existing) + 1`` and are never reused while a higher id exists.
    """

    def __init__(
        self,
        name: str = DEFAULT_BOOKCASE_NAME,
        books: dict[int, Book] | None = None,
        version: str = DEFAULT_BOOKCASE_VERSION,
    ) -> None:
        self.name = name
        self.version = version
        self._books: dict[int, Book] = dict(sorted((books or {}).items()))

    def __len__(self) -> int:
        return len(self._books)

    def __contains__(self, book_id: object) -> bool:
        return book_id in self._books

    def get_ids(self) -> list[int]:
        return list(self._books)

    def get_books(self) -> list[tuple[int, Book]]:
        return list(self._books.items())

    def get_book(self, book_id: int) -> Book | None:
        """Return the live book for ``book_id``, or None if absent."""
        return self._books.get(book_id)

    def get_books_by_ids(self, ids: Iterable[int]) -> list[tuple[int, Book] | None]:
        """Look up several ids, one result per input id, preserving order."""
        result: list[tuple[int, Book] | None] = []
        for book_id in ids:
            book = self._books.get(book_id)
            result.append((book_id, book) if book is not None else None)
        return result

    def replace_book(self, book_id: int, book: Book) -> None:
        """Insert or overwrite the book stored at ``book_id``."""
        is_new = book_id not in self._books
        self._books[book_id] = book
        if is_new:
            self._books = dict(sorted(self._books.items()))
        logger.debug("Replaced book %d: %s", book_id, book)

    def add_book(self, title: str, author: str) -> int:
        """Add a new unread book and return its id."""
        book_id = max(self._books, default=0) + 1
        self._books[book_id] = Book(title=title, author=author)
        logger.debug("Added book %d: %r by %r", book_id, title, author)
        return book_id

    def remove_book(self, book_id: int) -> bool:
        """Remove a book. Returns False if the id was not present."""
        return self._books.pop(book_id, None) is not None

    def authors(self) -> list[str]:
        """Distinct authors in encounter (id) order."""
        return list(dict.fromkeys(book.author for book in self._books.values()))

    def tags(self) -> set[str]:
        """Union of all tags across the bookcase."""
        result: set[str] = set()
        for book in self._books.values():
            result |= book.tags
        return result

    def pick_random_id(self, rng: random.Random | None = None) -> int:
        """Pick a uniformly random id. Raises EmptyBookcaseError when empty."""
        if not self._books:
            raise EmptyBookcaseError("No books to pick from")
        return (rng or random).choice(list(self._books))

    def renumber(self) -> None:
        """Re-index books to 1..n, preserving their order."""
        self._books = {i: book for i, book in enumerate(self._books.values(), start=1)}

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Bookcase):
            return NotImplemented
        return (
            self.name == other.name
            and self.version == other.version
            and self._books == other._books
        )

    def __repr__(self) -> str:
        return f"Bookcase(name={self.name!r}, books={len(self._books)})"


def example_bookcase() -> Bookcase:
    """A small non-empty bookcase for demos and tests."""
    bookcase = Bookcase()
    bookcase.add_book("Great Expectations", "Charles Dickens")
    bookcase.add_book("Journey to the Center of the Earth", "Jules Verne")
    return bookcase


__all__ = [
    "Bookcase",
    "example_bookcase",
]

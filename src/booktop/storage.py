"""Bookcase persistence: YAML load and atomic save."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml

from booktop.bookcase import Bookcase
from booktop.errors import BookcaseFileError
from booktop.io_utils import atomic_write_text
from booktop.models import DEFAULT_BOOKCASE_NAME, DEFAULT_BOOKCASE_VERSION, Book, ReadState

logger = logging.getLogger(__name__)

# ============================================================================
# File layout
# ============================================================================
#
#   name: Bookcase
#   version: 0.0.1
#   books:
#     1:
#       title: Great Expectations
#       author: Charles Dickens
#       read: Unread          # optional, defaults to Unread
#       tags: [classic]       # optional, defaults to []
#


def _book_to_dict(book: Book) -> dict[str, Any]:
    return {
        "title": book.title,
        "author": book.author,
        "read": book.read.value,
        "tags": sorted(book.tags),
    }


def bookcase_to_dict(bookcase: Bookcase) -> dict[str, Any]:
    """Serialize a bookcase to a YAML-compatible dictionary."""
    return {
        "name": bookcase.name,
        "version": bookcase.version,
        "books": {book_id: _book_to_dict(book) for book_id, book in bookcase.get_books()},
    }


def _parse_book(book_id: Any, raw: Any) -> Book:
    if not isinstance(raw, dict):
        raise BookcaseFileError(f"Book {book_id!r} is not a mapping")
    title = raw.get("title")
    author = raw.get("author")
    if not isinstance(title, str) or not isinstance(author, str):
        raise BookcaseFileError(f"Book {book_id!r} needs string title and author")

    read_raw = raw.get("read", ReadState.UNREAD.value)
    try:
        read = ReadState.from_name(str(read_raw))
    except ValueError as e:
        raise BookcaseFileError(f"Book {book_id!r}: {e}") from e

    tags_raw = raw.get("tags") or []
    if not isinstance(tags_raw, list):
        raise BookcaseFileError(f"Book {book_id!r} tags must be a list")
    return Book(title=title, author=author, read=read, tags={str(t) for t in tags_raw})


def bookcase_from_dict(data: dict[str, Any]) -> Bookcase:
    """Deserialize a dictionary produced by :func:`bookcase_to_dict`."""
    raw_books = data.get("books") or {}
    if not isinstance(raw_books, dict):
        raise BookcaseFileError("'books' must be a mapping of id to book")

    books: dict[int, Book] = {}
    for raw_id, raw_book in raw_books.items():
        try:
            book_id = int(raw_id)
        except (TypeError, ValueError) as e:
            raise BookcaseFileError(f"Invalid book id {raw_id!r}") from e
        if book_id < 1:
            raise BookcaseFileError(f"Book ids must be positive, got {book_id}")
        books[book_id] = _parse_book(raw_id, raw_book)

    return Bookcase(
        name=str(data.get("name", DEFAULT_BOOKCASE_NAME)),
        books=books,
        version=str(data.get("version", DEFAULT_BOOKCASE_VERSION)),
    )


def load_bookcase(path: Path) -> Bookcase:
    """Load a bookcase from ``path``.

    An empty file yields an empty bookcase. Raises BookcaseFileError when the
    file is missing, unreadable, or not a valid bookcase document.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError as e:
        raise BookcaseFileError(f"{path} not found") from e
    except OSError as e:
        raise BookcaseFileError(f"Failed to read {path}: {e}") from e
    except UnicodeDecodeError as e:
        raise BookcaseFileError(f"{path} is not valid UTF-8: {e}") from e

    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise BookcaseFileError(f"{path} has invalid YAML: {e}") from e

    if data is None:
        logger.debug("Bookcase file %s is empty, starting a new bookcase", path)
        return Bookcase()
    if not isinstance(data, dict):
        raise BookcaseFileError(f"{path} must contain a YAML mapping")

    bookcase = bookcase_from_dict(data)
    logger.debug("Loaded %d books from %s", len(bookcase), path)
    return bookcase


def save_bookcase(bookcase: Bookcase, path: Path) -> None:
    """Save a bookcase to ``path`` atomically.

    Uses write-to-tempfile + os.replace() so an interrupted write never
    leaves a truncated bookcase behind. Raises BookcaseFileError on failure.
    """
    text = yaml.safe_dump(bookcase_to_dict(bookcase), sort_keys=False, allow_unicode=True)
    try:
        atomic_write_text(path, text, prefix=".bookcase-")
    except OSError as e:
        logger.error("Failed to save bookcase to %s: %s", path, e)
        raise BookcaseFileError(f"Failed to write {path}: {e}") from e
    logger.debug("Saved %d books to %s", len(bookcase), path)


__all__ = [
    "bookcase_from_dict",
    "bookcase_to_dict",
    "load_bookcase",
    "save_bookcase",
]

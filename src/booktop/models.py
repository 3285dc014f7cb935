"""Data models and constants for the Booktop application."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field

# Application identity: single source of truth for platformdirs config paths
CONFIG_APP_NAME = "booktop"

DEFAULT_BOOKCASE_FILENAME = "bookcase.booktop.yaml"
DEFAULT_BOOKCASE_NAME = "Bookcase"
DEFAULT_BOOKCASE_VERSION = "0.0.1"

DEFAULT_TAG_SEPARATOR = ","

# Sort order options (names accepted by config and CLI)
SORT_OPTIONS = ["title", "author"]


class ReadState(enum.Enum):
    """Reading progress of a book.

    Member order is the canonical order used wherever states are listed.
    """

    READ = "Read"
    READING = "Reading"
    STOPPED = "Stopped"
    UNREAD = "Unread"

    @property
    def symbol(self) -> str:
        """Single-character marker shown in the book table."""
        return READ_SYMBOLS[self]

    @classmethod
    def from_name(cls, name: str) -> ReadState:
        """Parse a display name case-insensitively. Raises ValueError."""
        for state in cls:
            if state.value.lower() == name.strip().lower():
                return state
        raise ValueError(f"Unknown read state: {name!r}")

    def __str__(self) -> str:
        return self.value


READ_SYMBOLS: dict[ReadState, str] = {
    ReadState.READ: "F",
    ReadState.READING: "R",
    ReadState.STOPPED: "S",
    ReadState.UNREAD: "U",
}


class Sorting(enum.Enum):
    """Field used to order the visible books."""

    TITLE = "title"
    AUTHOR = "author"


@dataclass(slots=True)
class Book:
    """A single entry in the bookcase."""

    title: str = "Title Unknown"
    author: str = "Author Unknown"
    read: ReadState = ReadState.UNREAD
    tags: set[str] = field(default_factory=set)

    def start(self) -> None:
        self.read = ReadState.READING

    def finish(self) -> None:
        self.read = ReadState.READ

    def stop(self) -> None:
        self.read = ReadState.STOPPED

    def reset(self) -> None:
        self.read = ReadState.UNREAD

    def tag(self, tag: str) -> bool:
        """Add a tag. Returns False if it was already present."""
        if tag in self.tags:
            return False
        self.tags.add(tag)
        return True

    def untag(self, tag: str) -> bool:
        """Remove a tag. Returns False if it was not present."""
        if tag not in self.tags:
            return False
        self.tags.discard(tag)
        return True

    def contains_tag(self, tag: str) -> bool:
        return tag in self.tags

    def sort_key(self, sorting: Sorting) -> str:
        """Return the field compared when ordering by ``sorting``."""
        if sorting is Sorting.AUTHOR:
            return self.author
        return self.title

    def copy(self) -> Book:
        """Snapshot with its own tag set."""
        return Book(title=self.title, author=self.author, read=self.read, tags=set(self.tags))

    def __str__(self) -> str:
        return f'{self.title}---"{self.author}" ({self.read})'


@dataclass(slots=True)
class Filter:
    """Per-dimension inclusion predicate over books.

    An empty set matches every book for that dimension. A non-empty set
    requires membership (OR within a dimension, AND across dimensions).
    """

    author_match: set[str] = field(default_factory=set)
    read_match: set[ReadState] = field(default_factory=set)
    tag_match: set[str] = field(default_factory=set)

    def is_empty(self) -> bool:
        return not (self.author_match or self.read_match or self.tag_match)

    def matches(self, book: Book) -> bool:
        if self.author_match and not any(
            _string_match(author, book.author) for author in self.author_match
        ):
            return False
        if self.read_match and book.read not in self.read_match:
            return False
        if self.tag_match and not (self.tag_match & book.tags):
            return False
        return True


def _string_match(a: str, b: str) -> bool:
    """Case-insensitive comparison used for author criteria."""
    return a.casefold() == b.casefold()


@dataclass(slots=True)
class UserConfig:
    """User preferences persisted between sessions."""

    default_bookcase: str = ""  # Empty = no fallback bookcase file
    theme_name: str = "monokai"
    tag_separator: str = DEFAULT_TAG_SEPARATOR
    default_sort: str = "title"  # "title" | "author"
    sort_on_start: bool = False
    version: int = 1

    def __post_init__(self) -> None:
        """Clamp fields that have a closed set of valid values."""
        if len(self.tag_separator) != 1 or self.tag_separator.isspace():
            self.tag_separator = DEFAULT_TAG_SEPARATOR
        if self.default_sort not in SORT_OPTIONS:
            self.default_sort = "title"


__all__ = [
    "CONFIG_APP_NAME",
    "DEFAULT_BOOKCASE_FILENAME",
    "DEFAULT_BOOKCASE_NAME",
    "DEFAULT_BOOKCASE_VERSION",
    "DEFAULT_TAG_SEPARATOR",
    "READ_SYMBOLS",
    "SORT_OPTIONS",
    "Book",
    "Filter",
    "ReadState",
    "Sorting",
    "UserConfig",
]

"""Booktop: a personal library tracker with a terminal UI."""

from booktop.bookcase import Bookcase, example_bookcase
from booktop.browser import BrowserState, move_by, move_to
from booktop.errors import (
    BookcaseFileError,
    BooktopError,
    CommandError,
    EmptyBookcaseError,
)
from booktop.models import Book, Filter, ReadState, Sorting, UserConfig
from booktop.storage import load_bookcase, save_bookcase

__version__ = "0.1.0"

__all__ = [
    "Book",
    "Bookcase",
    "BookcaseFileError",
    "BooktopError",
    "BrowserState",
    "CommandError",
    "EmptyBookcaseError",
    "Filter",
    "ReadState",
    "Sorting",
    "UserConfig",
    "example_bookcase",
    "load_bookcase",
    "move_by",
    "move_to",
    "save_bookcase",
]

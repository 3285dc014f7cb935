"""Shared test fixtures for Booktop tests."""

from __future__ import annotations

import logging
from typing import Any

import pytest

from booktop.bookcase import Bookcase
from booktop.models import Book, ReadState, UserConfig
from booktop.themes import DEFAULT_THEME, THEME_COLORS

# ── Module-level state isolation ─────────────────────────────────────────────


@pytest.fixture(autouse=True)
def _reset_global_state():
    """Restore THEME_COLORS and re-enable logging after each test.

    BooktopApp mutates THEME_COLORS when applying a theme, and the CLI calls
    logging.disable() when --debug is not given.
    """
    yield
    THEME_COLORS.clear()
    THEME_COLORS.update(DEFAULT_THEME)
    logging.disable(logging.NOTSET)


@pytest.fixture(autouse=True)
def _isolate_config_dir(tmp_path, monkeypatch):
    """Point the config directory at a per-test temp dir."""
    config_dir = tmp_path / "config"
    monkeypatch.setattr("booktop.config.user_config_dir", lambda *_a, **_k: str(config_dir))
    return config_dir


# ── Factories ────────────────────────────────────────────────────────────────


@pytest.fixture
def make_book():
    """Factory fixture for creating Book instances with sensible defaults."""

    def _make(
        title: str = "Test Book",
        author: str = "Test Author",
        read: ReadState = ReadState.UNREAD,
        tags: set[str] | None = None,
    ) -> Book:
        return Book(title=title, author=author, read=read, tags=set(tags or ()))

    return _make


@pytest.fixture
def make_bookcase(make_book):
    """Factory fixture building a bookcase numbered from 1.

    Each entry is a Book or a ``(title, author)`` / ``(title, author, tags)`` tuple.
    """

    def _make(*entries: Any, name: str = "Bookcase") -> Bookcase:
        books: dict[int, Book] = {}
        for book_id, entry in enumerate(entries, start=1):
            if isinstance(entry, Book):
                books[book_id] = entry
            else:
                title, author, *rest = entry
                books[book_id] = make_book(title=title, author=author, tags=rest[0] if rest else None)
        return Bookcase(name=name, books=books)

    return _make


@pytest.fixture
def two_book_bookcase(make_bookcase):
    """Great Expectations (no tags) and Journey to the Center of the Earth (scifi)."""
    return make_bookcase(
        ("Great Expectations", "Charles Dickens"),
        ("Journey to the Center of the Earth", "Jules Verne", {"scifi"}),
    )


@pytest.fixture
def sample_config():
    """Factory fixture for creating UserConfig with optional overrides."""

    def _make(**kwargs: Any) -> UserConfig:
        return UserConfig(**kwargs)

    return _make

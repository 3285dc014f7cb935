#!/usr/bin/env python3
"""Booktop - a terminal browser for a personal bookcase.

Usage:
    booktop                       # Open ./bookcase.booktop.yaml (or config default)
    booktop -f books.yaml         # Use a specific bookcase file
    booktop tui books.yaml        # Same, as an explicit subcommand
    booktop list                  # Print the bookcase and exit

Key bindings:
    j/k     - Navigate down/up (arrow keys too)
    G       - Jump to last row (nG jumps to row n)
    g       - Jump to first row
    ?       - Jump to a random book
    f       - Open the filter dialog (filters narrow the visible books)
    F       - Reset the filter
    t / a   - Sort by title / author
    Enter   - Edit the current book
    s/d/x/u - Start / finish / stop / reset reading
    Ctrl+t  - Cycle color theme
    h       - Help overlay
    q / Esc - Quit
"""

from __future__ import annotations

import logging
import random
import sys
from collections.abc import Callable
from pathlib import Path

from textual.app import App, ComposeResult
from textual.containers import Vertical
from textual.events import Key
from textual.screen import ModalScreen
from textual.timer import Timer
from textual.widgets import Header, Label

from booktop.bookcase import Bookcase
from booktop.browser import BrowserState, Popup
from booktop.cli import _configure_logging, _validate_interactive_tty
from booktop.cli import main as _cli_main
from booktop.config import load_config, save_config
from booktop.errors import BookcaseFileError, CommandError
from booktop.formatting import pluralize, truncate_text
from booktop.help_ui import build_help_sections
from booktop.modals import BookEditorModal, FilterModal, HelpScreen
from booktop.models import Book, Filter, ReadState, Sorting, UserConfig
from booktop.storage import save_bookcase
from booktop.themes import TEXTUAL_THEMES, apply_theme_colors, next_theme_name
from booktop.ui_constants import APP_BINDINGS, APP_CSS
from booktop.widgets import (
    BROWSE_FOOTER_BINDINGS,
    BookTable,
    ContextFooter,
    StatusBar,
    build_status_text,
    count_badge,
)

logger = logging.getLogger(__name__)

# Interval of the redraw tick that keeps the status line current
TICK_SECONDS = 0.1

# Longest row number accepted as an ``nG`` prefix
MAX_COUNT_DIGITS = 6

# Notification titles are clipped to keep toasts on one line
NOTIFY_TITLE_MAX_LEN = 40


class BooktopApp(App):
    """A TUI application to browse and edit a bookcase."""

    TITLE = "Booktop"

    CSS = APP_CSS

    BINDINGS = APP_BINDINGS

    def __init__(
        self,
        bookcase: Bookcase,
        config: UserConfig | None = None,
        bookcase_path: Path | None = None,
        save_on_exit: bool = True,
        rng: random.Random | None = None,
    ) -> None:
        super().__init__()
        # Register all Textual themes so $th-* CSS variables resolve before compose()
        for textual_theme in TEXTUAL_THEMES.values():
            self.register_theme(textual_theme)
        self._config = config or UserConfig()
        self._apply_theme()
        self.bookcase = bookcase
        self.state = BrowserState(bookcase)
        self._bookcase_path = bookcase_path
        self._save_on_exit = save_on_exit and bookcase_path is not None
        self._rng = rng
        self._count_prefix = ""
        self._tick_timer: Timer | None = None
        self._last_status = ""
        self.save_error: str | None = None

    def compose(self) -> ComposeResult:
        yield Header()
        with Vertical(id="main-container"):
            yield Label(f" {self.bookcase.name}", id="list-header")
            yield BookTable(id="book-table")
            yield StatusBar("", id="status-bar")
        yield ContextFooter()

    def on_mount(self) -> None:
        """Apply the initial sort and start the redraw tick."""
        if self._config.sort_on_start:
            self.state.sort(Sorting(self._config.default_sort))
        self._refresh_view()
        self._update_status_bar()
        self._tick_timer = self.set_interval(TICK_SECONDS, self._on_tick)
        logger.debug(
            "App mounted: %d books, file=%s, save_on_exit=%s",
            len(self.bookcase),
            self._bookcase_path,
            self._save_on_exit,
        )

    def on_unmount(self) -> None:
        """Stop the tick and write the bookcase back to disk."""
        timer = self._tick_timer
        self._tick_timer = None
        if timer is not None:
            timer.stop()
        if not self._save_on_exit or self._bookcase_path is None:
            return
        try:
            save_bookcase(self.bookcase, self._bookcase_path)
        except BookcaseFileError as exc:
            logger.error("Failed to save bookcase on exit: %s", exc)
            self.save_error = str(exc)
        else:
            logger.debug("Saved bookcase to %s", self._bookcase_path)

    # ========================================================================
    # Rendering
    # ========================================================================

    def _apply_theme(self) -> None:
        """Load the configured palette into Rich markup colors and CSS variables."""
        self._config.theme_name = apply_theme_colors(self._config.theme_name)
        try:
            self.theme = self._config.theme_name
        except Exception as e:
            logger.debug("Skipping theme activation in current context: %s", e, exc_info=True)

    def _refresh_view(self) -> None:
        """Redraw the table, header subtitle, and footer from the browser state."""
        self.sub_title = f"{self.bookcase.name} · {pluralize(len(self.bookcase), 'book')}"
        self.query_one(BookTable).show_rows(self.state.rows(), self.state.cursor)
        self._update_footer()

    def _update_footer(self) -> None:
        self.query_one(ContextFooter).render_bindings(
            BROWSE_FOOTER_BINDINGS, count_badge(self._count_prefix)
        )

    def _status_text(self) -> str:
        return build_status_text(
            len(self.state),
            len(self.bookcase),
            self.state.sorting,
            self.state.filtered,
            self.state.cursor,
        )

    def _update_status_bar(self) -> None:
        self._last_status = self._status_text()
        self.query_one(StatusBar).update(self._last_status)

    def _on_tick(self) -> None:
        """Redraw the status line only when the browser state changed."""
        if self._status_text() != self._last_status:
            self._update_status_bar()

    def _move_table_cursor(self) -> None:
        if self.state.cursor is not None:
            self.query_one(BookTable).move_cursor(row=self.state.cursor)

    def _book_label(self, book: Book) -> str:
        return truncate_text(book.title, NOTIFY_TITLE_MAX_LEN)

    # ========================================================================
    # Numeric prefix (nG)
    # ========================================================================

    def on_key(self, event: Key) -> None:
        """Collect digits typed before ``G``; any other key discards them."""
        if isinstance(self.screen, ModalScreen):
            return
        if event.character is not None and event.character.isdigit():
            event.stop()
            if len(self._count_prefix) < MAX_COUNT_DIGITS:
                self._count_prefix += event.character
            self._update_footer()
            return
        if event.character != "G" and self._count_prefix:
            self._count_prefix = ""
            self._update_footer()

    def _take_count(self) -> int | None:
        prefix, self._count_prefix = self._count_prefix, ""
        self._update_footer()
        return int(prefix) if prefix else None

    # ========================================================================
    # Navigation
    # ========================================================================

    def action_cursor_down(self) -> None:
        self.state.move_by(1)
        self._move_table_cursor()

    def action_cursor_up(self) -> None:
        self.state.move_by(-1)
        self._move_table_cursor()

    def action_jump_end(self) -> None:
        """Jump to the last row, or to row n when a number was typed first."""
        count = self._take_count()
        self.state.move_to(-1 if count is None else count)
        self._move_table_cursor()

    def action_jump_start(self) -> None:
        self.state.move_to(0)
        self._move_table_cursor()

    def action_random_jump(self) -> None:
        if not self.state.visible_ids:
            self.notify("No books to pick from.", title="Random", severity="warning")
            return
        self.state.random_jump(self._rng)
        self._move_table_cursor()

    # ========================================================================
    # Filtering and sorting
    # ========================================================================

    def action_open_filter(self) -> None:
        if self.state.popup is not Popup.NONE:
            return
        self.state.popup = Popup.FILTER
        self.push_screen(FilterModal(self.bookcase), self._on_filter_result)

    def _on_filter_result(self, result: Filter | None) -> None:
        self.state.popup = Popup.NONE
        if result is None:
            return
        self.state.apply_filter(result)
        self._refresh_view()
        self.notify(f"{pluralize(len(self.state), 'book')} match", title="Filter")

    def action_reset_filter(self) -> None:
        self.state.reset_visible()
        self._refresh_view()

    def action_sort(self, field: str) -> None:
        sorting = Sorting(field)
        self.state.sort(sorting)
        self._refresh_view()

    # ========================================================================
    # Editing
    # ========================================================================

    def action_open_editor(self) -> None:
        if self.state.popup is not Popup.NONE:
            return
        book_id = self.state.current_id()
        book = self.state.current_book()
        if book_id is None or book is None:
            self.notify("No book selected.", title="Edit", severity="warning")
            return
        self.state.popup = Popup.EDITOR

        def _on_editor_result(result: Book | None) -> None:
            self.state.popup = Popup.NONE
            if result is None:
                return
            self.state.replace(book_id, result)
            self._refresh_view()
            self.notify(f"Saved {self._book_label(result)}", title="Edit")

        self.push_screen(
            BookEditorModal(book_id, book, self._config.tag_separator),
            _on_editor_result,
        )

    def _set_read_state(self, quick_action: Callable[[], bool], read_state: ReadState) -> None:
        if not quick_action():
            return
        self._refresh_view()
        book = self.state.current_book()
        if book is not None:
            self.notify(f"{self._book_label(book)}: {read_state}", title="Read state")

    def action_start_reading(self) -> None:
        self._set_read_state(self.state.start_current, ReadState.READING)

    def action_finish_reading(self) -> None:
        self._set_read_state(self.state.finish_current, ReadState.READ)

    def action_stop_reading(self) -> None:
        self._set_read_state(self.state.stop_current, ReadState.STOPPED)

    def action_reset_reading(self) -> None:
        self._set_read_state(self.state.reset_current, ReadState.UNREAD)

    # ========================================================================
    # View
    # ========================================================================

    def _save_config_or_warn(self, context: str) -> bool:
        """Save config and notify the user on failure.

        Returns True on success, False on failure.
        """
        if not save_config(self._config):
            failure = CommandError(
                f"save {context}",
                next_step="check that the config directory is writable",
            )
            self.notify(str(failure), severity="warning")
            return False
        return True

    def action_cycle_theme(self) -> None:
        """Cycle through available color themes."""
        self._config.theme_name = next_theme_name(self._config.theme_name)
        self._apply_theme()
        self._refresh_view()
        self._save_config_or_warn("theme preference")
        self.notify(f"Theme: {self._config.theme_name}", title="Theme")

    def action_show_help(self) -> None:
        """Show the help overlay with all keyboard shortcuts."""
        self.push_screen(HelpScreen(sections=build_help_sections(self.BINDINGS)))


def main() -> int:
    """Main entry point wrapper for CLI/bootstrap logic."""
    return _cli_main(
        load_config_fn=load_config,
        configure_logging_fn=_configure_logging,
        validate_interactive_tty_fn=_validate_interactive_tty,
        app_factory=BooktopApp,
    )


if __name__ == "__main__":
    sys.exit(main())

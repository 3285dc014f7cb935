"""Book table widget and row rendering helpers."""

from __future__ import annotations

from collections.abc import Sequence

from rich.text import Text
from textual.widgets import DataTable

from booktop.browser import BookRow
from booktop.models import ReadState
from booktop.themes import read_state_color

BOOK_TABLE_COLUMNS: list[tuple[str, str]] = [
    ("Id", "id"),
    ("Read", "read"),
    ("Title", "title"),
    ("Author", "author"),
]

_STATE_BY_SYMBOL = {state.symbol: state for state in ReadState}


def render_row_cells(row: BookRow) -> tuple[Text, Text, Text, Text]:
    """Table cells for one row; titles and authors are never parsed as markup."""
    state = _STATE_BY_SYMBOL.get(row.symbol)
    symbol_style = f"bold {read_state_color(state)}" if state is not None else ""
    return (
        Text(str(row.book_id), justify="right"),
        Text(row.symbol, style=symbol_style, justify="center"),
        Text(row.title),
        Text(row.author),
    )


class BookTable(DataTable):
    """Scrollable table of visible books.

    The table never takes focus: the app owns navigation and pushes the
    cursor index here after every change.
    """

    can_focus = False

    def __init__(self, **kwargs) -> None:
        super().__init__(cursor_type="row", zebra_stripes=True, **kwargs)

    def on_mount(self) -> None:
        self._ensure_columns()

    def _ensure_columns(self) -> None:
        if self.columns:
            return
        for label, key in BOOK_TABLE_COLUMNS:
            self.add_column(label, key=key)

    def show_rows(self, rows: Sequence[BookRow], cursor: int | None) -> None:
        """Replace the table contents and place the cursor."""
        self._ensure_columns()
        self.clear()
        for row in rows:
            self.add_row(*render_row_cells(row), key=str(row.book_id))
        if cursor is not None and rows:
            self.move_cursor(row=min(cursor, len(rows) - 1))


__all__ = [
    "BOOK_TABLE_COLUMNS",
    "BookTable",
    "render_row_cells",
]

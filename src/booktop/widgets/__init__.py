"""Widget classes for the Booktop main view and dialogs."""

from booktop.widgets.book_table import BOOK_TABLE_COLUMNS, BookTable, render_row_cells
from booktop.widgets.chrome import (
    BROWSE_FOOTER_BINDINGS,
    ContextFooter,
    StatusBar,
    build_status_text,
    count_badge,
)
from booktop.widgets.selection import SelectionList, SelectionPanel

__all__ = [
    "BOOK_TABLE_COLUMNS",
    "BROWSE_FOOTER_BINDINGS",
    "BookTable",
    "ContextFooter",
    "SelectionList",
    "SelectionPanel",
    "StatusBar",
    "build_status_text",
    "count_badge",
    "render_row_cells",
]

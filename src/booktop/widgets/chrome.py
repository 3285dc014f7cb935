"""Widget chrome for the status line and footer hints."""

from __future__ import annotations

from textual.widgets import Static

from booktop.formatting import escape_rich_text, pluralize
from booktop.models import Sorting
from booktop.themes import THEME_COLORS

BROWSE_FOOTER_BINDINGS: list[tuple[str, str]] = [
    ("j/k", "move"),
    ("f", "filter"),
    ("F", "reset"),
    ("t/a", "sort"),
    ("Enter", "edit"),
    ("s/d/x/u", "state"),
    ("?", "random"),
    ("h", "help"),
    ("q", "quit"),
]


class ContextFooter(Static):
    """Context-sensitive footer showing relevant keybindings."""

    DEFAULT_CSS = """
    ContextFooter {
        dock: bottom;
        height: 1;
        background: $th-background;
        color: $th-muted;
        padding: 0 1;
        border-top: solid $th-panel-alt;
    }
    """

    def render_bindings(self, bindings: list[tuple[str, str]], mode_badge: str = "") -> None:
        """Update the footer with a list of (key, label) binding hints."""
        accent = THEME_COLORS["accent"]
        muted = THEME_COLORS["muted"]
        parts = []
        if mode_badge:
            parts.append(mode_badge)
        for key, label in bindings:
            safe_key = escape_rich_text(key)
            if key and label:
                parts.append(f"[bold {accent}]{safe_key}[/] [{muted}]{label}[/]")
            elif label:
                parts.append(f"[italic {muted}]{label}[/]")
            else:
                parts.append(f"[italic {muted}]{safe_key}[/]")
        self.update("  ".join(parts))


def count_badge(count_prefix: str) -> str:
    """Badge for a pending ``nG`` row number, empty when nothing is typed."""
    if not count_prefix:
        return ""
    return f"[reverse {THEME_COLORS['accent_alt']}] {count_prefix}G [/]"


def build_status_text(
    visible: int,
    total: int,
    sorting: Sorting | None,
    filtered: bool,
    cursor: int | None,
) -> str:
    """One-line summary of the main view: counts, position, sort, filter."""
    accent = THEME_COLORS["accent"]
    orange = THEME_COLORS["orange"]
    if visible == total:
        parts = [pluralize(total, "book")]
    else:
        parts = [f"{visible}/{pluralize(total, 'book')}"]
    if cursor is not None:
        parts.append(f"row {cursor + 1}")
    if sorting is not None:
        parts.append(f"sorted by [{accent}]{sorting.value}[/]")
    if filtered:
        parts.append(f"[{orange}]filtered[/] (F to reset)")
    return " · ".join(parts)


class StatusBar(Static):
    """Single-line status under the book table."""

    DEFAULT_CSS = """
    StatusBar {
        height: 1;
    }
    """


__all__ = [
    "BROWSE_FOOTER_BINDINGS",
    "ContextFooter",
    "StatusBar",
    "build_status_text",
    "count_badge",
]

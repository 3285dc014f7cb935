"""Static UI constants for the Booktop TUI (CSS and key bindings)."""

from __future__ import annotations

from textual.binding import Binding

APP_CSS = """
Screen {
    background: $th-background;
}

Header {
    background: $th-panel-alt;
    color: $th-text;
}

#main-container {
    height: 1fr;
    border: tall $th-highlight;
    background: $th-panel;
}

#list-header {
    padding: 0 1;
    background: $th-panel;
    color: $th-accent;
    text-style: bold;
}

#book-table {
    height: 1fr;
    scrollbar-gutter: stable;
    scrollbar-background: $th-panel-alt;
    scrollbar-color: $th-scrollbar;
    scrollbar-color-hover: $th-muted;
    scrollbar-color-active: $th-accent;
}

#status-bar {
    padding: 0 1;
    background: $th-panel-alt;
    color: $th-muted;
    height: 1;
}
"""

APP_BINDINGS: list[Binding] = [
    Binding("q", "quit", "Quit", show=False),
    Binding("escape", "quit", "Quit", show=False),
    Binding("j", "cursor_down", "Down", show=False),
    Binding("down", "cursor_down", "Down", show=False),
    Binding("k", "cursor_up", "Up", show=False),
    Binding("up", "cursor_up", "Up", show=False),
    Binding("G", "jump_end", "Jump to end (nG: row n)", show=False),
    Binding("g", "jump_start", "Jump to first row", show=False),
    # Filtering and sorting
    Binding("f", "open_filter", "Filter", show=False),
    Binding("F", "reset_filter", "Reset filter", show=False),
    Binding("t", "sort('title')", "Sort by title", show=False),
    Binding("a", "sort('author')", "Sort by author", show=False),
    Binding("question_mark", "random_jump", "Random book", show=False),
    # Editing
    Binding("enter", "open_editor", "Edit", show=False),
    Binding("s", "start_reading", "Start", show=False),
    Binding("d", "finish_reading", "Finish", show=False),
    Binding("x", "stop_reading", "Stop", show=False),
    Binding("u", "reset_reading", "Unread", show=False),
    # View
    Binding("ctrl+t", "cycle_theme", "Theme", show=False),
    Binding("h", "show_help", "Help (h)", show=False),
]

__all__ = [
    "APP_BINDINGS",
    "APP_CSS",
]

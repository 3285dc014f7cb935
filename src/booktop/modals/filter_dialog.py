"""Filter builder dialog: authors, read states, and tags."""

from __future__ import annotations

import logging

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.screen import ModalScreen
from textual.widgets import Label, Static

from booktop.bookcase import Bookcase
from booktop.models import Filter, ReadState
from booktop.widgets.selection import SelectionList, SelectionPanel

logger = logging.getLogger(__name__)

FILTER_FIELDS = ("author", "read", "tags")


class FilterDialogState:
    """Three selection lists with exactly one focused at a time."""

    def __init__(self, bookcase: Bookcase) -> None:
        self.authors: SelectionList[str] = SelectionList(bookcase.authors())
        self.read_states: SelectionList[ReadState] = SelectionList(list(ReadState))
        self.tags: SelectionList[str] = SelectionList(sorted(bookcase.tags()))
        self.focus_index = 0
        self.focused.activate()

    @property
    def lists(self) -> tuple[SelectionList, SelectionList, SelectionList]:
        return (self.authors, self.read_states, self.tags)

    @property
    def focused(self) -> SelectionList:
        return self.lists[self.focus_index]

    @property
    def focused_field(self) -> str:
        return FILTER_FIELDS[self.focus_index]

    def tab(self) -> None:
        """Cycle focus Author -> Read -> Tags -> Author."""
        self.focused.deactivate()
        self.focus_index = (self.focus_index + 1) % len(FILTER_FIELDS)
        self.focused.activate()

    def move_by(self, delta: int) -> None:
        self.focused.move_by(delta)

    def toggle(self) -> None:
        self.focused.toggle()

    def deselect(self) -> None:
        self.focused.deselect()

    def commit(self) -> Filter:
        return Filter(
            author_match=set(self.authors.to_selected_values()),
            read_match=set(self.read_states.to_selected_values()),
            tag_match=set(self.tags.to_selected_values()),
        )


class FilterModal(ModalScreen[Filter | None]):
    """Modal dialog for building a filter from selection lists."""

    BINDINGS = [
        Binding("enter", "commit", "Apply", priority=True),
        Binding("escape", "cancel", "Cancel", priority=True),
        Binding("tab", "next_field", "Next list", priority=True),
        Binding("j,down", "cursor_down", "Down", show=False),
        Binding("k,up", "cursor_up", "Up", show=False),
        Binding("left,right,space", "toggle", "Toggle", show=False),
        Binding("backspace,delete", "deselect", "Deselect", show=False),
    ]

    CSS = """
    FilterModal {
        align: center middle;
    }

    #filter-dialog {
        width: 80%;
        height: 80%;
        min-width: 50;
        min-height: 12;
        background: $th-background;
        border: tall $th-accent;
        padding: 0 2;
    }

    #filter-title {
        text-style: bold;
        color: $th-accent-alt;
        margin-bottom: 1;
    }

    #filter-lists {
        height: 1fr;
    }

    #filter-footer {
        color: $th-muted;
        margin-top: 1;
    }
    """

    def __init__(self, bookcase: Bookcase) -> None:
        super().__init__()
        self.state = FilterDialogState(bookcase)

    def compose(self) -> ComposeResult:
        with Vertical(id="filter-dialog"):
            yield Label("Filter Books", id="filter-title")
            with Horizontal(id="filter-lists"):
                yield SelectionPanel(self.state.authors, "Author", id="filter-author")
                yield SelectionPanel(self.state.read_states, "Read", id="filter-read")
                yield SelectionPanel(self.state.tags, "Tags", id="filter-tags")
            yield Static(
                "[dim]Toggle: ←/→ · Clear: Backspace · Next: Tab "
                "· Apply: Enter · Cancel: Esc[/]",
                id="filter-footer",
            )

    def _refresh_panels(self) -> None:
        for panel in self.query(SelectionPanel):
            panel.refresh_lines()

    def action_next_field(self) -> None:
        self.state.tab()
        self._refresh_panels()

    def action_cursor_down(self) -> None:
        self.state.move_by(1)
        self._refresh_panels()

    def action_cursor_up(self) -> None:
        self.state.move_by(-1)
        self._refresh_panels()

    def action_toggle(self) -> None:
        self.state.toggle()
        self._refresh_panels()

    def action_deselect(self) -> None:
        self.state.deselect()
        self._refresh_panels()

    def action_commit(self) -> None:
        book_filter = self.state.commit()
        logger.debug("Filter dialog committed: %s", book_filter)
        self.dismiss(book_filter)

    def action_cancel(self) -> None:
        self.dismiss(None)


__all__ = [
    "FILTER_FIELDS",
    "FilterDialogState",
    "FilterModal",
]

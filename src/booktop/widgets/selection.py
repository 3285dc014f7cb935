"""Selection list: a cursor over labelled values with per-value toggles."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Generic, TypeVar

from textual.widgets import Static

from booktop.browser import move_by
from booktop.formatting import escape_rich_text
from booktop.themes import THEME_COLORS

T = TypeVar("T")


class SelectionList(Generic[T]):
    """Ordered values with a parallel boolean selection and one cursor.

    The list renders its cursor only while active, so several lists can
    share a dialog with exactly one highlighted row between them.
    """

    def __init__(self, values: Sequence[T]) -> None:
        self.values: list[T] = list(values)
        self.selected: list[bool] = [False] * len(self.values)
        self.cursor: int = 0
        self.active: bool = False

    def __len__(self) -> int:
        return len(self.values)

    def move_by(self, delta: int) -> None:
        index = move_by(self.cursor, delta, len(self.values))
        if index is not None:
            self.cursor = index

    def toggle(self) -> None:
        if self.values:
            self.selected[self.cursor] = not self.selected[self.cursor]

    def select(self) -> None:
        if self.values:
            self.selected[self.cursor] = True

    def deselect(self) -> None:
        if self.values:
            self.selected[self.cursor] = False

    def activate(self) -> None:
        self.active = True

    def deactivate(self) -> None:
        self.active = False

    def to_selected_values(self) -> list[T]:
        """Values whose toggle is on, in original order."""
        return [value for value, on in zip(self.values, self.selected) if on]

    def render_lines(self, label: Callable[[T], str] = str) -> list[str]:
        """Rich markup lines: ``[X] label`` / ``[ ] label``, cursor highlighted."""
        lines = []
        for i, (value, on) in enumerate(zip(self.values, self.selected)):
            mark = "\\[X]" if on else "\\[ ]"
            line = f"{mark} {escape_rich_text(label(value))}"
            if self.active and i == self.cursor:
                line = f"[reverse {THEME_COLORS['accent']}]{line}[/]"
            lines.append(line)
        return lines


class SelectionPanel(Static):
    """Titled, bordered panel displaying one SelectionList."""

    DEFAULT_CSS = """
    SelectionPanel {
        width: 1fr;
        height: 1fr;
        border: round $th-muted;
        padding: 0 1;
        background: $th-panel;
    }

    SelectionPanel.active {
        border: round $th-accent;
    }
    """

    def __init__(
        self,
        selection: SelectionList,
        title: str,
        label: Callable[[object], str] = str,
        **kwargs,
    ) -> None:
        super().__init__(**kwargs)
        self.selection = selection
        self.border_title = title
        self._label = label

    def on_mount(self) -> None:
        self.refresh_lines()

    def panel_text(self) -> str:
        lines = self.selection.render_lines(self._label)
        return "\n".join(lines) if lines else "[dim italic](none)[/]"

    def refresh_lines(self) -> None:
        """Re-render after any change to the underlying list."""
        self.set_class(self.selection.active, "active")
        self.update(self.panel_text())


__all__ = [
    "SelectionList",
    "SelectionPanel",
]

"""Book editor dialog: in-place editing of title, author, and tags."""

from __future__ import annotations

import logging

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Vertical
from textual.events import Key
from textual.screen import ModalScreen
from textual.widgets import Label, Static

from booktop.formatting import escape_rich_text
from booktop.models import DEFAULT_TAG_SEPARATOR, Book
from booktop.themes import read_state_color

logger = logging.getLogger(__name__)

EDITOR_FIELDS = ("title", "author", "tags")
EDITOR_FIELD_NAMES = {"title": "Title", "author": "Author", "tags": "Tags"}


class BookEditorState:
    """Edit buffers for one book snapshot.

    Tags are edited as a sequence of strings: typing the separator closes
    the current tag and opens a new one.
    """

    def __init__(self, book: Book, separator: str = DEFAULT_TAG_SEPARATOR) -> None:
        self.original = book.copy()
        self.separator = separator
        self.title = book.title
        self.author = book.author
        self.tags: list[str] = sorted(book.tags)
        self.focus_index = 0

    @property
    def focused_field(self) -> str:
        return EDITOR_FIELDS[self.focus_index]

    def tab(self) -> None:
        """Cycle focus Title -> Author -> Tags -> Title."""
        self.focus_index = (self.focus_index + 1) % len(EDITOR_FIELDS)

    def type_char(self, char: str) -> None:
        field = self.focused_field
        if field == "title":
            self.title += char
        elif field == "author":
            self.author += char
        elif char == self.separator:
            self.tags.append("")
        elif self.tags:
            self.tags[-1] += char
        else:
            self.tags.append(char)

    def backspace(self) -> None:
        field = self.focused_field
        if field == "title":
            self.title = self.title[:-1]
        elif field == "author":
            self.author = self.author[:-1]
        else:
            self._backspace_tags()

    def _backspace_tags(self) -> None:
        if not self.tags:
            return
        last = self.tags[-1][:-1]
        if last or len(self.tags) == 1:
            self.tags[-1] = last
        else:
            self.tags.pop()

    def tags_text(self) -> str:
        return self.separator.join(self.tags)

    def field_text(self, field: str) -> str:
        if field == "title":
            return self.title
        if field == "author":
            return self.author
        return self.tags_text()

    def commit(self) -> Book:
        """Assemble the edited book; read state is carried over unchanged."""
        return Book(
            title=self.title,
            author=self.author,
            read=self.original.read,
            tags={tag for tag in self.tags if tag},
        )


class BookEditorModal(ModalScreen[Book | None]):
    """Modal dialog for editing a single book."""

    BINDINGS = [
        Binding("enter", "commit", "Save", priority=True),
        Binding("escape", "cancel", "Cancel", priority=True),
        Binding("tab", "next_field", "Next field", priority=True),
        Binding("backspace", "backspace", "Delete char", show=False, priority=True),
    ]

    CSS = """
    BookEditorModal {
        align: center middle;
    }

    #editor-dialog {
        width: 80%;
        height: 80%;
        min-width: 50;
        min-height: 16;
        background: $th-background;
        border: tall $th-green;
        padding: 0 2;
    }

    #editor-heading {
        text-style: bold;
        color: $th-green;
        margin-bottom: 1;
    }

    .editor-field {
        height: 3;
        border: round $th-muted;
        padding: 0 1;
        background: $th-panel;
    }

    .editor-field.active {
        border: round $th-green;
    }

    #editor-read {
        margin-top: 1;
        color: $th-muted;
    }

    #editor-footer {
        color: $th-muted;
        margin-top: 1;
    }
    """

    def __init__(
        self,
        book_id: int,
        book: Book,
        separator: str = DEFAULT_TAG_SEPARATOR,
    ) -> None:
        super().__init__()
        self._book_id = book_id
        self.state = BookEditorState(book, separator)

    def compose(self) -> ComposeResult:
        with Vertical(id="editor-dialog"):
            yield Label(f"Edit Book {self._book_id}", id="editor-heading")
            for field in EDITOR_FIELDS:
                panel = Static(id=f"editor-{field}", classes="editor-field")
                panel.border_title = EDITOR_FIELD_NAMES[field]
                yield panel
            read = self.state.original.read
            yield Static(
                f"Read: [{read_state_color(read)}]{read}[/] [dim](change from the list)[/]",
                id="editor-read",
            )
            yield Static(
                f"[dim]Next: Tab · Tag separator: {escape_rich_text(self.state.separator)} "
                "· Save: Enter · Cancel: Esc[/]",
                id="editor-footer",
            )

    def on_mount(self) -> None:
        self._refresh_fields()

    def _refresh_fields(self) -> None:
        for field in EDITOR_FIELDS:
            panel = self.query_one(f"#editor-{field}", Static)
            active = field == self.state.focused_field
            text = escape_rich_text(self.state.field_text(field))
            panel.set_class(active, "active")
            panel.update(f"{text}[reverse] [/]" if active else text)

    def on_key(self, event: Key) -> None:
        if event.is_printable and event.character:
            event.stop()
            event.prevent_default()
            self.state.type_char(event.character)
            self._refresh_fields()

    def action_next_field(self) -> None:
        self.state.tab()
        self._refresh_fields()

    def action_backspace(self) -> None:
        self.state.backspace()
        self._refresh_fields()

    def action_commit(self) -> None:
        book = self.state.commit()
        logger.debug("Book editor committed book %d: %s", self._book_id, book)
        self.dismiss(book)

    def action_cancel(self) -> None:
        self.dismiss(None)


__all__ = [
    "EDITOR_FIELDS",
    "BookEditorModal",
    "BookEditorState",
]

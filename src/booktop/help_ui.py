"""Help screen section builders derived from runtime key bindings."""

from __future__ import annotations

from collections.abc import Sequence

from textual.binding import Binding

HELP_SECTION_ACTIONS: list[tuple[str, list[str]]] = [
    (
        "Navigation",
        [
            "cursor_down",
            "cursor_up",
            "jump_end",
            "jump_start",
            "random_jump",
        ],
    ),
    (
        "Filter & Sort",
        [
            "open_filter",
            "reset_filter",
            "sort('title')",
            "sort('author')",
        ],
    ),
    (
        "Reading State",
        [
            "start_reading",
            "finish_reading",
            "stop_reading",
            "reset_reading",
        ],
    ),
    (
        "Editing & View",
        [
            "open_editor",
            "cycle_theme",
            "show_help",
            "quit",
        ],
    ),
]

HELP_FILTER_DIALOG: list[tuple[str, str]] = [
    ("Tab", "Next list (Author / Read / Tags)"),
    ("j / k", "Move within list"),
    ("← / → / Space", "Toggle value"),
    ("Backspace", "Deselect value"),
    ("Enter / Esc", "Apply / cancel"),
]

HELP_EDITOR_DIALOG: list[tuple[str, str]] = [
    ("Tab", "Next field (Title / Author / Tags)"),
    (",", "Start a new tag (configurable)"),
    ("Backspace", "Delete last character"),
    ("Enter / Esc", "Save / cancel"),
]

HELP_DESCRIPTION_OVERRIDES: dict[str, str] = {
    "jump_end": "Jump to last row (nG: row n)",
    "open_editor": "Edit book",
    "show_help": "Help overlay",
}


# Textual key names that read differently in the overlay
_KEY_LABELS: dict[str, str] = {
    "question_mark": "?",
    "enter": "Enter",
    "escape": "Esc",
    "down": "↓",
    "up": "↑",
}


def _format_help_key(key: str) -> str:
    if key.startswith("ctrl+"):
        return "Ctrl+" + key.removeprefix("ctrl+")
    return _KEY_LABELS.get(key, key)


def _help_entry(bindings: Sequence[Binding], action: str) -> tuple[str, str] | None:
    """``("j / ↓", "Down")`` for every key bound to ``action``, or None if unbound."""
    bound = [binding for binding in bindings if binding.action == action]
    if not bound:
        return None
    keys = " / ".join(_format_help_key(binding.key) for binding in bound)
    return keys, HELP_DESCRIPTION_OVERRIDES.get(action, bound[0].description)


def build_help_sections(
    bindings: Sequence[Binding],
) -> list[tuple[str, list[tuple[str, str]]]]:
    """Help overlay sections for the main view, then the two dialogs."""
    sections: list[tuple[str, list[tuple[str, str]]]] = []
    for section_name, actions in HELP_SECTION_ACTIONS:
        entries = [_help_entry(bindings, action) for action in actions]
        sections.append((section_name, [entry for entry in entries if entry is not None]))
    sections.append(("Filter Dialog", HELP_FILTER_DIALOG))
    sections.append(("Book Editor", HELP_EDITOR_DIALOG))
    return sections


__all__ = ["build_help_sections"]

"""Exception hierarchy for bookcase operations."""

from __future__ import annotations


class BooktopError(Exception):
    """Base exception for Booktop errors."""


class EmptyBookcaseError(BooktopError):
    """An operation needed at least one book but the bookcase is empty."""


class BookcaseFileError(BooktopError):
    """A bookcase file could not be read, parsed, or written."""


class CommandError(BooktopError):
    """A failure reported to the user, with what to try next.

    ``str(error)`` is the message shown on stderr or in a notification::

        Could not remove book 9.
        Why: no book with id 9 is in the bookcase.
        Next step: run booktop list to see the available ids.
    """

    def __init__(self, action: str, *, next_step: str, why: str | None = None) -> None:
        self.action = action.strip()
        self.why = why
        self.next_step = next_step
        lines = [f"Could not {self.action}."]
        if why:
            lines.append(f"Why: {_as_sentence(why)}")
        lines.append(f"Next step: {_as_sentence(next_step)}")
        super().__init__("\n".join(lines))


def _as_sentence(text: str) -> str:
    text = text.strip()
    if not text or text.endswith((".", "!", "?")):
        return text
    return f"{text}."


__all__ = [
    "BookcaseFileError",
    "BooktopError",
    "CommandError",
    "EmptyBookcaseError",
]

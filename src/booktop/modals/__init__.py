"""Modal dialogs for the Booktop TUI.

Dialogs return data through ``dismiss``; the app performs every write-back.
Import modals from this package: ``from booktop.modals import FilterModal``
"""

# book_editor.py: title, author, and tag editing
from booktop.modals.book_editor import BookEditorModal, BookEditorState

# filter_dialog.py: author / read-state / tag selection lists
from booktop.modals.filter_dialog import FilterDialogState, FilterModal

# help.py: keyboard shortcut overlay
from booktop.modals.help import HelpScreen

__all__ = [
    "BookEditorModal",
    "BookEditorState",
    "FilterDialogState",
    "FilterModal",
    "HelpScreen",
]

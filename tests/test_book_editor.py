"""Tests for the book editor state and modal."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from booktop.app import BooktopApp
from booktop.browser import Popup
from booktop.modals.book_editor import EDITOR_FIELDS, BookEditorModal, BookEditorState
from booktop.models import Book, ReadState


def _type(state: BookEditorState, text: str) -> None:
    for char in text:
        state.type_char(char)


class TestBookEditorState:
    def test_focus_cycles_title_author_tags(self, make_book):
        state = BookEditorState(make_book())
        assert state.focused_field == "title"
        state.tab()
        assert state.focused_field == "author"
        state.tab()
        assert state.focused_field == "tags"
        state.tab()
        assert state.focused_field == "title"

    def test_unchanged_commit_returns_equal_book(self, make_book):
        book = make_book(read=ReadState.STOPPED, tags={"b", "a", "c"})
        state = BookEditorState(book)
        assert state.commit() == book

    def test_snapshot_is_independent_of_original(self, make_book):
        book = make_book(tags={"a"})
        state = BookEditorState(book)
        book.tags.add("late")
        book.finish()
        assert state.commit().tags == {"a"}
        assert state.commit().read is ReadState.UNREAD

    def test_typing_title_and_author(self, make_book):
        state = BookEditorState(make_book(title="Dun", author="Frank"))
        _type(state, "e")
        state.tab()
        _type(state, " Herbert")
        book = state.commit()
        assert book.title == "Dune"
        assert book.author == "Frank Herbert"

    def test_backspace_title(self, make_book):
        state = BookEditorState(make_book(title="AB"))
        state.backspace()
        state.backspace()
        state.backspace()
        assert state.title == ""

    def test_tags_a_comma_b(self, make_book):
        state = BookEditorState(make_book())
        state.tab()
        state.tab()
        _type(state, "a,b")
        assert state.tags == ["a", "b"]
        assert state.commit().tags == {"a", "b"}

    def test_typing_appends_to_existing_last_tag(self, make_book):
        state = BookEditorState(make_book(tags={"sci"}))
        state.tab()
        state.tab()
        _type(state, "fi")
        assert state.commit().tags == {"scifi"}

    def test_backspace_at_start_is_noop(self, make_book):
        state = BookEditorState(make_book())
        state.tab()
        state.tab()
        state.backspace()
        assert state.tags == []
        assert state.commit().tags == set()

    def test_backspace_drops_emptied_tag_after_separator(self, make_book):
        state = BookEditorState(make_book())
        state.tab()
        state.tab()
        _type(state, "a,b")
        state.backspace()
        assert state.tags == ["a"]
        _type(state, "c")
        assert state.tags == ["ac"]

    def test_backspace_removes_open_empty_tag(self, make_book):
        state = BookEditorState(make_book())
        state.tab()
        state.tab()
        _type(state, "a,")
        assert state.tags == ["a", ""]
        state.backspace()
        assert state.tags == ["a"]

    def test_backspace_keeps_only_tag_open(self, make_book):
        state = BookEditorState(make_book())
        state.tab()
        state.tab()
        _type(state, "x")
        state.backspace()
        assert state.tags == [""]
        assert state.commit().tags == set()

    def test_duplicate_and_empty_tags_collapse(self, make_book):
        state = BookEditorState(make_book())
        state.tab()
        state.tab()
        _type(state, "a,,a,b,")
        assert state.commit().tags == {"a", "b"}

    def test_custom_separator(self, make_book):
        state = BookEditorState(make_book(), separator=";")
        state.tab()
        state.tab()
        _type(state, "x,y;z")
        assert state.commit().tags == {"x,y", "z"}
        assert state.tags_text() == "x,y;z"

    def test_read_state_carried_over(self, make_book):
        state = BookEditorState(make_book(read=ReadState.READING))
        _type(state, "!")
        assert state.commit().read is ReadState.READING


@pytest.mark.asyncio
async def test_editor_modal_mounts_heading_and_every_field(two_book_bookcase):
    app = BooktopApp(two_book_bookcase)
    async with app.run_test() as pilot:
        await pilot.press("enter")
        await pilot.pause()
        modal = app.screen
        assert isinstance(modal, BookEditorModal)
        assert modal.query_one("#editor-heading") is not None
        assert [panel.id for panel in modal.query(".editor-field")] == [
            f"editor-{field}" for field in EDITOR_FIELDS
        ]


@pytest.mark.asyncio
async def test_editor_modal_writes_back_tags(two_book_bookcase):
    app = BooktopApp(two_book_bookcase)
    async with app.run_test() as pilot:
        await pilot.press("enter")
        await pilot.pause()
        assert isinstance(app.screen, BookEditorModal)
        assert app.state.popup is Popup.EDITOR

        await pilot.press("tab", "tab", "a", "comma", "b", "enter")
        await pilot.pause()

        assert app.state.popup is Popup.NONE
        assert two_book_bookcase.get_book(1).tags == {"a", "b"}
        assert two_book_bookcase.get_book(1).title == "Great Expectations"


@pytest.mark.asyncio
async def test_editor_modal_cancel_discards(two_book_bookcase):
    app = BooktopApp(two_book_bookcase)
    async with app.run_test() as pilot:
        await pilot.press("j", "enter")
        await pilot.pause()
        await pilot.press("x", "y", "backspace", "escape")
        await pilot.pause()

        assert app.state.popup is Popup.NONE
        assert two_book_bookcase.get_book(2) == Book(
            "Journey to the Center of the Earth", "Jules Verne", tags={"scifi"}
        )
        assert app.is_running


@pytest.mark.asyncio
async def test_editor_modal_keys_do_not_reach_main_bindings(two_book_bookcase):
    app = BooktopApp(two_book_bookcase)
    async with app.run_test() as pilot:
        await pilot.press("enter")
        await pilot.pause()
        # "d" finishes a book and "q" quits in the main view
        await pilot.press("d", "q", "enter")
        await pilot.pause()

        book = two_book_bookcase.get_book(1)
        assert book.title == "Great Expectationsdq"
        assert book.read is ReadState.UNREAD
        assert app.is_running


@pytest.mark.asyncio
async def test_editor_on_empty_bookcase_warns(make_bookcase):
    app = BooktopApp(make_bookcase())
    async with app.run_test() as pilot:
        app.notify = MagicMock()
        await pilot.press("enter")
        await pilot.pause()
        assert not isinstance(app.screen, BookEditorModal)
        assert app.state.popup is Popup.NONE
        app.notify.assert_called_once()


def test_editor_modal_actions_dismiss_with_data(make_book):
    book = make_book(tags={"t"})
    modal = BookEditorModal(1, book)
    modal.dismiss = MagicMock()
    modal.action_commit()
    modal.dismiss.assert_called_once_with(book)

    modal.dismiss = MagicMock()
    modal.action_cancel()
    modal.dismiss.assert_called_once_with(None)

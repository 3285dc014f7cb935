"""Tests for the bookcase collection and its id allocation."""

from __future__ import annotations

import random

import pytest

from booktop.bookcase import Bookcase, example_bookcase
from booktop.errors import EmptyBookcaseError
from booktop.models import Book, ReadState


class TestBookcaseBasics:
    def test_new_bookcase_is_empty(self):
        bookcase = Bookcase()
        assert len(bookcase) == 0
        assert bookcase.name == "Bookcase"
        assert bookcase.version == "0.0.1"
        assert bookcase.get_ids() == []

    def test_ids_are_sorted(self, make_book):
        bookcase = Bookcase(books={3: make_book("C"), 1: make_book("A"), 2: make_book("B")})
        assert bookcase.get_ids() == [1, 2, 3]
        assert [book.title for _, book in bookcase.get_books()] == ["A", "B", "C"]

    def test_add_book_uses_max_plus_one(self, make_book):
        bookcase = Bookcase(books={1: make_book(), 5: make_book()})
        assert bookcase.add_book("New", "Someone") == 6
        assert bookcase.get_book(6) == Book("New", "Someone")

    def test_add_book_to_empty_starts_at_one(self):
        assert Bookcase().add_book("First", "Author") == 1

    def test_remove_book(self, two_book_bookcase):
        assert two_book_bookcase.remove_book(1) is True
        assert two_book_bookcase.remove_book(1) is False
        assert two_book_bookcase.get_ids() == [2]

    def test_ids_not_reused_while_higher_exists(self, two_book_bookcase):
        two_book_bookcase.remove_book(1)
        assert two_book_bookcase.add_book("Again", "X") == 3

    def test_get_book_returns_live_reference(self, two_book_bookcase):
        two_book_bookcase.get_book(1).start()
        assert two_book_bookcase.get_book(1).read is ReadState.READING

    def test_get_book_missing(self, two_book_bookcase):
        assert two_book_bookcase.get_book(99) is None
        assert 99 not in two_book_bookcase
        assert 1 in two_book_bookcase


class TestLookups:
    def test_get_books_by_ids_preserves_order_and_gaps(self, two_book_bookcase):
        result = two_book_bookcase.get_books_by_ids([2, 7, 1])
        assert [entry[0] if entry else None for entry in result] == [2, None, 1]

    def test_authors_deduplicated_in_id_order(self, make_bookcase):
        bookcase = make_bookcase(("A", "Verne"), ("B", "Dickens"), ("C", "Verne"))
        assert bookcase.authors() == ["Verne", "Dickens"]

    def test_tags_union(self, make_bookcase):
        bookcase = make_bookcase(("A", "X", {"a", "b"}), ("B", "Y", {"b", "c"}), ("C", "Z"))
        assert bookcase.tags() == {"a", "b", "c"}


class TestReplaceBook:
    def test_overwrite_existing(self, two_book_bookcase):
        two_book_bookcase.replace_book(1, Book("Bleak House", "Charles Dickens"))
        assert two_book_bookcase.get_book(1).title == "Bleak House"
        assert two_book_bookcase.get_ids() == [1, 2]

    def test_insert_new_id_keeps_order(self, two_book_bookcase):
        two_book_bookcase.replace_book(0 + 10, Book("Ten", "T"))
        two_book_bookcase.replace_book(5, Book("Five", "F"))
        assert two_book_bookcase.get_ids() == [1, 2, 5, 10]


class TestPickAndRenumber:
    def test_pick_random_id_on_empty_raises(self):
        with pytest.raises(EmptyBookcaseError):
            Bookcase().pick_random_id()

    def test_pick_random_id_returns_member(self, two_book_bookcase):
        rng = random.Random(1234)
        for _ in range(20):
            assert two_book_bookcase.pick_random_id(rng) in (1, 2)

    def test_renumber_closes_gaps(self, make_book):
        bookcase = Bookcase(books={2: make_book("A"), 7: make_book("B"), 9: make_book("C")})
        bookcase.renumber()
        assert bookcase.get_ids() == [1, 2, 3]
        assert [book.title for _, book in bookcase.get_books()] == ["A", "B", "C"]


def test_example_bookcase():
    bookcase = example_bookcase()
    assert [(book_id, book.title) for book_id, book in bookcase.get_books()] == [
        (1, "Great Expectations"),
        (2, "Journey to the Center of the Earth"),
    ]


def test_equality(make_book):
    assert Bookcase(books={1: make_book()}) == Bookcase(books={1: make_book()})
    assert Bookcase(books={1: make_book()}) != Bookcase(books={2: make_book()})
    assert Bookcase(name="A") != Bookcase(name="B")

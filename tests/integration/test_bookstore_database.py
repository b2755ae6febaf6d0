"""
Integration Tests: Bookstore database clients

End-to-end behaviour against a live MongoDB:
- store/load round trips with author resolution
- batched inserts and lookups by author name
- update, update_field and upsert semantics
- delete and object counts
- two-hop bookstore loading
"""

import pytest

from bookstore.models import Author, Book, BookStore
from tests.helpers import new_id

pytestmark = pytest.mark.integration


def test_store_and_load_resolves_author(author_db, book_db) -> None:
    author = Author(first_name="testFirstName", last_name="testLastName")
    assert author_db.store(author)
    assert author_db.object_count() == 1

    book = Book(author=author, prices=[10.0])
    assert book_db.store(book)
    assert book_db.object_count() == 1

    loaded = book_db.load(book.id)

    assert loaded.author is not None
    assert loaded.author.first_name == "testFirstName"
    assert loaded.author.last_name == "testLastName"
    assert loaded.author.id == author.id
    assert loaded.model_dump(exclude={"id"}) == book.model_dump(exclude={"id"})

    assert book_db.delete(loaded)
    assert author_db.delete(author)


def test_store_all_and_find_by_last_name(author_db, book_db) -> None:
    object_count = 200
    authors = [Author(first_name=f"first{i}", last_name=f"last{i}") for i in range(object_count)]
    books = [Book(author=author, prices=[1.0, 2.0]) for author in authors]

    assert author_db.store_all(authors)
    assert book_db.store_all(books)
    assert author_db.object_count() == object_count
    assert book_db.object_count() == object_count

    assert len(book_db.load_all()) == object_count

    found = book_db.find_by_author_last_name("last150")
    assert found.author.first_name == "first150"

    # positional id assignment
    assert book_db.load(books[42].id).author.last_name == "last42"

    subset = book_db.load_all([books[0].id, books[1].id])
    assert {book.id for book in subset} == {books[0].id, books[1].id}
    assert book_db.load_all([]) == []


def test_delete(author_db, book_db) -> None:
    a1 = Author(first_name="first1", last_name="last1")
    a2 = Author(first_name="first2", last_name="last2")
    b1, b2, b3 = Book(author=a1, prices=[1.0, 2.0]), Book(author=a2, prices=[3.0, 4.0]), Book(author=a1, prices=[5.0, 6.0])

    assert book_db.object_count() == 0
    assert b1.id is None

    assert author_db.store(a1)
    assert author_db.store(a2)
    assert book_db.store_all([b1, b2, b3])
    assert book_db.load(b1.id) is not None
    assert book_db.object_count() == 3

    assert book_db.delete_by_id(b2.id)
    assert book_db.object_count() == 2
    assert not book_db.delete_by_id(b2.id)
    assert not book_db.delete_by_id(new_id())

    assert book_db.delete_by_id(b3.id)
    assert book_db.delete(b1)
    assert book_db.object_count() == 0


def test_update(author_db, book_db) -> None:
    a1 = Author(first_name="FirstName", last_name="LastName")
    b1 = Book(author=a1, prices=[1.0, 2.0])

    assert not author_db.update(a1)
    assert not book_db.update(b1)
    assert author_db.object_count() == 0

    assert author_db.store(a1)
    assert book_db.store(b1)
    assert book_db.load(b1.id).prices[0] == 1.0

    b1.prices = [3.0, 4.0]
    assert book_db.update(b1)
    assert book_db.load(b1.id).prices[0] == 3.0

    a1.last_name = "New LastName"
    assert author_db.update(a1)
    assert author_db.object_count() == 1
    assert book_db.load(b1.id).author.last_name == "New LastName"

    assert author_db.update_field(a1.id, "firstName", "New FirstName")
    assert book_db.load(b1.id).author.first_name == "New FirstName"
    assert not author_db.update_field(new_id(), "firstName", "Nobody")

    missing = Author(id=new_id(), first_name="Ghost", last_name="Writer")
    assert not author_db.update(missing)
    assert author_db.object_count() == 1


def test_upsert(author_db) -> None:
    assert not author_db.upsert(None)
    assert author_db.object_count() == 0

    a1 = Author(first_name="Dan", last_name="Brown")
    a2 = Author(first_name="Stephen", last_name="King")
    assert author_db.upsert(a1)
    assert author_db.upsert(a2)
    assert a1.has_valid_object_id()
    assert author_db.object_count() == 2

    a1 = author_db.load(a1.id)
    assert a1.first_name == "Dan"

    a1.first_name = "Dan1"
    assert author_db.upsert(a1)

    updated = author_db.load(a1.id)
    assert updated.first_name == "Dan1"
    assert updated.id == a1.id
    assert author_db.object_count() == 2


def test_bookstore_resolves_books_and_authors(author_db, book_db, store_db) -> None:
    a1 = Author(first_name="Dan", last_name="Brown")
    a2 = Author(first_name="Stephen", last_name="King")
    assert author_db.store(a1)
    assert author_db.store(a2)

    books = []
    for i in range(6):
        book = Book(author=a1 if i % 2 == 0 else a2, prices=[10.0 + i])
        assert book_db.store(book)
        books.append(book)
    assert book_db.object_count() == 6

    store = BookStore(name="Thalia", books=books)
    assert store_db.store(store)
    assert store_db.object_count() == 1

    loaded = store_db.load(store.id)

    assert loaded.name == "Thalia"
    assert len(loaded.books) == 6
    assert loaded.books[0].author.first_name == "Dan"
    assert loaded.books[1].author.first_name == "Stephen"
    assert loaded.books[0].author.id == a1.id
    assert loaded.books[1].author.id == a2.id
    assert loaded.books[0].prices[0] == 10.0
    assert loaded.books[5].prices[0] == 15.0
    assert [book.id for book in loaded.books] == [book.id for book in books]


def test_bookstore_keeps_shelf_order_and_empty_stores(author_db, book_db, store_db) -> None:
    author = Author(first_name="Dan", last_name="Brown")
    assert author_db.store(author)
    books = [Book(author=author, prices=[float(i)]) for i in range(5)]
    assert book_db.store_all(books)

    shuffled = [books[3], books[0], books[4], books[1], books[2]]
    store = BookStore(name="Shuffled", books=shuffled)
    empty = BookStore(name="Empty")
    assert store_db.store_all([store, empty])

    loaded = store_db.load(store.id)
    assert [book.prices[0] for book in loaded.books] == [3.0, 0.0, 4.0, 1.0, 2.0]

    loaded_empty = store_db.load(empty.id)
    assert loaded_empty.name == "Empty"
    assert loaded_empty.books == []

    assert book_db.delete(books[4])
    assert len(store_db.load(store.id).books) == 4

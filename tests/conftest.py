"""Shared fixtures: database clients wired to mocked pymongo collections."""

from unittest.mock import MagicMock

import pytest

from bookstore.config import DbAuth
from bookstore.database import AuthorDatabase, BookDatabase, BookStoreDatabase
from bookstore.models import Author, Book
from tests.helpers import new_id


@pytest.fixture
def auth() -> DbAuth:
    return DbAuth(database_name="bookstore_unit")


@pytest.fixture
def mongo_client() -> MagicMock:
    return MagicMock(name="MongoClient")


@pytest.fixture
def author_db(auth, mongo_client) -> AuthorDatabase:
    return AuthorDatabase(auth, client=mongo_client)


@pytest.fixture
def book_db(auth, mongo_client) -> BookDatabase:
    return BookDatabase(auth, client=mongo_client)


@pytest.fixture
def store_db(auth, mongo_client) -> BookStoreDatabase:
    return BookStoreDatabase(auth, client=mongo_client)


@pytest.fixture
def saved_author() -> Author:
    return Author(id=new_id(), first_name="Dan", last_name="Brown")


@pytest.fixture
def saved_book(saved_author) -> Book:
    return Book(id=new_id(), author=saved_author, prices=[10.0, 12.5])

"""BookStore entity referencing an ordered list of Books."""

from typing import Any

from bson import ObjectId
from pydantic import Field

from .base import MongoObject, get_object_id
from .book import Book


class BookStore(MongoObject):
    """A named store holding references to books, in shelf order."""

    name: str | None = None
    books: list[Book] = Field(default_factory=list)

    def to_document(self) -> dict[str, Any] | None:
        """Return the persisted form, or None if any book was never stored."""
        if any(not book.has_valid_object_id() for book in self.books):
            return None

        return {
            "name": self.name,
            "books": [ObjectId(book.id) for book in self.books],
        }

    @classmethod
    def from_document(cls, document: dict[str, Any]) -> "BookStore":
        return cls(
            id=get_object_id(document),
            name=document.get("name"),
            books=[Book.from_document(book_doc) for book_doc in document.get("books") or []],
        )

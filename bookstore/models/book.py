"""Book entity referencing exactly one Author."""

from typing import Any

from bson import ObjectId
from pydantic import Field

from .author import Author
from .base import MongoObject, get_object_id


class Book(MongoObject):
    """A book with its author and list of prices.

    Persisted documents hold only the author's ``_id``. The read pipeline joins
    the author back in, so ``from_document`` expects ``author`` to be an
    embedded author document.
    """

    author: Author | None = None
    prices: list[float] = Field(default_factory=list)

    def to_document(self) -> dict[str, Any] | None:
        """Return the persisted form, or None if the author was never stored."""
        if self.author is None or not self.author.has_valid_object_id():
            return None

        return {
            "author": ObjectId(self.author.id),
            "prices": list(self.prices),
        }

    @classmethod
    def from_document(cls, document: dict[str, Any]) -> "Book":
        author_doc = document.get("author")

        return cls(
            id=get_object_id(document),
            author=Author.from_document(author_doc) if isinstance(author_doc, dict) else None,
            prices=document.get("prices") or [],
        )

"""
BookDatabase

MongoDB operations for the 'books' collection.

Books store the author's _id only. The read pipeline joins the authors
collection and unwinds the one-element result back into the 'author' field.

Specialized Methods:
- find_by_author_last_name(last_name): First book whose author has that last name
"""

from typing import Any

from bookstore.database import collection_names
from bookstore.models import Book

from .base import DatabaseClient


class BookDatabase(DatabaseClient[Book]):
    collection_name = collection_names.BOOKS

    def aggregation_pipeline(self, match: dict[str, Any]) -> list[dict[str, Any]]:
        return [
            {
                "$lookup": {
                    "from": collection_names.AUTHORS,
                    "localField": "author",
                    "foreignField": "_id",
                    "as": "author",
                }
            },
            {"$unwind": "$author"},
            {"$match": match},
        ]

    def data_to_doc(self, data: Book) -> dict[str, Any] | None:
        return data.to_document()

    def data_from_doc(self, document: dict[str, Any]) -> Book:
        return Book.from_document(document)

    def find_by_author_last_name(self, last_name: str) -> Book | None:
        return self.aggregation_query_first({"author.lastName": last_name})

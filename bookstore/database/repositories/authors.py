"""
AuthorDatabase

MongoDB operations for the 'authors' collection. Authors own no references,
so the read pipeline is a bare $match.
"""

from typing import Any

from bookstore.database import collection_names
from bookstore.models import Author

from .base import DatabaseClient


class AuthorDatabase(DatabaseClient[Author]):
    collection_name = collection_names.AUTHORS

    def aggregation_pipeline(self, match: dict[str, Any]) -> list[dict[str, Any]]:
        return [{"$match": match}]

    def data_to_doc(self, data: Author) -> dict[str, Any] | None:
        return data.to_document()

    def data_from_doc(self, document: dict[str, Any]) -> Author:
        return Author.from_document(document)

"""
BookStoreDatabase

MongoDB operations for the 'bookstores' collection.

A store document holds an ordered list of book _ids, and each book holds an
author _id. Loading a store resolves both hops:

1. $unwind books, one row per reference, remembering its array position
2. $lookup the book, $unwind the one-element result
3. $lookup the book's author, $unwind again
4. $sort rows by store and position, then $group them back into one document
   per store with books rebuilt as {_id, author, prices}
5. drop entries of references that no longer resolve to a book
6. $match on the caller's filter

Unwinds keep empty and unmatched rows so that a store without books, or with
a dangling reference, is still returned.
"""

from typing import Any

from bookstore.database import collection_names
from bookstore.models import BookStore

from .base import DatabaseClient


class BookStoreDatabase(DatabaseClient[BookStore]):
    collection_name = collection_names.BOOKSTORES

    def aggregation_pipeline(self, match: dict[str, Any]) -> list[dict[str, Any]]:
        return [
            {
                "$unwind": {
                    "path": "$books",
                    "includeArrayIndex": "position",
                    "preserveNullAndEmptyArrays": True,
                }
            },
            {
                "$lookup": {
                    "from": collection_names.BOOKS,
                    "localField": "books",
                    "foreignField": "_id",
                    "as": "books",
                }
            },
            {"$unwind": {"path": "$books", "preserveNullAndEmptyArrays": True}},
            {
                "$lookup": {
                    "from": collection_names.AUTHORS,
                    "localField": "books.author",
                    "foreignField": "_id",
                    "as": "authors",
                }
            },
            {"$unwind": {"path": "$authors", "preserveNullAndEmptyArrays": True}},
            {"$sort": {"_id": 1, "position": 1}},
            {
                "$group": {
                    "_id": "$_id",
                    "name": {"$first": "$name"},
                    "books": {
                        "$push": {
                            "_id": "$books._id",
                            "author": "$authors",
                            "prices": "$books.prices",
                        }
                    },
                }
            },
            {
                "$addFields": {
                    "books": {
                        "$filter": {
                            "input": "$books",
                            "as": "book",
                            "cond": {"$ifNull": ["$$book._id", False]},
                        }
                    }
                }
            },
            {"$match": match},
        ]

    def data_to_doc(self, data: BookStore) -> dict[str, Any] | None:
        return data.to_document()

    def data_from_doc(self, document: dict[str, Any]) -> BookStore:
        return BookStore.from_document(document)

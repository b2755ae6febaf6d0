"""Domain entities mapped to MongoDB documents.

- MongoObject: base class holding the ObjectId hex string
- Author: {_id, firstName, lastName}
- Book: {_id, author: <Author _id>, prices: [...]}
- BookStore: {_id, name, books: [<Book _id>, ...]}
"""

from .author import Author
from .base import MongoObject, get_object_id, is_valid_object_id
from .book import Book
from .bookstore import BookStore

__all__ = [
    "MongoObject",
    "is_valid_object_id",
    "get_object_id",
    "Author",
    "Book",
    "BookStore",
]

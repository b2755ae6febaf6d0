"""
Database clients for MongoDB

One client per collection, all built on the generic DatabaseClient:
- DatabaseClient: Common CRUD operations and aggregation reads
- AuthorDatabase: Authors, no references
- BookDatabase: Books, author resolved via $lookup
- BookStoreDatabase: Stores, books and their authors resolved via two joins
"""

from .authors import AuthorDatabase
from .base import DatabaseClient
from .books import BookDatabase
from .bookstores import BookStoreDatabase

__all__ = [
    "DatabaseClient",
    "AuthorDatabase",
    "BookDatabase",
    "BookStoreDatabase",
]

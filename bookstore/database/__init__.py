"""
Database module initialization.
Exports database components for use throughout the application.
"""

from bookstore.database.connection import (
    create_client,
    check_db_connection,
    get_db_info,
)
from bookstore.database.exceptions import ClientClosedError, DatabaseClientError
from bookstore.database.repositories import (
    AuthorDatabase,
    BookDatabase,
    BookStoreDatabase,
    DatabaseClient,
)

__all__ = [
    # Connection management
    "create_client",
    # Clients
    "DatabaseClient",
    "AuthorDatabase",
    "BookDatabase",
    "BookStoreDatabase",
    # Exceptions
    "DatabaseClientError",
    "ClientClosedError",
    # Utilities
    "check_db_connection",
    "get_db_info",
]

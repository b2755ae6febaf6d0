"""Custom exceptions for the database client layer."""


class DatabaseClientError(Exception):
    """Base exception for database client errors."""

    def __init__(self, message: str, collection: str | None = None):
        super().__init__(message)
        self.collection = collection


class ClientClosedError(DatabaseClientError):
    """The client was used after close()."""

    pass

"""
DatabaseClient Abstract Class

Base class of all database clients. Each concrete subclass handles the queries
for one MongoDB collection and one entity type.

Methods:
- store(data) / store_all(data_list): Insert, assign generated ids back
- update(data) / update_field(object_id, field_name, value): $set by _id
- upsert(data): Update or insert, generating an id when missing
- load(object_id) / load_all(ids=None): Aggregation-pipeline reads
- delete(data) / delete_by_id(object_id): Remove one document
- object_count() / remove_all(): Collection-wide count and wipe

Subclasses supply collection_name, aggregation_pipeline(), data_to_doc() and
data_from_doc(). Reads always run the subclass pipeline, so references are
resolved by the pipeline's $lookup stages and never by this class.

Mutations return booleans: driver failures are logged, kept on last_error and
reported as False. Reads let driver errors propagate.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Generic, Iterable, TypeVar

from bson import ObjectId
from bson.errors import BSONError
from pymongo import MongoClient
from pymongo.collection import Collection
from pymongo.database import Database
from pymongo.errors import PyMongoError

from bookstore.config import DbAuth, get_settings
from bookstore.database.connection import create_client
from bookstore.database.exceptions import ClientClosedError
from bookstore.database.utils import to_object_ids
from bookstore.models.base import MongoObject, is_valid_object_id

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=MongoObject)


class DatabaseClient(ABC, Generic[T]):
    """Generic CRUD and aggregation client for one collection of entities T."""

    # Name of the collection this client manages
    collection_name: str

    def __init__(self, auth: DbAuth | None = None, client: MongoClient | None = None):
        """
        Connect eagerly to MongoDB.

        Args:
            auth: Connection coordinates. Defaults to the configured settings.
            client: Existing MongoClient to share instead of creating one.
                A shared client is not closed by close().
        """
        self.auth = auth or get_settings().mongodb
        self.last_error: Exception | None = None
        self._client: MongoClient | None = None
        self._database: Database | None = None
        self._owns_client = False

        if client is not None:
            self._client = client
            self._database = client[self.auth.database_name]
        else:
            self.connect(self.auth)

    def __enter__(self) -> "DatabaseClient[T]":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Connection handling
    # ------------------------------------------------------------------

    def connect(self, auth: DbAuth) -> None:
        """Connect to the database described by auth, closing any owned client."""
        if self._client is not None and self._owns_client:
            self._client.close()

        self.auth = auth
        self._client = create_client(auth)
        self._database = self._client[auth.database_name]
        self._owns_client = True

    def close(self) -> None:
        if self._client is not None and self._owns_client:
            self._client.close()
            logger.info(f"Closed MongoDB client for '{self.collection_name}'")

        self._client = None
        self._database = None

    @property
    def database(self) -> Database:
        """Get the connected database, raising if the client was closed."""
        if self._database is None:
            raise ClientClosedError(
                "Database client is closed", collection=self.collection_name
            )
        return self._database

    def get_collection(self, name: str) -> Collection:
        """Return the named collection. MongoDB creates it on first write."""
        return self.database[name]

    @property
    def main_collection(self) -> Collection:
        return self.get_collection(self.collection_name)

    # ------------------------------------------------------------------
    # Subclass hooks
    # ------------------------------------------------------------------

    @abstractmethod
    def aggregation_pipeline(self, match: dict[str, Any]) -> list[dict[str, Any]]:
        """Return the read pipeline, ending with a $match on the given filter."""

    @abstractmethod
    def data_to_doc(self, data: T) -> dict[str, Any] | None:
        """Convert an entity to its persisted document, or None if it cannot be stored."""

    @abstractmethod
    def data_from_doc(self, document: dict[str, Any]) -> T:
        """Build an entity from a document produced by the read pipeline."""

    # ------------------------------------------------------------------
    # Aggregation queries
    # ------------------------------------------------------------------

    def aggregation_query_all(self, match: dict[str, Any]) -> list[T]:
        """Return every entity produced by the pipeline for the given match."""
        pipeline = self.aggregation_pipeline(match)
        logger.debug(f"Aggregating '{self.collection_name}' with {pipeline}")

        with self.main_collection.aggregate(pipeline) as cursor:
            return [self.data_from_doc(document) for document in cursor]

    def aggregation_query_first(self, match: dict[str, Any]) -> T | None:
        """Return the first entity produced by the pipeline, or None."""
        pipeline = self.aggregation_pipeline(match)
        logger.debug(f"Aggregating '{self.collection_name}' with {pipeline}")

        with self.main_collection.aggregate(pipeline) as cursor:
            document = next(cursor, None)

        if document is None:
            return None
        return self.data_from_doc(document)

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def store(self, data: T | None) -> bool:
        """Insert data and set its id to the generated ObjectId."""
        self.last_error = None
        if data is None:
            return False

        document = self.data_to_doc(data)
        if document is None:
            return False

        try:
            result = self.main_collection.insert_one(document)
        except (PyMongoError, BSONError) as e:
            self._record_failure("store", e)
            return False

        data.id = str(result.inserted_id)
        return True

    def store_all(self, data_list: list[T] | None) -> bool:
        """Insert all entities with one ordered insert_many call.

        Ids are assigned positionally. Either every entity receives an id or
        the call returns False.
        """
        self.last_error = None
        if not data_list or any(data is None for data in data_list):
            return False

        documents = [self.data_to_doc(data) for data in data_list]
        if any(document is None for document in documents):
            return False

        try:
            result = self.main_collection.insert_many(documents, ordered=True)
        except (PyMongoError, BSONError) as e:
            self._record_failure("store_all", e)
            return False

        for data, object_id in zip(data_list, result.inserted_ids):
            data.id = str(object_id)

        logger.debug(f"Stored {len(data_list)} documents in '{self.collection_name}'")
        return True

    def update(self, data: T | None) -> bool:
        """Overwrite the stored fields of data. Returns True if a document matched."""
        self.last_error = None
        if data is None or not data.has_valid_object_id():
            return False

        document = self.data_to_doc(data)
        if document is None:
            return False

        try:
            result = self.main_collection.update_one(
                {"_id": ObjectId(data.id)}, {"$set": document}
            )
        except (PyMongoError, BSONError) as e:
            self._record_failure("update", e)
            return False

        return result.matched_count > 0

    def upsert(self, data: T | None) -> bool:
        """Update data if its id exists, otherwise insert it.

        Entities without an id get a freshly generated one, which is set on
        data before the write.
        """
        self.last_error = None
        if data is None:
            return False

        if data.id and not data.has_valid_object_id():
            return False

        document = self.data_to_doc(data)
        if document is None:
            return False

        object_id = ObjectId(data.id) if data.id else ObjectId()
        data.id = str(object_id)

        try:
            result = self.main_collection.update_one(
                {"_id": object_id}, {"$set": document}, upsert=True
            )
        except (PyMongoError, BSONError) as e:
            self._record_failure("upsert", e)
            return False

        return result.matched_count > 0 or result.upserted_id is not None

    def update_field(self, object_id: str | None, field_name: str, value: Any) -> bool:
        """Set a single field on the document with the given id."""
        self.last_error = None
        if not is_valid_object_id(object_id):
            return False

        try:
            result = self.main_collection.update_one(
                {"_id": ObjectId(object_id)}, {"$set": {field_name: value}}
            )
        except (PyMongoError, BSONError) as e:
            self._record_failure("update_field", e)
            return False

        return result.matched_count > 0

    def delete(self, data: T | None) -> bool:
        """Delete the stored document of data. True if exactly one was removed."""
        self.last_error = None
        if data is None or not data.has_valid_object_id():
            return False

        return self._delete_one(ObjectId(data.id))

    def delete_by_id(self, object_id: str | None) -> bool:
        """Delete the document with the given id. True if exactly one was removed."""
        self.last_error = None
        if not is_valid_object_id(object_id):
            return False

        return self._delete_one(ObjectId(object_id))

    def remove_all(self) -> int:
        """Delete every document in the collection. Returns the removed count."""
        result = self.main_collection.delete_many({})
        logger.info(f"Removed {result.deleted_count} documents from '{self.collection_name}'")
        return result.deleted_count

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def load(self, object_id: str | None) -> T | None:
        """
        Load an entity by id.

        Returns None for a missing id or when nothing matches.

        Raises:
            bson.errors.InvalidId: If object_id is not a well-formed ObjectId.
        """
        if not object_id:
            return None

        return self.aggregation_query_first({"_id": ObjectId(object_id)})

    def load_all(self, ids: Iterable[str] | None = None) -> list[T]:
        """Load the entities with the given ids, or every entity when ids is None."""
        if ids is None:
            return self.aggregation_query_all({})

        object_ids = to_object_ids(ids)
        if not object_ids:
            return []

        return self.aggregation_query_all({"_id": {"$in": object_ids}})

    def object_count(self) -> int:
        return self.main_collection.count_documents({})

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _delete_one(self, object_id: ObjectId) -> bool:
        try:
            result = self.main_collection.delete_one({"_id": object_id})
        except (PyMongoError, BSONError) as e:
            self._record_failure("delete", e)
            return False

        return result.deleted_count == 1

    def _record_failure(self, operation: str, error: Exception) -> None:
        self.last_error = error
        logger.warning(f"{operation} on '{self.collection_name}' failed: {error}")

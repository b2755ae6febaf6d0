"""Base class of every entity stored in a MongoDB collection."""

from typing import Any

from bson import ObjectId
from pydantic import BaseModel, ConfigDict


class MongoObject(BaseModel):
    """Entity carrying the MongoDB ObjectId as a hex string.

    ``id`` is ``None`` until the entity has been stored; the database client
    assigns it from the generated ``_id``.
    """

    model_config = ConfigDict(validate_assignment=True)

    id: str | None = None

    def has_valid_object_id(self) -> bool:
        """Return True if ``id`` is a well-formed 24-character hex ObjectId."""
        return is_valid_object_id(self.id)


def is_valid_object_id(object_id: str | None) -> bool:
    if not object_id:
        return False
    return ObjectId.is_valid(object_id)


def get_object_id(document: dict[str, Any]) -> str | None:
    """Return the document's ``_id`` as a hex string, or None if it has none."""
    object_id = document.get("_id")
    if object_id is None:
        return None
    return str(object_id)

"""Author entity stored in the authors collection."""

from typing import Any

from .base import MongoObject, get_object_id


class Author(MongoObject):
    """A book author. Owns no references."""

    first_name: str | None = None
    last_name: str | None = None

    def to_document(self) -> dict[str, Any]:
        return {
            "firstName": self.first_name,
            "lastName": self.last_name,
        }

    @classmethod
    def from_document(cls, document: dict[str, Any]) -> "Author":
        return cls(
            id=get_object_id(document),
            first_name=document.get("firstName"),
            last_name=document.get("lastName"),
        )

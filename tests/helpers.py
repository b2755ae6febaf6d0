"""Helpers shared by the unit tests."""

from unittest.mock import MagicMock

from bson import ObjectId


def new_id() -> str:
    return str(ObjectId())


def set_aggregate_result(collection: MagicMock, documents: list[dict]) -> None:
    """Make collection.aggregate(...) yield the given documents inside a with block."""
    collection.aggregate.return_value.__enter__.return_value = iter(documents)

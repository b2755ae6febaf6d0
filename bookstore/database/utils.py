"""Helpers for converting hex-string ids to ObjectIds."""

from typing import Iterable

from bson import ObjectId


def to_object_ids(ids: Iterable[str]) -> list[ObjectId]:
    """Convert hex-string ids to ObjectIds.

    Raises:
        bson.errors.InvalidId: If any id is not a well-formed ObjectId.
    """
    return [ObjectId(object_id) for object_id in ids]

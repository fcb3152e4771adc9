"""Helpers for turning MongoDB documents into API-ready dictionaries."""

from typing import Any

from bson import ObjectId


def _convert(value: Any) -> Any:
    if isinstance(value, ObjectId):
        return str(value)
    if isinstance(value, list):
        return [_convert(item) for item in value]
    return value


def serialize_doc(doc: dict) -> dict:
    """Return a copy of ``doc`` with every ObjectId rendered as a string.

    Handles ObjectIds nested in lists, such as an order's ``lessonIDs``.
    """
    return {key: _convert(value) for key, value in doc.items()}

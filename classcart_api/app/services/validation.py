"""
Validation of incoming order payloads.

``validate_order`` runs before ``OrderService.create``.  It performs no
I/O and stops at the first failing rule; each rule has its own message
so clients can tell the user exactly what to fix.
"""

import re
from typing import Any, Mapping

from ..core.errors import ValidationError

PHONE_PATTERN = re.compile(r"[0-9\s\-+()]+")

# Largest integer BSON can store (signed 64-bit).
MAX_STORED_INT = 2**63 - 1


def _is_missing(value: Any) -> bool:
    return value is None or value == ""


def lesson_ids_key(payload: Mapping[str, Any]) -> str:
    """Return the key carrying lesson ids: ``lessonIDs`` or ``cart``."""
    if _is_missing(payload.get("lessonIDs")) and not _is_missing(payload.get("cart")):
        return "cart"
    return "lessonIDs"


def is_name_valid(name: Any) -> bool:
    return isinstance(name, str) and len(name.strip()) >= 2


def is_phone_valid(phone: Any) -> bool:
    return isinstance(phone, str) and PHONE_PATTERN.fullmatch(phone) is not None


def is_cart_valid(cart: Any) -> bool:
    return isinstance(cart, list) and len(cart) > 0


def parse_spaces(value: Any) -> int:
    """Return ``value`` as a positive int or raise ``ValueError``.

    Integers and strings of digits are accepted; booleans, floats and
    values too large to store are not.
    """
    if isinstance(value, bool):
        raise ValueError(value)
    if isinstance(value, str):
        text = value.strip()
        if not text.isdigit():
            raise ValueError(value)
        value = int(text)
    if not isinstance(value, int) or not 1 <= value <= MAX_STORED_INT:
        raise ValueError(value)
    return value


def validate_order(payload: Mapping[str, Any], require_spaces: bool = True) -> None:
    """Check an order payload, raising ``ValidationError`` on the first failure."""
    key = lesson_ids_key(payload)
    required = ["name", "phone", key]
    if require_spaces:
        required.append("numberOfSpaces")

    if any(_is_missing(payload.get(field)) for field in required):
        raise ValidationError(f"Missing required fields: {', '.join(required)}")

    if not is_name_valid(payload["name"]):
        raise ValidationError("Name must be at least 2 characters long")

    if not is_phone_valid(payload["phone"]):
        raise ValidationError("Invalid phone number format")

    if not is_cart_valid(payload[key]):
        label = "Cart" if key == "cart" else "lessonIDs"
        raise ValidationError(f"{label} must be a non-empty array")

    if require_spaces:
        try:
            parse_spaces(payload["numberOfSpaces"])
        except ValueError:
            raise ValidationError("numberOfSpaces must be a positive integer") from None

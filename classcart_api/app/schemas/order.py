"""
Pydantic models for orders.

``OrderCreate`` is deliberately loose: every field is optional and
untyped so that ``services.validation.validate_order`` can reject bad
payloads with its own messages instead of pydantic's.  ``OrderRead``
is the stored representation returned to clients.
"""

from datetime import datetime
from typing import Any, List, Optional

from pydantic import BaseModel, Field

from .common import Envelope


class OrderCreate(BaseModel):
    """Schema for creating an order.

    Lesson identifiers may be sent as ``lessonIDs`` or, as older
    clients do, ``cart``.
    """

    name: Any = Field(None, example="Jo Smith")
    phone: Any = Field(None, example="07123456789")
    lessonIDs: Any = Field(None, example=["665f1c2e8b3e4a1d2c3b4a59"])
    cart: Any = None
    numberOfSpaces: Any = Field(None, example=2)


class OrderRead(BaseModel):
    """Schema for reading an order from the API."""

    id: str = Field(..., alias="_id")
    name: str
    phone: str
    lessonIDs: List[str]
    numberOfSpaces: int
    createdAt: datetime
    status: str

    model_config = {
        "populate_by_name": True,
    }


class OrderResponse(Envelope):
    data: OrderRead


class OrderListResponse(Envelope):
    count: int
    data: List[OrderRead]


class CheckoutResponse(OrderResponse):
    """Order created through checkout, with the lessons it reserved."""

    reserved: Optional[List[str]] = None

"""
Business logic for orders.

Orders are written once and never updated.  ``create`` does not look
at lesson capacity: clients place the order and then set each lesson's
``availableSpaces`` themselves with ``PUT /lessons/{id}``.  ``checkout``
instead reserves the spaces atomically before storing the order.
"""

import logging
from datetime import datetime, timezone
from typing import Any, List, Mapping

from pymongo import DESCENDING
from pymongo.errors import PyMongoError

from ..core.db import ORDERS, DataStore
from ..core.errors import ClassCartError, NotFoundError, StoreError, ValidationError
from ..schemas.order import OrderRead
from .documents import serialize_doc
from .lesson_service import LessonService
from .validation import lesson_ids_key, parse_spaces, validate_order

logger = logging.getLogger(__name__)

CONFIRMED = "confirmed"


class OrderService:
    """Service for placing and reading orders."""

    def __init__(self, store: DataStore) -> None:
        self.store = store

    @property
    def collection(self):
        return self.store.collection(ORDERS)

    def _build_document(self, payload: Mapping[str, Any]) -> dict:
        """Validate ``payload`` and return the document to insert."""
        validate_order(payload)
        lesson_ids = []
        for lesson_id in payload[lesson_ids_key(payload)]:
            if not self.store.is_valid_reference(lesson_id):
                raise ValidationError(f"Invalid lesson ID format: {lesson_id}")
            lesson_ids.append(self.store.to_reference(lesson_id))
        return {
            "name": payload["name"].strip(),
            "phone": payload["phone"].strip(),
            "lessonIDs": lesson_ids,
            "numberOfSpaces": parse_spaces(payload["numberOfSpaces"]),
            "createdAt": datetime.now(timezone.utc),
            "status": CONFIRMED,
        }

    async def _insert(self, document: dict) -> OrderRead:
        try:
            result = await self.collection.insert_one(document)
            created = await self.collection.find_one({"_id": result.inserted_id})
        except PyMongoError as exc:
            logger.exception("Error creating order")
            raise StoreError("Error creating order", str(exc)) from exc
        if created is None:
            raise StoreError("Error creating order", "inserted order could not be read back")
        logger.info(
            "Order %s created for %d space(s) on %d lesson(s)",
            created["_id"],
            created["numberOfSpaces"],
            len(created["lessonIDs"]),
        )
        return OrderRead(**serialize_doc(created))

    async def create(self, payload: Mapping[str, Any]) -> OrderRead:
        """Validate and store a new order.

        Lesson ids are converted to store references, name and phone
        are trimmed, ``createdAt`` is stamped with the current UTC time
        and ``status`` is ``"confirmed"``.  Referenced lessons are not
        checked for existence or capacity.
        """
        document = self._build_document(payload)
        return await self._insert(document)

    async def checkout(self, payload: Mapping[str, Any], lessons: LessonService) -> OrderRead:
        """Reserve capacity on every referenced lesson, then create the order.

        ``numberOfSpaces`` is taken from each distinct lesson.  If any
        reservation or the insert fails, spaces already taken are given
        back before the error propagates.
        """
        document = self._build_document(payload)
        amount = document["numberOfSpaces"]
        reserved: List[Any] = []
        try:
            for ref in dict.fromkeys(document["lessonIDs"]):
                await lessons.reserve_spaces(ref, amount)
                reserved.append(ref)
            return await self._insert(document)
        except ClassCartError:
            for ref in reserved:
                try:
                    await lessons.release_spaces(ref, amount)
                except StoreError:
                    logger.error("Could not release %d spaces on lesson %s", amount, ref)
            raise

    async def list_all(self) -> List[OrderRead]:
        """Return every order, most recent first."""
        try:
            docs = await self.collection.find({}).sort("createdAt", DESCENDING).to_list(length=None)
        except PyMongoError as exc:
            logger.exception("Error fetching orders")
            raise StoreError("Error fetching orders", str(exc)) from exc
        return [OrderRead(**serialize_doc(doc)) for doc in docs]

    async def get_by_id(self, order_id: Any) -> OrderRead:
        """Retrieve a single order.

        Raises ``ValidationError`` for a malformed id and
        ``NotFoundError`` if no order has it.
        """
        if not self.store.is_valid_reference(order_id):
            raise ValidationError("Invalid order ID format")
        try:
            doc = await self.collection.find_one({"_id": self.store.to_reference(order_id)})
        except PyMongoError as exc:
            logger.exception("Error fetching order %s", order_id)
            raise StoreError("Error fetching order", str(exc)) from exc
        if doc is None:
            raise NotFoundError("Order not found")
        return OrderRead(**serialize_doc(doc))

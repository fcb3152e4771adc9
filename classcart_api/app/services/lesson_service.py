"""
Business logic for lessons.

``LessonService`` reads and writes the ``lessons`` collection through
the ``DataStore`` it is constructed with.  Lessons are created by the
seed script only; the API lists, searches and fetches them and
overwrites their ``availableSpaces``.

Setting capacity is a plain overwrite: the caller reads the current
value, computes the new one and sends it back, so two concurrent
clients can overwrite each other (last write wins).
``reserve_spaces`` is the conditional alternative used by checkout.
"""

import logging
import re
from typing import Any, List

from pymongo import ReturnDocument
from pymongo.errors import PyMongoError

from ..core.db import LESSONS, DataStore
from ..core.errors import CapacityExceededError, NotFoundError, StoreError, ValidationError
from ..schemas.lesson import LessonRead
from .documents import serialize_doc
from .validation import MAX_STORED_INT

logger = logging.getLogger(__name__)


class LessonService:
    """Service for the lesson catalog."""

    def __init__(self, store: DataStore) -> None:
        self.store = store

    @property
    def collection(self):
        return self.store.collection(LESSONS)

    def _reference(self, lesson_id: Any):
        if not self.store.is_valid_reference(lesson_id):
            raise ValidationError("Invalid lesson ID format")
        return self.store.to_reference(lesson_id)

    async def list_all(self) -> List[LessonRead]:
        """Return every lesson in store order."""
        try:
            docs = await self.collection.find({}).to_list(length=None)
        except PyMongoError as exc:
            logger.exception("Error fetching lessons")
            raise StoreError("Error fetching lessons", str(exc)) from exc
        return [LessonRead(**serialize_doc(doc)) for doc in docs]

    async def search(self, term: Any) -> List[LessonRead]:
        """Return lessons whose subject or location contains ``term``.

        Matching is a case-insensitive literal substring match.  Raises
        ``ValidationError`` when ``term`` is missing or empty.
        """
        if not isinstance(term, str) or not term:
            raise ValidationError('Search query parameter "q" is required')
        pattern = re.escape(term)
        query = {
            "$or": [
                {"subject": {"$regex": pattern, "$options": "i"}},
                {"location": {"$regex": pattern, "$options": "i"}},
            ]
        }
        try:
            docs = await self.collection.find(query).to_list(length=None)
        except PyMongoError as exc:
            logger.exception("Error searching lessons for %r", term)
            raise StoreError("Error searching lessons", str(exc)) from exc
        return [LessonRead(**serialize_doc(doc)) for doc in docs]

    async def get_by_id(self, lesson_id: Any) -> LessonRead:
        """Retrieve a single lesson.

        Raises ``ValidationError`` for a malformed id and
        ``NotFoundError`` if no lesson has it.
        """
        ref = self._reference(lesson_id)
        try:
            doc = await self.collection.find_one({"_id": ref})
        except PyMongoError as exc:
            logger.exception("Error fetching lesson %s", lesson_id)
            raise StoreError("Error fetching lesson", str(exc)) from exc
        if doc is None:
            raise NotFoundError("Lesson not found")
        return LessonRead(**serialize_doc(doc))

    async def update_capacity(self, lesson_id: Any, available_spaces: Any) -> LessonRead:
        """Overwrite ``availableSpaces`` and return the updated lesson.

        The new value is stored exactly as given; no check is made
        against orders already placed.  Repeating the call with the
        same value leaves the lesson unchanged.
        """
        ref = self._reference(lesson_id)
        if (
            isinstance(available_spaces, bool)
            or not isinstance(available_spaces, int)
            or not 0 <= available_spaces <= MAX_STORED_INT
        ):
            raise ValidationError("Valid availableSpaces value is required")
        try:
            doc = await self.collection.find_one_and_update(
                {"_id": ref},
                {"$set": {"availableSpaces": available_spaces}},
                return_document=ReturnDocument.AFTER,
            )
        except PyMongoError as exc:
            logger.exception("Error updating lesson %s", lesson_id)
            raise StoreError("Error updating lesson", str(exc)) from exc
        if doc is None:
            raise NotFoundError("Lesson not found")
        logger.info("Lesson %s availableSpaces set to %d", lesson_id, available_spaces)
        return LessonRead(**serialize_doc(doc))

    async def reserve_spaces(self, lesson_id: Any, amount: int) -> LessonRead:
        """Atomically take ``amount`` spaces from a lesson.

        The decrement only applies while ``availableSpaces >= amount``,
        so capacity never goes negative.  Raises ``NotFoundError`` for
        an unknown lesson and ``CapacityExceededError`` when too few
        spaces remain.
        """
        ref = self._reference(lesson_id)
        try:
            doc = await self.collection.find_one_and_update(
                {"_id": ref, "availableSpaces": {"$gte": amount}},
                {"$inc": {"availableSpaces": -amount}},
                return_document=ReturnDocument.AFTER,
            )
            if doc is None:
                exists = await self.collection.count_documents({"_id": ref}, limit=1)
        except PyMongoError as exc:
            logger.exception("Error reserving spaces on lesson %s", lesson_id)
            raise StoreError("Error reserving lesson spaces", str(exc)) from exc
        if doc is None:
            if not exists:
                raise NotFoundError("Lesson not found")
            raise CapacityExceededError(f"Not enough available spaces for lesson {lesson_id}")
        logger.info("Reserved %d spaces on lesson %s", amount, lesson_id)
        return LessonRead(**serialize_doc(doc))

    async def release_spaces(self, lesson_id: Any, amount: int) -> None:
        """Give ``amount`` spaces back to a lesson."""
        ref = self._reference(lesson_id)
        try:
            await self.collection.update_one({"_id": ref}, {"$inc": {"availableSpaces": amount}})
        except PyMongoError as exc:
            logger.exception("Error releasing spaces on lesson %s", lesson_id)
            raise StoreError("Error releasing lesson spaces", str(exc)) from exc
        logger.info("Released %d spaces on lesson %s", amount, lesson_id)

"""
Lesson endpoints.

These routes list, search and fetch lessons and set a lesson's
available spaces.  Errors raised by ``LessonService`` are turned into
``{"success": false, ...}`` responses by the handlers registered in
``main.create_app``.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from classcart_api.app.api.deps import get_lesson_service
from classcart_api.app.schemas.lesson import (
    LessonCapacityUpdate,
    LessonListResponse,
    LessonResponse,
    LessonSearchResponse,
)
from classcart_api.app.services.lesson_service import LessonService

router = APIRouter()


@router.get("", response_model=LessonListResponse)
async def list_lessons(service: LessonService = Depends(get_lesson_service)) -> LessonListResponse:
    """Return every lesson."""
    lessons = await service.list_all()
    return LessonListResponse(count=len(lessons), data=lessons)


@router.get("/search", response_model=LessonSearchResponse)
async def search_lessons(
    q: Optional[str] = Query(None, description="Text to find in subject or location"),
    service: LessonService = Depends(get_lesson_service),
) -> LessonSearchResponse:
    """Search lessons by subject or location.

    Matching is a case-insensitive substring match.  Returns 400 when
    ``q`` is missing.
    """
    lessons = await service.search(q)
    return LessonSearchResponse(query=q, count=len(lessons), data=lessons)


@router.get("/{lesson_id}", response_model=LessonResponse)
async def get_lesson(lesson_id: str, service: LessonService = Depends(get_lesson_service)) -> LessonResponse:
    """Retrieve a single lesson by its ID."""
    lesson = await service.get_by_id(lesson_id)
    return LessonResponse(data=lesson)


@router.put("/{lesson_id}", response_model=LessonResponse)
async def update_lesson(
    lesson_id: str,
    update: LessonCapacityUpdate,
    service: LessonService = Depends(get_lesson_service),
) -> LessonResponse:
    """Set a lesson's available spaces.

    Clients call this after placing an order, sending the new value
    they computed.  The value is stored as given.
    """
    lesson = await service.update_capacity(lesson_id, update.availableSpaces)
    return LessonResponse(message="Lesson updated successfully", data=lesson)

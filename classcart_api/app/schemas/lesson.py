"""
Pydantic models for lesson data.

``LessonRead`` mirrors a document in the ``lessons`` collection.  The
store-assigned identifier is exposed under ``_id`` as a string.
``LessonCapacityUpdate`` is the body of ``PUT /lessons/{id}``; its
value is checked by the service so that a missing or negative number
produces the API's own error message.
"""

from typing import List, Optional

from pydantic import BaseModel, Field

from .common import Envelope


class LessonBase(BaseModel):
    subject: str = Field(..., example="Python Programming")
    location: str = Field(..., example="Liverpool")
    price: float = Field(..., ge=0, example=150)
    availableSpaces: int = Field(..., ge=0, example=12)
    image: Optional[str] = Field(None, example="logo-python.svg")
    description: Optional[str] = Field(None, example="Learn Python programming from basics to advanced")


class LessonRead(LessonBase):
    """Schema for reading a lesson from the API."""

    id: str = Field(..., alias="_id")

    model_config = {
        "populate_by_name": True,
    }


class LessonCapacityUpdate(BaseModel):
    """Body for setting a lesson's available spaces.

    Other fields in the body are ignored.
    """

    availableSpaces: Optional[int] = Field(None, example=9)


class LessonResponse(Envelope):
    data: LessonRead


class LessonListResponse(Envelope):
    count: int
    data: List[LessonRead]


class LessonSearchResponse(LessonListResponse):
    query: str

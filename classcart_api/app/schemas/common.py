"""Response envelope shared by every endpoint."""

from typing import Optional

from pydantic import BaseModel


class Envelope(BaseModel):
    success: bool = True
    message: Optional[str] = None


class ErrorResponse(BaseModel):
    success: bool = False
    message: str
    error: Optional[str] = None

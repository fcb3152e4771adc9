"""
Top-level router for version 1 of the API.

This router aggregates the domain routers.  Lesson and order routes
are served at the root (``/lessons``, ``/orders``) because existing
frontends call them there.  Their documented error responses share the
``ErrorResponse`` envelope produced by the handlers in ``main``.
"""

from fastapi import APIRouter

from classcart_api.app.schemas.common import ErrorResponse

from .endpoints import info, lessons, orders

ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Malformed or missing input"},
    404: {"model": ErrorResponse, "description": "No record with this identifier"},
    500: {"model": ErrorResponse, "description": "Database failure"},
}

router = APIRouter()

router.include_router(info.router, tags=["info"])
router.include_router(lessons.router, prefix="/lessons", tags=["lessons"], responses=ERROR_RESPONSES)
router.include_router(
    orders.router,
    prefix="/orders",
    tags=["orders"],
    responses={**ERROR_RESPONSES, 409: {"model": ErrorResponse, "description": "Not enough available spaces"}},
)

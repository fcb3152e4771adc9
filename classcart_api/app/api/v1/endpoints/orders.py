"""
Order endpoints.

``POST /orders`` stores an order without touching lesson capacity;
clients update each lesson afterwards.  ``POST /orders/checkout``
reserves the spaces and stores the order in one request, answering 409
when a lesson is full.
"""

from fastapi import APIRouter, Depends, status

from classcart_api.app.api.deps import get_lesson_service, get_order_service
from classcart_api.app.schemas.order import (
    CheckoutResponse,
    OrderCreate,
    OrderListResponse,
    OrderResponse,
)
from classcart_api.app.services.lesson_service import LessonService
from classcart_api.app.services.order_service import OrderService

router = APIRouter()


@router.post("", response_model=OrderResponse, status_code=status.HTTP_201_CREATED)
async def create_order(
    order: OrderCreate,
    service: OrderService = Depends(get_order_service),
) -> OrderResponse:
    """Create a new order.

    Requires ``name``, ``phone``, a non-empty ``lessonIDs`` list and a
    positive ``numberOfSpaces``.  Lesson capacity is not checked.
    """
    created = await service.create(order.model_dump())
    return OrderResponse(message="Order created successfully", data=created)


@router.post("/checkout", response_model=CheckoutResponse, status_code=status.HTTP_201_CREATED)
async def checkout(
    order: OrderCreate,
    service: OrderService = Depends(get_order_service),
    lessons: LessonService = Depends(get_lesson_service),
) -> CheckoutResponse:
    """Reserve spaces on each lesson and create the order.

    ``numberOfSpaces`` is taken from every distinct lesson listed.
    Nothing is reserved if any lesson lacks capacity.
    """
    created = await service.checkout(order.model_dump(), lessons)
    return CheckoutResponse(
        message="Order created successfully",
        data=created,
        reserved=list(dict.fromkeys(created.lessonIDs)),
    )


@router.get("", response_model=OrderListResponse)
async def list_orders(service: OrderService = Depends(get_order_service)) -> OrderListResponse:
    """Return every order, newest first."""
    orders = await service.list_all()
    return OrderListResponse(count=len(orders), data=orders)


@router.get("/{order_id}", response_model=OrderResponse)
async def get_order(order_id: str, service: OrderService = Depends(get_order_service)) -> OrderResponse:
    """Retrieve a single order by its ID."""
    order = await service.get_by_id(order_id)
    return OrderResponse(data=order)

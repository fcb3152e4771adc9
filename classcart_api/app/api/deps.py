"""
FastAPI dependencies that hand services their data store.

The ``DataStore`` lives on ``app.state`` (set by ``create_app``); each
request builds lightweight service objects around it.
"""

from fastapi import Depends, Request

from classcart_api.app.core.db import DataStore
from classcart_api.app.services.lesson_service import LessonService
from classcart_api.app.services.order_service import OrderService


def get_store(request: Request) -> DataStore:
    return request.app.state.store


def get_lesson_service(store: DataStore = Depends(get_store)) -> LessonService:
    return LessonService(store)


def get_order_service(store: DataStore = Depends(get_store)) -> OrderService:
    return OrderService(store)

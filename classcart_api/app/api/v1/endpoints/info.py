"""
Service information and health endpoints.

``GET /`` describes the API and lists its endpoints; ``GET /health``
reports whether the database handle is connected.
"""

from datetime import datetime, timezone
from typing import Any, Dict

from fastapi import APIRouter, Depends, Request

from classcart_api.app.api.deps import get_store
from classcart_api.app.core.db import DataStore

router = APIRouter()

ENDPOINTS = {
    "lessons": {
        "getAll": "GET /lessons",
        "search": "GET /lessons/search?q=query",
        "getOne": "GET /lessons/:id",
        "update": "PUT /lessons/:id",
    },
    "orders": {
        "create": "POST /orders",
        "checkout": "POST /orders/checkout",
        "getAll": "GET /orders",
        "getOne": "GET /orders/:id",
    },
    "images": "GET /images/:filename",
}


@router.get("/", response_model=Dict[str, Any])
async def root(request: Request) -> Dict[str, Any]:
    settings = request.app.state.settings
    return {
        "message": f"{settings.project_name} Server",
        "version": settings.api_version,
        "database": "MongoDB",
        "endpoints": ENDPOINTS,
    }


@router.get("/health", response_model=Dict[str, Any])
async def health(store: DataStore = Depends(get_store)) -> Dict[str, Any]:
    return {
        "status": "OK",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "database": "connected" if store.connected else "disconnected",
    }

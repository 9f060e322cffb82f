"""Routers package."""

from .auth import router as auth_router
from .brands import router as brands_router
from .content import router as content_router
from .display import router as display_router
from .overview import router as overview_router

__all__ = [
    "auth_router",
    "brands_router",
    "content_router",
    "display_router",
    "overview_router",
]

# src/mediaroom/api/v1/endpoints/__init__.py
"""API endpoint modules for version 1."""

from .media import router as media_router
from .notifications import router as notifications_router
from .search import router as search_router
from .users import router as users_router

__all__ = [
    "media_router",
    "notifications_router",
    "search_router",
    "users_router",
]

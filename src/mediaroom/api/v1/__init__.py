# src/mediaroom/api/v1/__init__.py
"""Version 1 API endpoints."""

from .endpoints import (
    media_router,
    notifications_router,
    search_router,
    users_router,
)

__all__ = [
    "media_router",
    "notifications_router",
    "search_router",
    "users_router",
]

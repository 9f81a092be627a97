"""Version 1 API endpoints."""

from .endpoints import (
    admin_reports_router,
    comments_router,
    pictures_router,
    reports_router,
    users_router,
    votes_router,
)

__all__ = [
    "users_router",
    "pictures_router",
    "comments_router",
    "votes_router",
    "reports_router",
    "admin_reports_router",
]

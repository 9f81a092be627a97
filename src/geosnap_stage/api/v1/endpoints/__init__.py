"""API endpoint modules for version 1."""

from .comments import router as comments_router
from .pictures import router as pictures_router
from .reports import admin_router as admin_reports_router
from .reports import router as reports_router
from .users import router as users_router
from .votes import router as votes_router

__all__ = [
    "admin_reports_router",
    "comments_router",
    "pictures_router",
    "reports_router",
    "users_router",
    "votes_router",
]

# src/geosnap_stage/models/__init__.py
"""SQLAlchemy models for the GeoSnap application."""

from .comment import Comment
from .picture import Picture
from .report import Report, ReportReason, ReportStatus
from .user import User
from .vote import Vote, VoteType

__all__ = [
    "Comment",
    "Picture",
    "Report", "ReportReason", "ReportStatus",
    "User",
    "Vote", "VoteType",
]

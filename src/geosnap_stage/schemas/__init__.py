"""
Pydantic schemas for API request/response models.

These schemas define the structure of API data for serialization and validation.
"""

from .comment import CommentCreate, CommentResponse
from .picture import PictureCreate, PictureResponse
from .report import ReportCreate, ReportResponse, ReportStatusUpdate
from .user import UserCreate, UserResponse
from .vote import MyVoteResponse, VoteCreate, VoteResponse

__all__ = [
    "CommentCreate", "CommentResponse",
    "PictureCreate", "PictureResponse",
    "ReportCreate", "ReportResponse", "ReportStatusUpdate",
    "UserCreate", "UserResponse",
    "MyVoteResponse", "VoteCreate", "VoteResponse",
]

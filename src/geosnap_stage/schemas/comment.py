# src/geosnap_stage/schemas/comment.py
"""Comment-related Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class CommentCreate(BaseModel):
    """Schema for creating a new comment."""

    picture_id: int
    user_id: int
    content: str = Field(..., min_length=1, max_length=1000)


class CommentResponse(BaseModel):
    """Schema for comment information returned by the API."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    picture_id: int
    user_id: int
    content: str
    upvotes: int
    downvotes: int
    is_flagged: bool
    flag_reason: str | None
    created_at: datetime

# src/geosnap_stage/schemas/vote.py
"""Vote-related Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from geosnap_stage.models.vote import VoteType


class VoteCreate(BaseModel):
    """Schema for casting a vote on exactly one picture or comment."""

    user_id: int
    picture_id: int | None = None
    comment_id: int | None = None
    vote_type: VoteType = Field(..., description="upvote or downvote")


class VoteResponse(BaseModel):
    """Schema for a persisted vote."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    picture_id: int | None
    comment_id: int | None
    vote_type: VoteType
    created_at: datetime


class MyVoteResponse(BaseModel):
    """A user's current stance on a target; ``None`` if they never voted."""

    vote_type: VoteType | None = None

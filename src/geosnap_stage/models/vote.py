# src/geosnap_stage/models/vote.py
"""Models capturing voting interactions on pictures and comments."""

from datetime import datetime
from enum import StrEnum

from sqlalchemy import (
    CheckConstraint,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column

from geosnap_stage.db.session import Base
from geosnap_stage.db.time import utcnow


class VoteType(StrEnum):
    """Stance a user takes on a target."""

    UPVOTE = "upvote"
    DOWNVOTE = "downvote"


class Vote(Base):
    """Per-user vote on exactly one picture or comment.

    A repeated vote by the same user on the same target overwrites this row
    instead of adding a second one.
    """

    __tablename__ = "votes"
    __table_args__ = (
        CheckConstraint(
            "(picture_id IS NULL) <> (comment_id IS NULL)",
            name="ck_votes_exactly_one_target",
        ),
        CheckConstraint("vote_type IN ('upvote', 'downvote')", name="ck_votes_vote_type"),
        # NULLs are distinct, so each constraint only binds rows on its own target kind.
        UniqueConstraint("user_id", "picture_id", name="uq_votes_user_picture"),
        UniqueConstraint("user_id", "comment_id", name="uq_votes_user_comment"),
        Index("ix_votes_picture_id", "picture_id"),
        Index("ix_votes_comment_id", "comment_id"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(Integer, ForeignKey("users.id"), nullable=False)
    picture_id: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey("pictures.id", ondelete="CASCADE"),
        nullable=True,
    )
    comment_id: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey("comments.id", ondelete="CASCADE"),
        nullable=True,
    )
    vote_type: Mapped[str] = mapped_column(String(16), nullable=False)
    # Reset whenever the vote is recast.
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )

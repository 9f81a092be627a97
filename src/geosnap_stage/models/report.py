# src/geosnap_stage/models/report.py
"""Models tracking user reports and their moderation lifecycle."""

from datetime import datetime
from enum import StrEnum

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from geosnap_stage.db.session import Base
from geosnap_stage.db.time import utcnow


class ReportReason(StrEnum):
    """Categories a reporter can choose from."""

    INAPPROPRIATE = "inappropriate"
    SPAM = "spam"
    HARASSMENT = "harassment"
    COPYRIGHT = "copyright"
    OTHER = "other"


class ReportStatus(StrEnum):
    """Report lifecycle: pending, then exactly one of reviewed or dismissed."""

    PENDING = "pending"
    REVIEWED = "reviewed"
    DISMISSED = "dismissed"


class Report(Base):
    """Complaint filed by a user against one picture or comment.

    Several reports may exist for the same target, including several from
    the same reporter; report volume drives auto-flagging.
    """

    __tablename__ = "reports"
    __table_args__ = (
        CheckConstraint(
            "(picture_id IS NULL) <> (comment_id IS NULL)",
            name="ck_reports_exactly_one_target",
        ),
        CheckConstraint(
            "reason IN ('inappropriate', 'spam', 'harassment', 'copyright', 'other')",
            name="ck_reports_reason",
        ),
        CheckConstraint(
            "status IN ('pending', 'reviewed', 'dismissed')",
            name="ck_reports_status",
        ),
        Index("ix_reports_picture_status", "picture_id", "status"),
        Index("ix_reports_comment_status", "comment_id", "status"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    reporter_user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id"), nullable=False
    )
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
    reason: Mapped[str] = mapped_column(String(32), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    status: Mapped[str] = mapped_column(
        String(16), nullable=False, default=ReportStatus.PENDING.value
    )
    admin_notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
    reviewed_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )

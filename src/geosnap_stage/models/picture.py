# src/geosnap_stage/models/picture.py
"""SQLAlchemy models for uploaded pictures."""

from datetime import datetime

from sqlalchemy import Boolean, DateTime, ForeignKey, Integer, Numeric, Text
from sqlalchemy.orm import Mapped, mapped_column

from geosnap_stage.db.session import Base
from geosnap_stage.db.time import utcnow


class Picture(Base):
    """Primary content entity: a photo with optional location metadata.

    Only metadata lives here; the image bytes are kept by the storage layer
    under ``filename``.
    """

    __tablename__ = "pictures"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(Integer, ForeignKey("users.id"), nullable=False)
    filename: Mapped[str] = mapped_column(Text, nullable=False)
    original_filename: Mapped[str] = mapped_column(Text, nullable=False)
    mime_type: Mapped[str] = mapped_column(Text, nullable=False)
    file_size: Mapped[int] = mapped_column(Integer, nullable=False)
    width: Mapped[int | None] = mapped_column(Integer, nullable=True)
    height: Mapped[int | None] = mapped_column(Integer, nullable=True)
    latitude: Mapped[float | None] = mapped_column(
        Numeric(10, 8, asdecimal=False), nullable=True
    )
    longitude: Mapped[float | None] = mapped_column(
        Numeric(11, 8, asdecimal=False), nullable=True
    )
    # Hexagon cell identifier, computed upstream.
    h3_index: Mapped[str | None] = mapped_column(Text, nullable=True, index=True)
    # Raw EXIF payload serialized as JSON text.
    exif_data: Mapped[str | None] = mapped_column(Text, nullable=True)
    upload_timestamp: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )

    # Written only by the moderation layer.
    is_flagged: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    flag_reason: Mapped[str | None] = mapped_column(Text, nullable=True)

    # Denormalized tallies, recomputed from the vote rows on every vote.
    upvotes: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    downvotes: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    comment_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )

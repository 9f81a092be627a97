# src/geosnap_stage/models/user.py
"""SQLAlchemy models for anonymous, device-identified users."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import Boolean, DateTime, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from geosnap_stage.db.session import Base
from geosnap_stage.db.time import utcnow


class User(Base):
    """Anonymous identity keyed by the client's device identifier.

    Users are created the first time a device is seen; there is no
    credential of any kind beyond the device identifier itself.
    """

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    device_id: Mapped[str] = mapped_column(Text, unique=True, nullable=False)
    is_admin: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
    # Refreshed on every lookup by device id.
    last_active: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )

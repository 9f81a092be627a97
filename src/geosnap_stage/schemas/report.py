# src/geosnap_stage/schemas/report.py
"""Report and moderation Pydantic schemas."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from geosnap_stage.models.report import ReportReason, ReportStatus


class ReportCreate(BaseModel):
    """Schema for filing a report against exactly one picture or comment."""

    reporter_user_id: int
    picture_id: int | None = None
    comment_id: int | None = None
    reason: ReportReason
    description: str | None = None


class ReportStatusUpdate(BaseModel):
    """Schema for an admin resolving a report."""

    status: Literal["reviewed", "dismissed"] = Field(
        ...,
        description="Reports can never be moved back to pending",
    )
    admin_notes: str | None = None


class ReportResponse(BaseModel):
    """Schema for report information returned by the API."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    reporter_user_id: int
    picture_id: int | None
    comment_id: int | None
    reason: ReportReason
    description: str | None
    status: ReportStatus
    admin_notes: str | None
    created_at: datetime
    reviewed_at: datetime | None

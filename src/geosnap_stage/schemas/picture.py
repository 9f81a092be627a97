# src/geosnap_stage/schemas/picture.py
"""Picture-related Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class PictureCreate(BaseModel):
    """Metadata for a picture whose file has already been stored."""

    user_id: int
    filename: str = Field(..., min_length=1)
    original_filename: str = Field(..., min_length=1)
    mime_type: str = Field(..., min_length=1)
    file_size: int = Field(..., gt=0)
    width: int | None = None
    height: int | None = None
    latitude: float | None = Field(None, ge=-90, le=90)
    longitude: float | None = Field(None, ge=-180, le=180)
    h3_index: str | None = Field(None, description="Precomputed H3 cell identifier")
    exif_data: str | None = Field(None, description="EXIF payload serialized as JSON")


class PictureResponse(BaseModel):
    """Schema for picture information returned by the API."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    filename: str
    original_filename: str
    mime_type: str
    file_size: int
    width: int | None
    height: int | None
    latitude: float | None
    longitude: float | None
    h3_index: str | None
    exif_data: str | None
    upload_timestamp: datetime
    is_flagged: bool
    flag_reason: str | None
    upvotes: int
    downvotes: int
    comment_count: int
    created_at: datetime

# src/geosnap_stage/schemas/user.py
"""User-related Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class UserCreate(BaseModel):
    """Schema for registering (or re-announcing) a device."""

    device_id: str = Field(..., min_length=1, description="Anonymous device identifier")
    is_admin: bool = False


class UserResponse(BaseModel):
    """Schema for user information returned by the API."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    device_id: str
    is_admin: bool
    created_at: datetime
    last_active: datetime

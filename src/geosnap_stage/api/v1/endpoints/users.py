"""User endpoints for the GeoSnap API."""

from fastapi import APIRouter, HTTPException, status

from geosnap_stage.api.v1.dependencies import SessionDep
from geosnap_stage.models import User
from geosnap_stage.schemas.user import UserCreate, UserResponse
from geosnap_stage.services import user_service

router = APIRouter(prefix="/users", tags=["users"])


@router.post("/", response_model=UserResponse)
async def register_device(user_data: UserCreate, db: SessionDep) -> User:
    """Return the user for a device, creating it on first sight."""
    return user_service.get_or_create_user(db, user_data.device_id, user_data.is_admin)


@router.get("/by-device/{device_id}", response_model=UserResponse)
async def get_user_by_device(device_id: str, db: SessionDep) -> User:
    """Look up a user by device id."""
    user = user_service.get_user_by_device_id(db, device_id)
    if user is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return user

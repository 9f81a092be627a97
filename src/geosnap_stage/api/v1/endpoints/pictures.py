"""Picture feed endpoints for the GeoSnap API."""

from collections.abc import Sequence

from fastapi import APIRouter, HTTPException, Query, status

from geosnap_stage.api.v1.dependencies import SessionDep, http_error
from geosnap_stage.models import Comment, Picture
from geosnap_stage.schemas.comment import CommentResponse
from geosnap_stage.schemas.picture import PictureCreate, PictureResponse
from geosnap_stage.services import comment_service, picture_service
from geosnap_stage.services.errors import StageError

router = APIRouter(prefix="/pictures", tags=["pictures"])


@router.post("/", response_model=PictureResponse, status_code=status.HTTP_201_CREATED)
async def register_picture(picture_data: PictureCreate, db: SessionDep) -> Picture:
    """Register metadata for an uploaded picture."""
    try:
        return picture_service.register_picture(db, picture_data)
    except StageError as exc:
        raise http_error(exc) from exc


@router.get("/", response_model=list[PictureResponse])
async def list_pictures(
    db: SessionDep,
    h3_index: str | None = Query(None),
    limit: int = Query(20, ge=1, le=100),
    offset: int = Query(0, ge=0),
) -> Sequence[Picture]:
    """Return the public picture feed, optionally for one hexagon cell."""
    return picture_service.list_pictures(db, h3_index=h3_index, limit=limit, offset=offset)


@router.get("/{picture_id}", response_model=PictureResponse)
async def get_picture(picture_id: int, db: SessionDep) -> Picture:
    """Return a single visible picture."""
    picture = picture_service.get_visible_picture(db, picture_id)
    if picture is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Picture not found")
    return picture


@router.get("/{picture_id}/comments", response_model=list[CommentResponse])
async def list_picture_comments(
    picture_id: int,
    db: SessionDep,
    limit: int = Query(20, ge=1, le=50),
    offset: int = Query(0, ge=0),
) -> Sequence[Comment]:
    """Return visible comments on a picture, newest first."""
    return comment_service.list_comments(db, picture_id, limit=limit, offset=offset)

"""Comment endpoints for the GeoSnap API."""

from fastapi import APIRouter, status

from geosnap_stage.api.v1.dependencies import SessionDep, http_error
from geosnap_stage.models import Comment
from geosnap_stage.schemas.comment import CommentCreate, CommentResponse
from geosnap_stage.services import comment_service
from geosnap_stage.services.errors import StageError

router = APIRouter(prefix="/comments", tags=["comments"])


@router.post("/", response_model=CommentResponse, status_code=status.HTTP_201_CREATED)
async def create_comment(comment_data: CommentCreate, db: SessionDep) -> Comment:
    """Add a comment to a picture."""
    try:
        return comment_service.create_comment(db, comment_data)
    except StageError as exc:
        raise http_error(exc) from exc

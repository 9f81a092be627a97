"""Helpers for registering and browsing pictures."""
from __future__ import annotations

import logging
from typing import Sequence

from sqlalchemy.orm import Session

from geosnap_stage.core.settings import settings
from geosnap_stage.models import Picture
from geosnap_stage.schemas.picture import PictureCreate
from geosnap_stage.services.user_service import require_user

__all__ = [
    "register_picture",
    "list_pictures",
    "get_visible_picture",
]

logger = logging.getLogger(__name__)


def register_picture(db: Session, data: PictureCreate) -> Picture:
    """Persist metadata for a picture whose file is already stored."""
    require_user(db, data.user_id)
    picture = Picture(**data.model_dump())
    db.add(picture)
    db.commit()
    db.refresh(picture)
    logger.info("Registered picture %s for user %s", picture.id, picture.user_id)
    return picture


def list_pictures(
    db: Session,
    h3_index: str | None = None,
    limit: int | None = None,
    offset: int = 0,
) -> Sequence[Picture]:
    """Return unflagged pictures, newest upload first."""
    query = db.query(Picture).filter(Picture.is_flagged.is_(False))
    if h3_index:
        query = query.filter(Picture.h3_index == h3_index)
    return (
        query.order_by(Picture.upload_timestamp.desc(), Picture.id.desc())
        .offset(offset)
        .limit(limit or settings.pictures_page_default)
        .all()
    )


def get_visible_picture(db: Session, picture_id: int) -> Picture | None:
    """Return the picture unless it is missing or flagged."""
    picture = db.get(Picture, picture_id)
    if picture is None or picture.is_flagged:
        return None
    return picture

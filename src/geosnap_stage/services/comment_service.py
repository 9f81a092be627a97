"""Helpers for creating and listing comments."""
from __future__ import annotations

import logging
from typing import Sequence

from sqlalchemy.orm import Session

from geosnap_stage.core.settings import settings
from geosnap_stage.models import Comment
from geosnap_stage.schemas.comment import CommentCreate
from geosnap_stage.services.content_store import ContentStore
from geosnap_stage.services.targets import OnPicture
from geosnap_stage.services.user_service import require_user

__all__ = [
    "create_comment",
    "list_comments",
]

logger = logging.getLogger(__name__)


def create_comment(db: Session, data: CommentCreate) -> Comment:
    """Add a comment to a picture and bump the picture's comment counter."""
    store = ContentStore(db)
    store.get_target(OnPicture(data.picture_id))
    require_user(db, data.user_id)

    comment = Comment(
        picture_id=data.picture_id,
        user_id=data.user_id,
        content=data.content,
    )
    db.add(comment)
    try:
        db.flush()
        store.increment_comment_count(data.picture_id)
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(comment)
    logger.info("Comment %s added to picture %s", comment.id, data.picture_id)
    return comment


def list_comments(
    db: Session,
    picture_id: int,
    limit: int | None = None,
    offset: int = 0,
) -> Sequence[Comment]:
    """Return unflagged comments on a picture, newest first."""
    return (
        db.query(Comment)
        .filter(Comment.picture_id == picture_id, Comment.is_flagged.is_(False))
        .order_by(Comment.created_at.desc(), Comment.id.desc())
        .offset(offset)
        .limit(limit or settings.comments_page_default)
        .all()
    )

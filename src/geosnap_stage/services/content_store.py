"""Access to picture and comment records used by the moderation core.

The voting and moderation services never touch target rows directly; they
read and write through :class:`ContentStore`, which only ever updates the
tally and flag columns (plus the comment counter for the comment path).
"""

from __future__ import annotations

from sqlalchemy import select, update
from sqlalchemy.orm import Session

from geosnap_stage.models import Comment, Picture
from geosnap_stage.services.errors import NotFoundError
from geosnap_stage.services.targets import OnPicture, TargetRef

TargetRecord = Picture | Comment


def _model_for(target: TargetRef) -> type[Picture] | type[Comment]:
    return Picture if isinstance(target, OnPicture) else Comment


def _not_found(target: TargetRef) -> NotFoundError:
    return NotFoundError(f"{target.kind.capitalize()} not found")


class ContentStore:
    """Point lookups and field updates on target records."""

    def __init__(self, db: Session) -> None:
        self.db = db

    def get_target(self, target: TargetRef, *, for_update: bool = False) -> TargetRecord:
        """Return the picture or comment named by ``target``.

        Args:
            target: Reference to the record
            for_update: Take a row lock where the database supports it

        Raises:
            NotFoundError: If the record does not exist
        """
        model = _model_for(target)
        stmt = select(model).where(model.id == target.id)
        if for_update:
            stmt = stmt.with_for_update()
        record = self.db.execute(stmt).scalar_one_or_none()
        if record is None:
            raise _not_found(target)
        return record

    def set_tallies(self, target: TargetRef, upvotes: int, downvotes: int) -> None:
        """Persist recomputed vote counts onto the target record."""
        model = _model_for(target)
        result = self.db.execute(
            update(model)
            .where(model.id == target.id)
            .values(upvotes=upvotes, downvotes=downvotes)
        )
        if result.rowcount == 0:
            raise _not_found(target)

    def set_flag(self, target: TargetRef, flagged: bool, reason: str | None) -> None:
        """Write the visibility flag and its reason onto the target record."""
        model = _model_for(target)
        result = self.db.execute(
            update(model)
            .where(model.id == target.id)
            .values(is_flagged=flagged, flag_reason=reason)
        )
        if result.rowcount == 0:
            raise _not_found(target)

    def increment_comment_count(self, picture_id: int) -> None:
        """Atomically bump the comment counter of a picture."""
        result = self.db.execute(
            update(Picture)
            .where(Picture.id == picture_id)
            .values(comment_count=Picture.comment_count + 1),
            execution_options={"synchronize_session": "fetch"},
        )
        if result.rowcount == 0:
            raise _not_found(OnPicture(picture_id))

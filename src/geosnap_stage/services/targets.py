"""Target references for votes and reports.

A target is either a picture or a comment, never both and never neither.
Callers build a :data:`TargetRef` once at the boundary with
:func:`target_from_ids`; everything downstream receives the variant and
never has to re-check the pair of nullable ids.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, ClassVar

from geosnap_stage.services.errors import TargetMismatchError


@dataclass(frozen=True, slots=True)
class OnPicture:
    """Reference to a picture by id."""

    id: int
    kind: ClassVar[str] = "picture"

    @property
    def picture_id(self) -> int:
        return self.id

    @property
    def comment_id(self) -> None:
        return None

    @property
    def key(self) -> str:
        """Stable identifier used for per-target locking and log lines."""
        return f"{self.kind}:{self.id}"


@dataclass(frozen=True, slots=True)
class OnComment:
    """Reference to a comment by id."""

    id: int
    kind: ClassVar[str] = "comment"

    @property
    def picture_id(self) -> None:
        return None

    @property
    def comment_id(self) -> int:
        return self.id

    @property
    def key(self) -> str:
        """Stable identifier used for per-target locking and log lines."""
        return f"{self.kind}:{self.id}"


TargetRef = OnPicture | OnComment


def target_from_ids(picture_id: int | None, comment_id: int | None) -> TargetRef:
    """Build a target reference from the two optional ids of a request.

    Raises:
        TargetMismatchError: If both ids are set or both are ``None``.
    """
    if picture_id is not None and comment_id is not None:
        raise TargetMismatchError("Cannot target both a picture and a comment")
    if picture_id is not None:
        return OnPicture(picture_id)
    if comment_id is not None:
        return OnComment(comment_id)
    raise TargetMismatchError("Either picture_id or comment_id must be provided")


def target_filter(model: Any, target: TargetRef) -> Any:
    """Return a SQL clause matching rows of ``model`` that point at ``target``."""
    if isinstance(target, OnPicture):
        return model.picture_id == target.id
    return model.comment_id == target.id

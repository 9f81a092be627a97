"""Vote ledger for pictures and comments."""

from __future__ import annotations

import logging

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from geosnap_stage.db.time import utcnow
from geosnap_stage.models import Vote, VoteType
from geosnap_stage.services.content_store import ContentStore
from geosnap_stage.services.locking import (
    TargetLockRegistry,
    commit_with_retry,
    get_target_locks,
)
from geosnap_stage.services.targets import TargetRef, target_filter
from geosnap_stage.services.user_service import require_user

logger = logging.getLogger(__name__)


class VoteLedger:
    """Records one vote per user per target and keeps tallies in sync."""

    def __init__(self, db: Session, *, locks: TargetLockRegistry | None = None) -> None:
        self.db = db
        self.store = ContentStore(db)
        self.locks = locks or get_target_locks()

    def cast(self, user_id: int, target: TargetRef, vote_type: VoteType | str) -> Vote:
        """Cast or recast ``user_id``'s vote on ``target``.

        The last vote wins: a repeated vote overwrites the type and timestamp
        of the existing row. Afterwards the target's upvote and downvote
        counts are recomputed from all of its vote rows.

        Args:
            user_id: Voting user
            target: Picture or comment being voted on
            vote_type: ``upvote`` or ``downvote``

        Returns:
            The persisted vote

        Raises:
            NotFoundError: If the target or the user does not exist
            StoreConflictError: If concurrent writes kept conflicting
        """
        vote_type = VoteType(vote_type)

        def _apply() -> Vote:
            self.store.get_target(target, for_update=True)
            require_user(self.db, user_id)

            vote = self.get_user_vote(user_id, target)
            now = utcnow()
            if vote is None:
                vote = Vote(
                    user_id=user_id,
                    picture_id=target.picture_id,
                    comment_id=target.comment_id,
                    vote_type=vote_type.value,
                    created_at=now,
                )
                self.db.add(vote)
            else:
                vote.vote_type = vote_type.value
                vote.created_at = now
            self.db.flush()

            upvotes, downvotes = self.count_votes(target)
            self.store.set_tallies(target, upvotes, downvotes)
            return vote

        with self.locks.hold(target):
            vote = commit_with_retry(self.db, _apply)

        logger.info("User %s cast %s on %s", user_id, vote_type.value, target.key)
        return vote

    def get_user_vote(self, user_id: int, target: TargetRef) -> Vote | None:
        """Return the user's current vote on ``target``, if any."""
        return self.db.execute(
            select(Vote).where(Vote.user_id == user_id, target_filter(Vote, target))
        ).scalar_one_or_none()

    def count_votes(self, target: TargetRef) -> tuple[int, int]:
        """Return ``(upvotes, downvotes)`` counted from the vote rows."""
        rows = self.db.execute(
            select(Vote.vote_type, func.count())
            .where(target_filter(Vote, target))
            .group_by(Vote.vote_type)
        ).all()
        counts = {vote_type: count for vote_type, count in rows}
        return counts.get(VoteType.UPVOTE.value, 0), counts.get(VoteType.DOWNVOTE.value, 0)

"""Report intake and volume-based auto-flagging."""

from __future__ import annotations

import logging

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from geosnap_stage.core.settings import settings
from geosnap_stage.models import Report, ReportReason, ReportStatus
from geosnap_stage.services.content_store import ContentStore
from geosnap_stage.services.flags import FlagProjector
from geosnap_stage.services.locking import (
    TargetLockRegistry,
    commit_with_retry,
    get_target_locks,
)
from geosnap_stage.services.targets import TargetRef, target_filter
from geosnap_stage.services.user_service import require_user

logger = logging.getLogger(__name__)

AUTO_FLAG_REASON_TEMPLATE = "Auto-flagged: {count} reports received"


class ReportIntake:
    """Records user reports and hides content once enough are pending."""

    def __init__(
        self,
        db: Session,
        *,
        threshold: int | None = None,
        locks: TargetLockRegistry | None = None,
    ) -> None:
        self.db = db
        self.store = ContentStore(db)
        self.flags = FlagProjector(self.store)
        self.threshold = threshold if threshold is not None else settings.auto_flag_report_threshold
        self.locks = locks or get_target_locks()

    def file(
        self,
        reporter_id: int,
        target: TargetRef,
        reason: ReportReason | str,
        description: str | None = None,
    ) -> Report:
        """File a new pending report against ``target``.

        Once the report is committed, auto-flag evaluation runs for the same
        target. Its failures are logged and never undo or fail the report.

        Raises:
            NotFoundError: If the target or the reporter does not exist
            StoreConflictError: If concurrent writes kept conflicting
        """
        reason = ReportReason(reason)

        def _insert() -> Report:
            self.store.get_target(target, for_update=True)
            require_user(self.db, reporter_id)
            report = Report(
                reporter_user_id=reporter_id,
                picture_id=target.picture_id,
                comment_id=target.comment_id,
                reason=reason.value,
                description=description,
                status=ReportStatus.PENDING.value,
                admin_notes=None,
                reviewed_at=None,
            )
            self.db.add(report)
            self.db.flush()
            return report

        with self.locks.hold(target):
            report = commit_with_retry(self.db, _insert)
            logger.info(
                "Report %s filed by user %s on %s (%s)",
                report.id,
                reporter_id,
                target.key,
                reason.value,
            )
            try:
                self._auto_flag(target)
            except Exception:
                logger.exception("Auto-flag evaluation failed for %s", target.key)

        return report

    def evaluate_auto_flag(self, target: TargetRef) -> bool:
        """Flag ``target`` if its pending report count reached the threshold.

        Returns:
            True if the target was flagged by this call
        """
        with self.locks.hold(target):
            return self._auto_flag(target)

    def count_pending(self, target: TargetRef) -> int:
        """Return the number of pending reports against ``target``."""
        return self.db.execute(
            select(func.count())
            .select_from(Report)
            .where(target_filter(Report, target), Report.status == ReportStatus.PENDING.value)
        ).scalar_one()

    def _auto_flag(self, target: TargetRef) -> bool:
        def _apply() -> bool:
            pending = self.count_pending(target)
            if pending < self.threshold:
                return False
            self.flags.flag(target, AUTO_FLAG_REASON_TEMPLATE.format(count=pending))
            return True

        return commit_with_retry(self.db, _apply)

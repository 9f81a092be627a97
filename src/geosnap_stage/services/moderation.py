"""Moderation services: admin resolution of reports."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from sqlalchemy.orm import Session

from geosnap_stage.db.time import utcnow
from geosnap_stage.models import Report, ReportStatus
from geosnap_stage.services.content_store import ContentStore
from geosnap_stage.services.errors import InvalidTransitionError, NotFoundError
from geosnap_stage.services.flags import FlagProjector
from geosnap_stage.services.locking import (
    TargetLockRegistry,
    commit_with_retry,
    get_target_locks,
)
from geosnap_stage.services.targets import target_from_ids

logger = logging.getLogger(__name__)

RESOLVED_STATES = frozenset({ReportStatus.REVIEWED, ReportStatus.DISMISSED})


class ModerationService:
    """Service handling report state transitions and their side effects.

    A report starts ``pending`` and moves to ``reviewed`` or ``dismissed``.
    Resolution is not guarded: resolving an already resolved report simply
    rewrites its status, notes and review time.
    """

    def __init__(self, db: Session, *, locks: TargetLockRegistry | None = None) -> None:
        self.db = db
        self.store = ContentStore(db)
        self.flags = FlagProjector(self.store)
        self.locks = locks or get_target_locks()

    def resolve(
        self,
        report_id: int,
        status: ReportStatus | str,
        admin_notes: str | None = None,
    ) -> Report:
        """Resolve a report as reviewed or dismissed.

        Reviewing flags the reported content with the report's reason;
        dismissing leaves the content untouched.

        Args:
            report_id: ID of the report to resolve
            status: ``reviewed`` or ``dismissed``
            admin_notes: Optional free-text notes from the admin

        Returns:
            The updated report

        Raises:
            InvalidTransitionError: If ``status`` is not a resolved state
            NotFoundError: If the report does not exist
        """
        status = ReportStatus(status)
        if status not in RESOLVED_STATES:
            raise InvalidTransitionError("Reports can only be resolved as reviewed or dismissed")

        report = self._get_report(report_id)
        target = target_from_ids(report.picture_id, report.comment_id)

        def _apply() -> Report:
            current = self._get_report(report_id)
            current.status = status.value
            current.admin_notes = admin_notes
            current.reviewed_at = utcnow()
            if status is ReportStatus.REVIEWED:
                self.flags.flag(target, current.reason)
            return current

        with self.locks.hold(target):
            resolved = commit_with_retry(self.db, _apply)

        logger.info("Report %s resolved as %s", report_id, status.value)
        return resolved

    def list_reports(
        self,
        status: ReportStatus | str | None = None,
        limit: int = 100,
        offset: int = 0,
    ) -> Sequence[Report]:
        """Return reports newest first, optionally filtered by status."""
        query = self.db.query(Report)
        if status is not None:
            query = query.filter(Report.status == ReportStatus(status).value)
        return (
            query.order_by(Report.created_at.desc(), Report.id.desc())
            .offset(offset)
            .limit(limit)
            .all()
        )

    def _get_report(self, report_id: int) -> Report:
        report = self.db.get(Report, report_id)
        if report is None:
            raise NotFoundError(f"Report with id {report_id} not found")
        return report

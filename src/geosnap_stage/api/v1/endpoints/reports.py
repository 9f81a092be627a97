"""Report filing and admin resolution endpoints for the GeoSnap API."""

from collections.abc import Sequence

from fastapi import APIRouter, Query, status

from geosnap_stage.api.v1.dependencies import SessionDep, http_error
from geosnap_stage.models import Report, ReportStatus
from geosnap_stage.schemas.report import ReportCreate, ReportResponse, ReportStatusUpdate
from geosnap_stage.services.errors import StageError
from geosnap_stage.services.moderation import ModerationService
from geosnap_stage.services.reports import ReportIntake
from geosnap_stage.services.targets import target_from_ids

router = APIRouter(prefix="/reports", tags=["reports"])
admin_router = APIRouter(prefix="/admin/reports", tags=["moderation"])


@router.post("/", response_model=ReportResponse, status_code=status.HTTP_201_CREATED)
def file_report(report_data: ReportCreate, db: SessionDep) -> Report:
    """File a report against a picture or comment."""
    try:
        target = target_from_ids(report_data.picture_id, report_data.comment_id)
        return ReportIntake(db).file(
            report_data.reporter_user_id,
            target,
            report_data.reason,
            report_data.description,
        )
    except StageError as exc:
        raise http_error(exc) from exc


@admin_router.get("/", response_model=list[ReportResponse])
def list_reports(
    db: SessionDep,
    report_status: ReportStatus | None = Query(None, alias="status"),
    limit: int = Query(100, ge=1, le=500),
    offset: int = Query(0, ge=0),
) -> Sequence[Report]:
    """List reports for the moderation queue, newest first."""
    return ModerationService(db).list_reports(report_status, limit=limit, offset=offset)


@admin_router.patch("/{report_id}", response_model=ReportResponse)
def resolve_report(report_id: int, update: ReportStatusUpdate, db: SessionDep) -> Report:
    """Mark a report reviewed (hiding its content) or dismissed."""
    try:
        return ModerationService(db).resolve(report_id, update.status, update.admin_notes)
    except StageError as exc:
        raise http_error(exc) from exc

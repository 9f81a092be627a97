# mypy: ignore-errors
"""Tests for the report moderation state machine."""

import pytest

from geosnap_stage.services.errors import InvalidTransitionError, NotFoundError
from geosnap_stage.services.moderation import ModerationService
from geosnap_stage.services.reports import ReportIntake
from geosnap_stage.services.targets import OnComment, OnPicture


@pytest.fixture()
def picture_report(db_session, test_user, test_picture):
    return ReportIntake(db_session).file(test_user.id, OnPicture(test_picture.id), "copyright")


def test_reviewed_report_flags_content(db_session, picture_report, test_picture) -> None:
    report = ModerationService(db_session).resolve(picture_report.id, "reviewed", "Confirmed")

    assert report.status == "reviewed"
    assert report.admin_notes == "Confirmed"
    assert report.reviewed_at is not None
    db_session.refresh(test_picture)
    assert test_picture.is_flagged is True
    assert test_picture.flag_reason == "copyright"


def test_dismissed_report_leaves_content_visible(db_session, picture_report, test_picture) -> None:
    report = ModerationService(db_session).resolve(picture_report.id, "dismissed", None)

    assert report.status == "dismissed"
    assert report.admin_notes is None
    assert report.reviewed_at is not None
    db_session.refresh(test_picture)
    assert test_picture.is_flagged is False
    assert test_picture.flag_reason is None


def test_dismissal_does_not_unflag(db_session, make_user, test_picture) -> None:
    intake = ReportIntake(db_session)
    target = OnPicture(test_picture.id)
    reports = [intake.file(make_user().id, target, "spam") for _ in range(3)]

    ModerationService(db_session).resolve(reports[0].id, "dismissed")

    db_session.refresh(test_picture)
    assert test_picture.is_flagged is True
    assert test_picture.flag_reason == "Auto-flagged: 3 reports received"


def test_review_overwrites_auto_flag_reason(db_session, make_user, test_picture) -> None:
    intake = ReportIntake(db_session)
    target = OnPicture(test_picture.id)
    reports = [intake.file(make_user().id, target, "harassment") for _ in range(3)]

    ModerationService(db_session).resolve(reports[1].id, "reviewed")

    db_session.refresh(test_picture)
    assert test_picture.is_flagged is True
    assert test_picture.flag_reason == "harassment"


def test_reviewed_comment_report_flags_comment_only(
    db_session, test_user, test_picture, test_comment
) -> None:
    report = ReportIntake(db_session).file(test_user.id, OnComment(test_comment.id), "harassment")

    ModerationService(db_session).resolve(report.id, "reviewed")

    db_session.refresh(test_comment)
    db_session.refresh(test_picture)
    assert test_comment.is_flagged is True
    assert test_comment.flag_reason == "harassment"
    assert test_picture.is_flagged is False


def test_cannot_resolve_back_to_pending(db_session, picture_report) -> None:
    with pytest.raises(InvalidTransitionError):
        ModerationService(db_session).resolve(picture_report.id, "pending")
    db_session.refresh(picture_report)
    assert picture_report.status == "pending"
    assert picture_report.reviewed_at is None


def test_unknown_status_rejected(db_session, picture_report) -> None:
    with pytest.raises(ValueError):
        ModerationService(db_session).resolve(picture_report.id, "escalated")


def test_missing_report_raises(db_session) -> None:
    with pytest.raises(NotFoundError):
        ModerationService(db_session).resolve(99999, "reviewed")


def test_resolving_twice_is_permitted(db_session, picture_report, test_picture) -> None:
    service = ModerationService(db_session)
    service.resolve(picture_report.id, "dismissed", "First look")
    report = service.resolve(picture_report.id, "reviewed", "Second look")

    assert report.status == "reviewed"
    assert report.admin_notes == "Second look"
    db_session.refresh(test_picture)
    assert test_picture.is_flagged is True


def test_list_reports_newest_first(db_session, make_user, test_picture) -> None:
    intake = ReportIntake(db_session)
    target = OnPicture(test_picture.id)
    first = intake.file(make_user().id, target, "spam")
    second = intake.file(make_user().id, target, "other")

    reports = ModerationService(db_session).list_reports()

    assert [r.id for r in reports] == [second.id, first.id]


def test_list_reports_filters_by_status(db_session, make_user, test_picture) -> None:
    intake = ReportIntake(db_session)
    target = OnPicture(test_picture.id)
    first = intake.file(make_user().id, target, "spam")
    second = intake.file(make_user().id, target, "other")
    service = ModerationService(db_session)
    service.resolve(first.id, "dismissed")

    assert [r.id for r in service.list_reports("pending")] == [second.id]
    assert [r.id for r in service.list_reports("dismissed")] == [first.id]

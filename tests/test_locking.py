# mypy: ignore-errors
"""Tests for per-target locks and the retrying commit helper."""

import threading
from unittest.mock import MagicMock

import pytest
from sqlalchemy.exc import IntegrityError, OperationalError

from geosnap_stage.services.errors import NotFoundError, StoreConflictError
from geosnap_stage.services.locking import (
    TargetLockRegistry,
    commit_with_retry,
    is_write_conflict,
)
from geosnap_stage.services.targets import OnComment, OnPicture


def test_local_lock_excludes_second_holder_of_same_target() -> None:
    registry = TargetLockRegistry("local", timeout_seconds=0.05)
    with registry.hold(OnPicture(1)):
        errors = []

        def _contend() -> None:
            try:
                with registry.hold(OnPicture(1)):
                    pass
            except StoreConflictError as exc:
                errors.append(exc)

        worker = threading.Thread(target=_contend)
        worker.start()
        worker.join()

    assert len(errors) == 1


def test_local_lock_does_not_block_other_targets() -> None:
    registry = TargetLockRegistry("local", timeout_seconds=0.05)
    entered = []

    def _other_target() -> None:
        with registry.hold(OnComment(1)):
            entered.append("comment:1")

    with registry.hold(OnPicture(1)):
        worker = threading.Thread(target=_other_target)
        worker.start()
        worker.join()
    assert entered == ["comment:1"]


def test_local_lock_serializes_critical_sections() -> None:
    registry = TargetLockRegistry("local", timeout_seconds=5)
    counter = {"value": 0}

    def _increment() -> None:
        for _ in range(200):
            with registry.hold(OnPicture(5)):
                current = counter["value"]
                counter["value"] = current + 1

    workers = [threading.Thread(target=_increment) for _ in range(4)]
    for worker in workers:
        worker.start()
    for worker in workers:
        worker.join()

    assert counter["value"] == 800


def test_local_lock_entries_are_released() -> None:
    registry = TargetLockRegistry("local", timeout_seconds=0.05)
    with registry.hold(OnPicture(2)):
        assert registry.active_keys() == ["picture:2"]
    assert registry.active_keys() == []


def test_local_lock_released_when_block_raises() -> None:
    registry = TargetLockRegistry("local", timeout_seconds=0.05)
    with pytest.raises(RuntimeError):
        with registry.hold(OnPicture(2)):
            raise RuntimeError("boom")
    with registry.hold(OnPicture(2)):
        pass


def test_redis_lock_acquired_and_released() -> None:
    redis_client = MagicMock()
    redis_lock = redis_client.lock.return_value
    redis_lock.acquire.return_value = True
    registry = TargetLockRegistry("redis", redis_client=redis_client, timeout_seconds=2)

    with registry.hold(OnComment(4)):
        pass

    redis_client.lock.assert_called_once_with(
        "geosnap:target:comment:4", timeout=2, blocking_timeout=2
    )
    redis_lock.release.assert_called_once()


def test_redis_lock_timeout_raises_conflict() -> None:
    redis_client = MagicMock()
    redis_client.lock.return_value.acquire.return_value = False
    registry = TargetLockRegistry("redis", redis_client=redis_client, timeout_seconds=1)

    with pytest.raises(StoreConflictError):
        with registry.hold(OnPicture(1)):
            pytest.fail("block must not run without the lock")


def _conflict() -> IntegrityError:
    return IntegrityError("INSERT INTO votes", {}, Exception("UNIQUE constraint failed"))


def test_commit_with_retry_recovers_from_conflict() -> None:
    db = MagicMock()
    outcomes = [_conflict(), "ok"]

    def _operation():
        outcome = outcomes.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    assert commit_with_retry(db, _operation, attempts=3) == "ok"
    assert db.rollback.call_count == 1
    assert db.commit.call_count == 1


def test_commit_with_retry_gives_up_after_bounded_attempts() -> None:
    db = MagicMock()
    db.commit.side_effect = OperationalError("COMMIT", {}, Exception("database is locked"))

    with pytest.raises(StoreConflictError):
        commit_with_retry(db, lambda: None, attempts=3)

    assert db.commit.call_count == 3
    assert db.rollback.call_count == 3


def test_commit_with_retry_does_not_retry_domain_errors() -> None:
    db = MagicMock()
    calls = []

    def _operation():
        calls.append(1)
        raise NotFoundError("Picture not found")

    with pytest.raises(NotFoundError):
        commit_with_retry(db, _operation, attempts=3)

    assert len(calls) == 1
    db.rollback.assert_called_once()
    db.commit.assert_not_called()


def test_commit_with_retry_does_not_retry_broken_store() -> None:
    db = MagicMock()
    db.commit.side_effect = OperationalError("INSERT INTO votes", {}, Exception("no such table: votes"))

    with pytest.raises(OperationalError):
        commit_with_retry(db, lambda: None, attempts=3)

    assert db.commit.call_count == 1
    db.rollback.assert_called_once()


def test_serialization_failure_counts_as_conflict() -> None:
    class _SerializationFailure(Exception):
        sqlstate = "40001"

    class _ConnectionRefused(Exception):
        sqlstate = "08006"

    assert is_write_conflict(_conflict())
    assert is_write_conflict(OperationalError("UPDATE", {}, _SerializationFailure("could not serialize")))
    assert is_write_conflict(OperationalError("UPDATE", {}, Exception("database is locked")))
    assert not is_write_conflict(OperationalError("SELECT", {}, _ConnectionRefused("connection refused")))
    assert not is_write_conflict(OperationalError("SELECT", {}, Exception("disk I/O error")))

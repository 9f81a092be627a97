"""Per-target serialization for vote and report read-modify-write sequences.

Every sequence that reads a target's vote or report rows and then writes
tally or flag fields back runs while holding that target's lock, and
commits as one unit through :func:`commit_with_retry`. Operations on
different targets never wait on each other.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from threading import Lock
from typing import Any, TypeVar

import redis
from redis.exceptions import LockError
from sqlalchemy.exc import DBAPIError, IntegrityError, OperationalError
from sqlalchemy.orm import Session

from geosnap_stage.core.settings import settings
from geosnap_stage.services.errors import StoreConflictError
from geosnap_stage.services.targets import TargetRef

logger = logging.getLogger(__name__)

T = TypeVar("T")

REDIS_LOCK_PREFIX = "geosnap:target:"

# serialization_failure, deadlock_detected, lock_not_available
CONFLICT_SQLSTATES = frozenset({"40001", "40P01", "55P03"})
SQLITE_CONFLICT_MESSAGES = ("database is locked", "database table is locked")


def is_write_conflict(exc: DBAPIError) -> bool:
    """Return whether ``exc`` came from a concurrent writer rather than a broken store.

    Constraint violations are the losing side of a racing insert. Operational
    errors only count when the driver reports a lock or serialization
    failure; a missing table or a dropped connection is not a conflict.
    """
    if isinstance(exc, IntegrityError):
        return True
    sqlstate = getattr(exc.orig, "sqlstate", None) or getattr(exc.orig, "pgcode", None)
    if sqlstate in CONFLICT_SQLSTATES:
        return True
    message = str(exc.orig).lower()
    return any(fragment in message for fragment in SQLITE_CONFLICT_MESSAGES)


class TargetLockRegistry:
    """Hands out mutual exclusion scopes keyed by target.

    The ``local`` backend serializes threads of one process. The ``redis``
    backend serializes across processes sharing the same Redis instance.
    """

    def __init__(
        self,
        backend: str | None = None,
        *,
        redis_client: Any | None = None,
        timeout_seconds: float | None = None,
    ) -> None:
        self.backend = backend or settings.target_lock_backend
        self.timeout_seconds = (
            settings.target_lock_timeout_seconds if timeout_seconds is None else timeout_seconds
        )
        self._redis = redis_client
        if self.backend == "redis" and self._redis is None:
            self._redis = redis.from_url(settings.redis_url)
        # key -> [lock, number of holders and waiters]
        self._locks: dict[str, list[Any]] = {}
        self._registry_lock = Lock()

    @contextmanager
    def hold(self, target: TargetRef) -> Iterator[None]:
        """Hold the lock for ``target`` for the duration of the block.

        Raises:
            StoreConflictError: If the lock could not be acquired in time
        """
        if self.backend == "redis":
            with self._hold_redis(target):
                yield
        else:
            with self._hold_local(target):
                yield

    @contextmanager
    def _hold_local(self, target: TargetRef) -> Iterator[None]:
        key = target.key
        with self._registry_lock:
            entry = self._locks.setdefault(key, [Lock(), 0])
            entry[1] += 1
        lock: Lock = entry[0]
        try:
            if not lock.acquire(timeout=self.timeout_seconds):
                raise StoreConflictError(f"Timed out waiting for lock on {key}")
            try:
                yield
            finally:
                lock.release()
        finally:
            with self._registry_lock:
                entry[1] -= 1
                if entry[1] == 0:
                    self._locks.pop(key, None)

    @contextmanager
    def _hold_redis(self, target: TargetRef) -> Iterator[None]:
        name = f"{REDIS_LOCK_PREFIX}{target.key}"
        lock = self._redis.lock(
            name,
            timeout=self.timeout_seconds,
            blocking_timeout=self.timeout_seconds,
        )
        if not lock.acquire():
            raise StoreConflictError(f"Timed out waiting for lock on {target.key}")
        try:
            yield
        finally:
            try:
                lock.release()
            except LockError:
                # The lease expired while we held it; the commit already happened.
                logger.warning("Lock %s expired before release", name)

    def active_keys(self) -> list[str]:
        """Return the keys of local locks currently held or awaited."""
        with self._registry_lock:
            return sorted(self._locks)


_REGISTRY: TargetLockRegistry | None = None
_REGISTRY_GUARD = Lock()


def get_target_locks() -> TargetLockRegistry:
    """Return the process-wide target lock registry."""
    global _REGISTRY
    with _REGISTRY_GUARD:
        if _REGISTRY is None:
            _REGISTRY = TargetLockRegistry()
        return _REGISTRY


def commit_with_retry(
    db: Session,
    operation: Callable[[], T],
    *,
    attempts: int | None = None,
) -> T:
    """Run ``operation`` and commit, retrying on write conflicts.

    The operation must be safe to re-run from scratch: on a conflict the
    session is rolled back and ``operation`` is called again. Any other
    exception rolls back and propagates immediately.

    Args:
        db: Database session shared by the operation
        operation: Callable performing the reads and writes
        attempts: Maximum number of tries (defaults to settings)

    Returns:
        Whatever ``operation`` returned on the committed attempt

    Raises:
        StoreConflictError: If every attempt hit a conflict
    """
    max_attempts = attempts or settings.store_conflict_max_retries
    last_error: Exception | None = None
    for attempt in range(1, max_attempts + 1):
        try:
            result = operation()
            db.commit()
        except (IntegrityError, OperationalError) as exc:
            db.rollback()
            if not is_write_conflict(exc):
                logger.error("Database failure outside a write conflict: %s", exc.orig)
                raise
            last_error = exc
            logger.warning(
                "Write conflict on attempt %d/%d: %s",
                attempt,
                max_attempts,
                exc.__class__.__name__,
            )
            continue
        except Exception:
            db.rollback()
            raise
        return result

    raise StoreConflictError(
        f"Concurrent write conflict persisted after {max_attempts} attempts"
    ) from last_error

"""Business logic services for the GeoSnap application."""

from .content_store import ContentStore
from .errors import (
    InvalidTransitionError,
    NotFoundError,
    StageError,
    StoreConflictError,
    TargetMismatchError,
)
from .flags import FlagProjector
from .locking import TargetLockRegistry, commit_with_retry, get_target_locks
from .moderation import ModerationService
from .reports import ReportIntake
from .targets import OnComment, OnPicture, TargetRef, target_from_ids
from .votes import VoteLedger

__all__ = [
    "ContentStore",
    "FlagProjector",
    "ModerationService",
    "ReportIntake",
    "VoteLedger",
    "TargetLockRegistry", "commit_with_retry", "get_target_locks",
    "OnComment", "OnPicture", "TargetRef", "target_from_ids",
    "InvalidTransitionError",
    "NotFoundError",
    "StageError",
    "StoreConflictError",
    "TargetMismatchError",
]

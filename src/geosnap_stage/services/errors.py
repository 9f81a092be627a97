"""Domain errors raised by the voting and moderation services."""


class StageError(RuntimeError):
    """Base class for errors surfaced by the service layer."""


class TargetMismatchError(StageError, ValueError):
    """Raised when a request names zero targets or both a picture and a comment.

    This is a caller contract violation and is never retried.
    """


class NotFoundError(StageError, LookupError):
    """Raised when a referenced user, picture, comment or report is absent."""


class StoreConflictError(StageError):
    """Raised when a per-target write kept conflicting after bounded retries."""


class InvalidTransitionError(StageError, ValueError):
    """Raised when a report is asked to move into a state it cannot enter."""

"""Shared API dependencies and error translation."""

from typing import Annotated

from fastapi import Depends, HTTPException, status
from sqlalchemy.orm import Session

from geosnap_stage.db.session import get_db
from geosnap_stage.services.errors import (
    InvalidTransitionError,
    NotFoundError,
    StageError,
    StoreConflictError,
    TargetMismatchError,
)

# Type alias for database session dependency
SessionDep = Annotated[Session, Depends(get_db)]

_STATUS_FOR_ERROR: dict[type[StageError], int] = {
    TargetMismatchError: status.HTTP_400_BAD_REQUEST,
    NotFoundError: status.HTTP_404_NOT_FOUND,
    StoreConflictError: status.HTTP_409_CONFLICT,
    InvalidTransitionError: status.HTTP_422_UNPROCESSABLE_ENTITY,
}


def http_error(exc: StageError) -> HTTPException:
    """Translate a service-layer error into an HTTP error response.

    Args:
        exc: Error raised by a service

    Returns:
        HTTPException carrying the matching status code and message
    """
    for error_type, status_code in _STATUS_FOR_ERROR.items():
        if isinstance(exc, error_type):
            return HTTPException(status_code=status_code, detail=str(exc))
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc))

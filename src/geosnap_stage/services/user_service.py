"""CRUD-style helpers for device-identified users."""
from __future__ import annotations

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from geosnap_stage.db.time import utcnow
from geosnap_stage.models.user import User
from geosnap_stage.services.errors import NotFoundError

__all__ = [
    "get_user",
    "require_user",
    "get_user_by_device_id",
    "get_or_create_user",
]

logger = logging.getLogger(__name__)


def get_user(db: Session, user_id: int) -> User | None:
    """Return a single user by primary key."""
    return db.get(User, user_id)


def require_user(db: Session, user_id: int) -> User:
    """Return the user or raise :class:`NotFoundError`."""
    user = get_user(db, user_id)
    if user is None:
        raise NotFoundError("User not found")
    return user


def get_user_by_device_id(db: Session, device_id: str) -> User | None:
    """Look up a user by device id and refresh its last-active time."""
    user = db.query(User).filter(User.device_id == device_id).first()
    if user is None:
        return None
    user.last_active = utcnow()
    db.commit()
    db.refresh(user)
    return user


def get_or_create_user(db: Session, device_id: str, is_admin: bool = False) -> User:
    """Return the user for ``device_id``, creating it on first sight.

    An existing user only has ``last_active`` refreshed; ``is_admin`` is
    applied to new users only.
    """
    existing = get_user_by_device_id(db, device_id)
    if existing is not None:
        return existing

    user = User(device_id=device_id, is_admin=is_admin)
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        # Another request registered the same device first.
        db.rollback()
        existing = get_user_by_device_id(db, device_id)
        if existing is None:
            raise
        return existing
    db.refresh(user)
    logger.info("Registered user %s", user.id)
    return user

# tests/conftest.py
from __future__ import annotations

import os
from collections.abc import Callable, Generator, Iterator
from itertools import count

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

os.environ.setdefault("PYTEST_RUNNING", "true")

from geosnap_stage.db.session import Base
from geosnap_stage.db.session import get_db as app_get_session
from geosnap_stage.main import app as fastapi_app
from geosnap_stage.models import Comment, Picture, User

TEST_DB_URL = "sqlite://"

_DEVICE_COUNTER = count(1)
_FILE_COUNTER = count(1)


@pytest.fixture(scope="session")
def engine() -> Generator[Engine, None, None]:
    engine = create_engine(
        TEST_DB_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture()
def db_session(engine: Engine) -> Iterator[Session]:
    SessionLocal = sessionmaker(
        bind=engine,
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
    )
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()

        # Services commit, so each test wipes the tables instead of rolling back.
        with engine.begin() as cleanup_conn:
            for table in reversed(Base.metadata.sorted_tables):
                cleanup_conn.execute(table.delete())


@pytest.fixture(scope="session")
def app() -> FastAPI:
    return fastapi_app


@pytest.fixture(autouse=True)
def override_session_dependency(app: FastAPI, db_session: Session) -> Iterator[None]:
    def _get_session_override() -> Generator[Session, None, None]:
        yield db_session

    app.dependency_overrides[app_get_session] = _get_session_override
    try:
        yield
    finally:
        app.dependency_overrides.pop(app_get_session, None)


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client


@pytest.fixture()
def make_user(db_session: Session) -> Callable[..., User]:
    """Return a factory persisting users with unique device ids."""

    def _make_user(is_admin: bool = False) -> User:
        user = User(device_id=f"device-{next(_DEVICE_COUNTER)}", is_admin=is_admin)
        db_session.add(user)
        db_session.commit()
        db_session.refresh(user)
        return user

    return _make_user


@pytest.fixture()
def test_user(make_user: Callable[..., User]) -> User:
    """Create and return a persisted test user."""
    return make_user()


@pytest.fixture()
def other_user(make_user: Callable[..., User]) -> User:
    """Create and return a second persisted user."""
    return make_user()


@pytest.fixture()
def admin_user(make_user: Callable[..., User]) -> User:
    """Create and return an admin user."""
    return make_user(is_admin=True)


@pytest.fixture()
def make_picture(db_session: Session, test_user: User) -> Callable[..., Picture]:
    """Return a factory persisting pictures owned by the test user."""

    def _make_picture(h3_index: str | None = None) -> Picture:
        n = next(_FILE_COUNTER)
        picture = Picture(
            user_id=test_user.id,
            filename=f"stored-{n}.jpg",
            original_filename=f"IMG_{n}.jpg",
            mime_type="image/jpeg",
            file_size=2048,
            h3_index=h3_index,
        )
        db_session.add(picture)
        db_session.commit()
        db_session.refresh(picture)
        return picture

    return _make_picture


@pytest.fixture()
def test_picture(make_picture: Callable[..., Picture]) -> Picture:
    """Create a baseline picture for tests."""
    return make_picture()


@pytest.fixture()
def test_comment(db_session: Session, test_picture: Picture, test_user: User) -> Comment:
    """Create a baseline comment on the test picture."""
    comment = Comment(
        picture_id=test_picture.id,
        user_id=test_user.id,
        content="Nice light",
    )
    db_session.add(comment)
    db_session.commit()
    db_session.refresh(comment)
    return comment

"""Tests for environment-driven settings."""

import pytest
from pydantic import ValidationError

from geosnap_stage.core.settings import Settings


def test_defaults() -> None:
    settings = Settings()
    assert settings.auto_flag_report_threshold == 3
    assert settings.target_lock_backend == "local"
    assert settings.store_conflict_max_retries >= 1


def test_threshold_overridable_from_environment(monkeypatch) -> None:
    monkeypatch.setenv("AUTO_FLAG_REPORT_THRESHOLD", "5")
    monkeypatch.setenv("TARGET_LOCK_BACKEND", "redis")
    settings = Settings()
    assert settings.auto_flag_report_threshold == 5
    assert settings.target_lock_backend == "redis"


def test_threshold_must_be_positive(monkeypatch) -> None:
    monkeypatch.setenv("AUTO_FLAG_REPORT_THRESHOLD", "0")
    with pytest.raises(ValidationError):
        Settings()


def test_testing_database_override() -> None:
    settings = Settings(
        DATABASE_URL="postgresql+asyncpg://db/prod",
        TEST_DATABASE_URL="sqlite://",
        USE_TEST_DATABASE=True,
    )
    assert settings.effective_database_url == "sqlite://"

    prod = Settings(DATABASE_URL="postgresql+asyncpg://db/prod")
    assert prod.database_url_sync == "postgresql+psycopg://db/prod"


@pytest.mark.parametrize("timeout", ["0", "-1"])
def test_lock_timeout_must_be_positive(monkeypatch, timeout) -> None:
    monkeypatch.setenv("TARGET_LOCK_TIMEOUT_SECONDS", timeout)
    with pytest.raises(ValidationError):
        Settings()

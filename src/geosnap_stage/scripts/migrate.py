# src/geosnap_stage/scripts/migrate.py
"""Apply Alembic migrations up to head."""
from __future__ import annotations

from pathlib import Path

from alembic import command
from alembic.config import Config

from geosnap_stage.core.settings import settings

MIGRATIONS_DIR = Path(__file__).resolve().parents[3] / "migrations"


def run_upgrade_head() -> None:
    cfg = Config(str(MIGRATIONS_DIR / "alembic.ini"))
    cfg.set_main_option("sqlalchemy.url", settings.database_url_sync)
    cfg.set_main_option("script_location", str(MIGRATIONS_DIR))
    command.upgrade(cfg, "head")


if __name__ == "__main__":
    run_upgrade_head()

"""Create all tables directly, bypassing migrations (local development only)."""

import logging

from geosnap_stage.core.logging import configure_logging
from geosnap_stage.db.session import create_tables

logger = logging.getLogger(__name__)


def init_db() -> None:
    """Initialize the database by creating all tables."""
    create_tables()


if __name__ == "__main__":
    configure_logging()
    init_db()
    logger.info("Database initialized.")

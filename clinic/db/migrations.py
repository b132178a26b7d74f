"""Apply Alembic schema migrations from inside the application."""

import logging
from pathlib import Path

from alembic import command
from alembic.config import Config

from clinic.core.config import settings

logger = logging.getLogger(__name__)

PROJECT_ROOT = Path(__file__).resolve().parents[2]
ALEMBIC_INI = PROJECT_ROOT / "alembic.ini"
ALEMBIC_DIR = PROJECT_ROOT / "alembic"


def get_alembic_config() -> Config:
    """Build an Alembic config pointing at the project's migration scripts."""
    config = Config(str(ALEMBIC_INI))
    config.set_main_option("script_location", str(ALEMBIC_DIR))
    config.set_main_option(
        "sqlalchemy.url", settings.database_url_sync.replace("%", "%%")
    )
    return config


def run_migrations(revision: str = "head") -> None:
    """Upgrade the database schema to the given revision.

    Alembic records applied revisions in its version table, so revisions
    already applied are skipped.
    """
    logger.info(f"Applying database migrations up to {revision}")
    command.upgrade(get_alembic_config(), revision)
    logger.info("Database migrations complete")

"""
Alembic migration runner for application startup.
This module provides functions to run Alembic migrations programmatically.
"""
import logging
from pathlib import Path

from sqlalchemy import create_engine
from sqlalchemy.exc import OperationalError
from alembic import command
from alembic.config import Config
from alembic.runtime.migration import MigrationContext

logger = logging.getLogger(__name__)

BASE_DIR = Path(__file__).resolve().parent


def get_alembic_config(database_url: str) -> Config:
    alembic_cfg = Config(str(BASE_DIR / "alembic.ini"))
    alembic_cfg.set_main_option("script_location", str(BASE_DIR / "alembic"))
    # ConfigParser interpolation: escape % in passwords
    alembic_cfg.set_main_option("sqlalchemy.url", database_url.replace("%", "%%"))
    alembic_cfg.attributes["configure_logger"] = False
    return alembic_cfg


def run_migrations(database_url: str) -> None:
    """
    Upgrade the database to the latest revision.
    Connection failures are re-raised so startup can report them.
    """
    try:
        logger.info("Running Alembic migrations...")
        command.upgrade(get_alembic_config(database_url), "head")
        logger.info("Alembic migrations completed successfully")
    except OperationalError as e:
        logger.error(f"Failed to connect to database during migrations: {e}")
        raise


def get_current_revision(database_url: str) -> str:
    """
    Get the current database revision.
    Returns the revision string or 'None' if no migrations have been applied.
    """
    engine = create_engine(database_url)
    try:
        with engine.connect() as connection:
            context = MigrationContext.configure(connection)
            current_rev = context.get_current_revision()
            return current_rev if current_rev else 'None'
    finally:
        engine.dispose()

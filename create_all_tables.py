"""
Create every table that does not exist yet, without going through Alembic.

Usage:
    python create_all_tables.py

Useful for a fresh local database; deployments rely on the migrations run at
startup (see alembic_runner.py).
"""
import sys
import logging

from dotenv import load_dotenv
from sqlalchemy import inspect
from sqlalchemy.exc import OperationalError

# Load environment variables
load_dotenv()

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(levelname)s - %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S'
)
logger = logging.getLogger(__name__)

from config import get_settings
from database import Base, build_engine, register_models


def create_missing_tables(engine):
    """Create the registered tables missing from the database; return their names."""
    existing_tables = set(inspect(engine).get_table_names())
    expected_tables = set(Base.metadata.tables.keys())
    missing_tables = expected_tables - existing_tables

    if not missing_tables:
        logger.info(f"All {len(expected_tables)} tables already exist")
        return []

    logger.info(f"Creating {len(missing_tables)} missing table(s): {', '.join(sorted(missing_tables))}")
    with engine.begin() as conn:
        Base.metadata.create_all(bind=conn, checkfirst=True)

    created = set(inspect(engine).get_table_names()) - existing_tables
    still_missing = missing_tables - created
    if still_missing:
        logger.warning(f"Tables not created: {', '.join(sorted(still_missing))}")
    return sorted(created)


def main() -> int:
    register_models()
    engine = build_engine(get_settings())
    try:
        created = create_missing_tables(engine)
    except OperationalError as e:
        logger.error(f"Database operation error: {e}")
        logger.error("Check that the database is running and DATABASE_URL is correct")
        return 1
    finally:
        engine.dispose()

    if created:
        logger.info(f"Created tables: {', '.join(created)}")
    return 0


if __name__ == "__main__":
    sys.exit(main())

import logging

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, declarative_base
from sqlalchemy.pool import QueuePool, StaticPool

from config import Settings

logger = logging.getLogger(__name__)

Base = declarative_base()

IN_MEMORY_SQLITE_URLS = ("sqlite://", "sqlite:///:memory:")


def build_engine(settings: Settings) -> Engine:
    """
    Create the SQLAlchemy engine for the configured database.
    MySQL gets a bounded QueuePool: requests beyond pool_size + max_overflow
    wait up to pool_timeout seconds for a connection, then fail.
    """
    url = settings.database_url

    engine_kwargs = {
        "echo": False,
        "future": True,
        "pool_pre_ping": True,
    }

    # SQLite has different pooling requirements
    if url.startswith("sqlite"):
        engine_kwargs["connect_args"] = {"check_same_thread": False}
        if url in IN_MEMORY_SQLITE_URLS:
            # One shared connection, otherwise every checkout sees an empty database
            engine_kwargs["poolclass"] = StaticPool
    else:
        engine_kwargs.update(
            {
                "poolclass": QueuePool,
                "pool_size": settings.DB_POOL_SIZE,
                "max_overflow": settings.DB_MAX_OVERFLOW,
                "pool_timeout": settings.DB_POOL_TIMEOUT,
                "pool_recycle": settings.DB_POOL_RECYCLE,
            }
        )

    engine = create_engine(url, **engine_kwargs)

    if url.startswith("sqlite"):
        # SQLite leaves foreign keys unenforced unless asked per connection
        @event.listens_for(engine, "connect")
        def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

        logger.info("Database configured with SQLite at %s", url)
    else:
        logger.info(
            "Database connection pool configured: size=%s, max_overflow=%s, timeout=%ss",
            settings.DB_POOL_SIZE,
            settings.DB_MAX_OVERFLOW,
            settings.DB_POOL_TIMEOUT,
        )
    return engine


def build_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(bind=engine, autocommit=False, autoflush=False, future=True)


def register_models() -> None:
    """Import every model module so its table is registered on Base.metadata."""
    from Login_module.User.user_model import User  # noqa: F401
    from Service_module.Service_model import Service  # noqa: F401
    from State_module.State_model import State  # noqa: F401
    from RTIApplication_module.RTIApplication_model import RTIApplication  # noqa: F401
    from Consultation_module.Consultation_model import Consultation  # noqa: F401
    from Callback_module.Callback_model import CallbackRequest  # noqa: F401

import logging
import os

from sqlalchemy import create_engine, event
from sqlalchemy.engine.url import make_url
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from fincontrol.core.db import register_query_timing

logger = logging.getLogger(__name__)

DEFAULT_DATABASE_URL = "sqlite:///./fincontrol.db"

# Create Base class for models
Base = declarative_base()

# Internal lazy globals
_engine = None
_SessionLocal = None
_database_url = None


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    # SQLite ignores REFERENCES clauses unless asked per connection
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def get_engine():
    """Return a cached SQLAlchemy engine, creating it from DATABASE_URL on
    first call. This allows tests to set DATABASE_URL before the engine is
    constructed."""
    global _engine, _SessionLocal, _database_url

    database_url = os.getenv("DATABASE_URL", DEFAULT_DATABASE_URL)
    if _engine is not None and _database_url == database_url:
        return _engine

    if _engine is not None:
        _engine.dispose()
    _SessionLocal = None

    url = make_url(database_url)
    is_postgres = url.drivername.startswith("postgres")
    is_sqlite = url.drivername.startswith("sqlite")

    if is_postgres:
        _engine = create_engine(
            database_url,
            pool_size=10,
            max_overflow=20,
            pool_pre_ping=True,  # Detects and refreshes stale connections
            pool_recycle=3600,  # Recycle connections every hour to avoid idle timeouts
            connect_args={
                "application_name": "fincontrol",  # Visible in pg_stat_activity
                "connect_timeout": 10,
            },
            echo=False,  # Controlled by logging config
        )
    elif is_sqlite and (url.database in (None, "", ":memory:")):
        # Use a single shared in-memory database across the process so DDL
        # persists across connections (tests create tables then open sessions).
        _engine = create_engine(
            database_url,
            echo=False,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    else:
        _engine = create_engine(database_url, echo=False)

    if is_sqlite:
        event.listen(_engine, "connect", _enable_sqlite_foreign_keys)

    register_query_timing(_engine)
    logger.debug(
        "SQLAlchemy engine created",
        extra={"context": {"dialect": _engine.dialect.name, "driver": url.drivername}},
    )
    _database_url = database_url
    return _engine


def get_sessionmaker():
    """Return a cached sessionmaker bound to the lazy engine."""
    global _SessionLocal
    engine = get_engine()
    if _SessionLocal is None:
        _SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    return _SessionLocal


def SessionLocal():
    """Return a new Session bound to the current engine. Callers close it."""
    return get_sessionmaker()()


def create_tables():
    """Create all tables in database using the lazy engine."""
    # Ensure models are imported so Base.metadata is populated
    from fincontrol.db import base  # noqa: F401

    Base.metadata.create_all(bind=get_engine())


def drop_tables():
    """Drop all tables. Used by the test suite between tests."""
    from fincontrol.db import base  # noqa: F401

    Base.metadata.drop_all(bind=get_engine())

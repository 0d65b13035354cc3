import logging
from datetime import datetime, timezone

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from fastapi import Request

from agent_tracker.config import DATABASE_URL, DEBUG

logger = logging.getLogger(__name__)

Base = declarative_base()


def utc_now() -> datetime:
    """Naive UTC datetime for TIMESTAMP (not TIMESTAMPTZ) columns."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    # SQLite ignores ON DELETE CASCADE unless this is set per connection
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def create_db_engine(url: str = DATABASE_URL) -> Engine:
    """Create an engine for the given URL with foreign keys enforced."""
    connect_args = {}
    if url.startswith("sqlite"):
        # Requests may be served on a different thread than the one that
        # opened the connection.
        connect_args["check_same_thread"] = False

    engine = create_engine(url, echo=DEBUG, connect_args=connect_args)
    if engine.dialect.name == "sqlite":
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
    return engine


def create_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


engine = create_db_engine()
SessionLocal = create_session_factory(engine)


def init_db(session_factory: sessionmaker = SessionLocal) -> int:
    """Create missing tables and seed the activity catalog.

    Returns the number of catalog activities inserted.
    """
    # Register all models on the metadata before create_all
    import agent_tracker.models  # noqa: F401
    from agent_tracker.repositories.activities import ActivityRepository

    bind = session_factory.kw["bind"]
    Base.metadata.create_all(bind=bind)

    db = session_factory()
    try:
        inserted = ActivityRepository(db).seed_defaults()
    finally:
        db.close()

    logger.info(f"Database ready ({bind.dialect.name}); {inserted} catalog activities added")
    return inserted


def get_db(request: Request):
    """Dependency for FastAPI routes to get database session.

    The session factory is taken from the application state so tests can
    run the app against their own database.
    """
    session_factory = getattr(request.app.state, "session_factory", SessionLocal)
    db: Session = session_factory()
    try:
        yield db
    finally:
        db.close()

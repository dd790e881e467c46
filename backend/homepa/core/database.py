import logging
import threading

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool
from homepa.core.config import settings

logger = logging.getLogger(__name__)

# Session factory - bound to the engine when a session is opened
# autocommit=False: Changes require explicit commit (prevents accidental commits)
# autoflush=False: Don't auto-flush before queries
SessionLocal = sessionmaker(autocommit=False, autoflush=False)

# Base class for all database models
Base = declarative_base()

# Process-wide engine, created on first use.
# Callers arriving while it is being created wait on the lock and then
# reuse the same engine instead of opening their own.
_engine: Engine | None = None
_engine_lock = threading.Lock()


def _create_engine(url: str) -> Engine:
    if url.startswith("sqlite"):
        kwargs = {"connect_args": {"check_same_thread": False}}
        # In-memory databases live as long as their single connection
        if url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool
        return create_engine(url, **kwargs)
    return create_engine(url, pool_pre_ping=True)


def init_db(engine: Engine) -> None:
    """Create tables for every model that inherits from Base."""
    # Models register themselves on Base.metadata when imported
    from homepa.models import event, memo, revoked_session, suggestion, user  # noqa: F401

    Base.metadata.create_all(bind=engine)


def get_engine() -> Engine:
    """
    Return the shared engine, creating it (and the schema) on first call.

    If creation fails nothing is cached, so the next caller tries again.
    """
    global _engine
    if _engine is not None:
        return _engine

    with _engine_lock:
        if _engine is None:
            engine = _create_engine(settings.DATABASE_URL)
            try:
                init_db(engine)
            except Exception:
                engine.dispose()
                logger.exception("Database initialisation failed")
                raise
            _engine = engine
            logger.info(f"Database engine initialised ({engine.url.get_backend_name()})")
    return _engine


def dispose_engine() -> None:
    """Drop the shared engine; the next get_engine() call builds a new one."""
    global _engine
    with _engine_lock:
        if _engine is not None:
            _engine.dispose()
            _engine = None


def get_db():
    """
    Dependency for getting database session.

    The session is automatically closed after the request completes (via finally block).
    """
    db = SessionLocal(bind=get_engine())
    try:
        yield db
    finally:
        # Always close session, even if request raises an exception
        db.close()

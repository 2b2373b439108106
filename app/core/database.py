"""Database engine and session management.

The engine (and its connection pool) is created on first use and kept for the
lifetime of the process; it is never disposed by the application. Sessions are
short-lived: one per request via get_db().
"""

from collections.abc import Generator
from functools import lru_cache

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from app.core.config import settings


def _engine_kwargs(url: str) -> dict:
    if url.startswith("sqlite"):
        return {"connect_args": {"check_same_thread": False}}
    return {
        "pool_size": settings.DB_POOL_SIZE,
        "max_overflow": settings.DB_MAX_OVERFLOW,
        "connect_args": {"connect_timeout": settings.DB_CONNECT_TIMEOUT_SEC},
    }


@lru_cache
def get_engine() -> Engine:
    """Return the process-wide engine, creating it on first call."""
    return create_engine(
        settings.DATABASE_URL,
        pool_pre_ping=True,
        echo=settings.DEBUG,
        **_engine_kwargs(settings.DATABASE_URL),
    )


@lru_cache
def get_session_factory() -> sessionmaker[Session]:
    return sessionmaker(autocommit=False, autoflush=False, bind=get_engine())


def SessionLocal() -> Session:
    """Open a new session bound to the shared engine (CLI scripts, background jobs)."""
    return get_session_factory()()


def get_db() -> Generator[Session, None, None]:
    """Dependency that yields a DB session and closes it when done."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def check_db_connected(db: Session) -> bool:
    """Run a trivial query to verify the database is reachable."""
    try:
        db.execute(text("SELECT 1"))
        return True
    except Exception:
        return False

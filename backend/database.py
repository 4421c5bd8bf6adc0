"""
Database configuration and session management
"""

from pathlib import Path

import structlog
from sqlalchemy import create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.orm import declarative_base, sessionmaker, Session
from contextlib import contextmanager
from config import settings

logger = structlog.get_logger()

# Create SQLAlchemy engine
engine = create_engine(
    settings.DATABASE_URL,
    connect_args={"check_same_thread": False} if "sqlite" in settings.DATABASE_URL else {},
    echo=settings.DEBUG,
    pool_pre_ping=True  # Verify connections before using
)

# Create SessionLocal class
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Create Base class for models
Base = declarative_base()


def _ensure_sqlite_directory(url: str) -> None:
    """Create the parent directory of a file-backed SQLite database"""
    parsed = make_url(url)
    if parsed.get_backend_name() != "sqlite":
        return
    if not parsed.database or parsed.database == ":memory:":
        return
    Path(parsed.database).parent.mkdir(parents=True, exist_ok=True)


def init_db():
    """Initialize database - create all tables"""
    try:
        _ensure_sqlite_directory(settings.DATABASE_URL)
        # Models must be imported so their tables are registered on Base
        import models  # noqa: F401
        Base.metadata.create_all(bind=engine)
        logger.info("database_initialized", url=settings.DATABASE_URL)
    except Exception as e:
        logger.error("database_init_failed", error=str(e))
        raise


def get_db() -> Session:
    """
    Get database session (dependency injection for FastAPI)

    Yields:
        Session: SQLAlchemy database session
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def get_db_context():
    """
    Get database session as context manager

    Yields:
        Session: SQLAlchemy database session
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

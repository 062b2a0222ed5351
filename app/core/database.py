"""
Database configuration and session management.
"""
import os
from typing import Any, Dict, Generator

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import QueuePool, StaticPool

from app.core.config import settings

DATABASE_URL = settings.DATABASE_URL


def _engine_options(database_url: str) -> Dict[str, Any]:
    """Pool options for the configured backend."""
    echo = os.getenv("SQL_ECHO", "false").lower() == "true"

    if database_url.startswith("sqlite"):
        options: Dict[str, Any] = {
            "connect_args": {"check_same_thread": False},
            "echo": echo,
        }
        # In-memory databases only live as long as their single connection
        if ":memory:" in database_url:
            options["poolclass"] = StaticPool
        return options

    return {
        "poolclass": QueuePool,
        "pool_size": 10,
        "max_overflow": 20,
        "pool_pre_ping": True,  # Verify connections before using
        "echo": echo,
    }


engine = create_engine(DATABASE_URL, **_engine_options(DATABASE_URL))

# Create session factory
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db() -> Generator[Session, None, None]:
    """
    Dependency that provides a database session.

    Usage in FastAPI:
    ```python
    @router.get("/endpoint")
    def endpoint(db: Session = Depends(get_db)):
        # Use db here
        pass
    ```
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db():
    """Initialize database tables."""
    from app.models import Base
    # checkfirst=True will only create tables that don't exist
    Base.metadata.create_all(bind=engine, checkfirst=True)

"""
Database configuration and session management.
Uses SQLAlchemy 2.0 patterns with synchronous sessions.
"""

from collections.abc import Generator
from contextlib import contextmanager
from typing import Any

import os

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, Session

from shared.config.settings import DATABASE_URL


def _calculate_pool_size() -> int:
    """
    Calculate pool size based on CPU cores.
    Formula: (2 * CPU cores) + 1, capped at 20 for reasonable limits.
    """
    cores = os.cpu_count() or 4
    return min(cores * 2 + 1, 20)


def build_engine(url: str = DATABASE_URL, **overrides: Any) -> Engine:
    """
    Create an engine with pooling and timeouts.

    SQLite (CLI scripts, local experiments) gets no server pool settings.
    """
    if url.startswith("sqlite"):
        options: dict[str, Any] = {"connect_args": {"check_same_thread": False}}
    else:
        options = {
            "pool_pre_ping": True,  # Verify connections before using
            "pool_size": _calculate_pool_size(),
            "max_overflow": 15,
            "pool_timeout": 30,  # Wait max 30s for connection from pool
            "pool_recycle": 1800,  # Recycle connections after 30 minutes
            "connect_args": {"connect_timeout": 10},
        }
    options.update(overrides)
    return create_engine(url, echo=False, **options)


engine = build_engine()

# Session factory
SessionLocal = sessionmaker(
    bind=engine,
    autoflush=False,
    autocommit=False,
)


def get_db() -> Generator[Session, None, None]:
    """
    FastAPI dependency for database sessions.

    Usage:
        @router.get("/members/{member_id}")
        def get_member(member_id: int, db: Session = Depends(get_db)):
            return MemberService(db).get_member(member_id)

    The session is automatically closed after the request completes.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def get_db_context() -> Generator[Session, None, None]:
    """
    Context manager for database sessions outside of FastAPI.

    Usage:
        with get_db_context() as db:
            db.scalar(select(Member).where(Member.email == email))
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def safe_commit(db: Session) -> None:
    """
    Commit with automatic rollback on failure.

    Raises the original exception after rolling back.
    """
    try:
        db.commit()
    except Exception:
        db.rollback()
        raise

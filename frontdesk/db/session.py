"""Database session management."""
from typing import Any, Dict

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from frontdesk.config.settings import settings


def engine_kwargs(database_url: str) -> Dict[str, Any]:
    """Engine options for the given backend (SQLite has no pool sizing)."""
    if database_url.startswith("sqlite"):
        return {"connect_args": {"check_same_thread": False}}
    return {
        "pool_pre_ping": True,
        "pool_size": settings.DB_POOL_SIZE,
        "max_overflow": settings.DB_POOL_OVERFLOW,
    }


def build_engine(database_url: str) -> Engine:
    return create_engine(
        database_url,
        echo=settings.DATABASE_ECHO,
        **engine_kwargs(database_url),
    )


def build_session_factory(bind: Engine) -> sessionmaker:
    # Objects stay readable after the Unit of Work commits and closes
    return sessionmaker(
        bind=bind,
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
    )


engine = build_engine(settings.DATABASE_URL)

SessionLocal = build_session_factory(engine)

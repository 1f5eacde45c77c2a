"""Database engine, sessions and schema setup."""

from frontdesk.db.session import SessionLocal, build_session_factory, engine

__all__ = ["SessionLocal", "build_session_factory", "engine"]

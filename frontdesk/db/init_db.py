# frontdesk/db/init_db.py
"""Database initialization utilities."""
from typing import Optional

from sqlalchemy.engine import Engine

from frontdesk.core.logging import get_logger
from frontdesk.db.session import engine as default_engine
from frontdesk.models import Base

logger = get_logger(__name__)


def init_db(bind: Optional[Engine] = None) -> None:
    """
    Create all tables that do not exist yet.

    Note: suitable for development and tests. Production deployments
    manage the schema with migrations.
    """
    bind = bind or default_engine
    Base.metadata.create_all(bind=bind)
    logger.info(f"Database tables ensured ({len(Base.metadata.tables)} tables)")


def drop_db(bind: Optional[Engine] = None) -> None:
    """
    Drop all database tables.

    WARNING: This will delete all data!
    """
    bind = bind or default_engine
    Base.metadata.drop_all(bind=bind)
    logger.warning("All database tables dropped")

"""
Health check endpoint.
"""

from typing import Any, Dict

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from frontdesk.api.deps import SessionFactory, get_app_settings, get_session_factory
from frontdesk.config.settings import Settings
from frontdesk.core.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(tags=["Health"])


@router.get("/health")
def health_check(
    session_factory: SessionFactory = Depends(get_session_factory),
    config: Settings = Depends(get_app_settings),
) -> Dict[str, Any]:
    """Report service and database status."""
    database = "ok"
    try:
        with session_factory() as session:
            session.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        logger.error(f"Database health check failed: {e}")
        database = "unavailable"

    return {
        "status": "healthy" if database == "ok" else "degraded",
        "service": config.APP_NAME,
        "version": config.API_VERSION,
        "environment": config.ENVIRONMENT,
        "database": database,
    }

from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from frontdesk.api.v1.router import router as api_v1_router
from frontdesk.config.logging import setup_logging
from frontdesk.config.settings import settings
from frontdesk.core.logging import configure_structured_logging, get_logger
from frontdesk.core.middleware import register_exception_handlers, register_middlewares
from frontdesk.db.init_db import init_db

logger = get_logger(__name__)


def create_app() -> FastAPI:
    """
    Application factory for the FastAPI app.

    - Configures title, version, debug mode from Settings.
    - Configures stdlib logging and the structlog audit logger.
    - Registers CORS, core middleware, and exception handlers.
    - Includes the versioned API router under /api/v1.
    """
    setup_logging()
    configure_structured_logging()

    app = FastAPI(
        title=settings.APP_NAME,
        debug=settings.DEBUG,
        version=settings.API_VERSION,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )

    origins = settings.get_cors_origins() or ["*"]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=origins != ["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Request ID and timing
    register_middlewares(app)
    register_exception_handlers(app)

    app.include_router(api_v1_router, prefix=settings.API_V1_STR)

    @app.on_event("startup")
    async def on_startup() -> None:
        if settings.AUTO_CREATE_TABLES:
            init_db()
        logger.info(f"{settings.APP_NAME} started", extra={"environment": settings.ENVIRONMENT})

    return app


app = create_app()

"""
FastAPI application entry point.

Initializes FastAPI app, registers routers, exception handlers and middleware,
and configures lifespan.

Dependencies: fastapi, tenx_cards.api, tenx_cards.observability, tenx_cards.configs
System role: Application initialization and configuration
"""

from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from tenx_cards.api import api_router
from tenx_cards.api.errors import register_exception_handlers
from tenx_cards.boundary.db import get_async_engine
from tenx_cards.configs import get_settings
from tenx_cards.observability.logger import configure_logging
from tenx_cards.observability.middleware import (
    CorrelationMiddleware,
    RequestLoggingMiddleware,
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan context manager.

    Configures logging on startup and disposes the database engine on shutdown.
    """
    settings = get_settings()
    configure_logging(settings.log_level)
    logger.info(
        "Application startup: logging configured",
        extra={
            "environment": settings.environment,
            "mock_ai": settings.generation.use_mock_ai,
        },
    )

    yield

    logger.info("Application shutdown")
    await get_async_engine().dispose()


def create_app() -> FastAPI:
    """
    Create and configure FastAPI application.

    Returns:
        FastAPI: Configured application instance
    """
    settings = get_settings()

    app = FastAPI(
        title="10x-cards API",
        description="AI-assisted flashcard generation with draft, published and rejected decks",
        version="0.1.0",
        debug=settings.debug,
        lifespan=lifespan,
    )

    register_exception_handlers(app)

    # Add observability middleware (added last = first to execute)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(CorrelationMiddleware)

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Correlation-ID"],
    )

    # Register API routes
    app.include_router(api_router, prefix="/api/v1")

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "tenx_cards.main:app",
        host="localhost",
        port=8000,
        reload=True,
    )

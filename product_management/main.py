"""Product management API main application module.

This module initializes the FastAPI application and configures
core middleware, routers, exception handlers and startup/shutdown events.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

import structlog
from fastapi import FastAPI

from product_management.api.errors import register_exception_handlers
from product_management.api.health import router as health_router
from product_management.api.middleware import setup_middleware
from product_management.api.products import router as products_router
from product_management.infrastructure.config import settings
from product_management.infrastructure.database import create_tables, engine
from product_management.infrastructure.logging import configure_logging

configure_logging()

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Handle application startup and shutdown events.

    Args:
        app: The FastAPI application instance.

    Yields:
        None after startup, cleanup happens after yield.
    """
    logger.info(
        "Starting product management API",
        version=settings.api_version,
        debug=settings.debug,
    )

    if settings.create_tables_on_startup:
        await create_tables()
        logger.info("Database tables ensured")

    yield

    logger.info("Shutting down product management API")
    await engine.dispose()


app = FastAPI(
    title="Product Management API",
    description="Admin API for the product catalog and its trash",
    version=settings.api_version,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

# Setup custom middleware (request ID, error handling)
setup_middleware(app)

# Map domain and request errors to JSON envelopes
register_exception_handlers(app)

# Include routers
app.include_router(health_router, tags=["Health"])
app.include_router(products_router)

"""Entry point for the FastAPI application.

This module constructs the FastAPI app, includes all routers and
sets up startup and shutdown events. Run it with
``uvicorn receipt_points.api.main:app`` or ``python -m receipt_points``.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError

from receipt_points.api.endpoints.health import router as health_router
from receipt_points.api.error_handlers import generic_exception_handler, validation_exception_handler
from receipt_points.api.routes.receipts import router as receipts_router
from receipt_points.core.config import settings
from receipt_points.core.logging_config import configure_logging
from receipt_points.core.observability import init_sentry, sentry_set_tags

# Configure logging
configure_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application lifecycle."""
    # Startup
    logger.info("Starting %s on http://%s:%s", settings.PROJECT_NAME, settings.HOST, settings.PORT)
    if init_sentry("api"):
        logger.info("Sentry SDK initialized (api)")
    yield
    # Shutdown
    logger.info("Shutting down...")


# Create FastAPI app
app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.VERSION,
    lifespan=lifespan,
)


# Middleware to enrich Sentry scope with lightweight request info
@app.middleware("http")
async def sentry_context_middleware(request: Request, call_next):
    sentry_set_tags({"path": request.url.path, "method": request.method})
    return await call_next(request)


# Register custom exception handlers
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(Exception, generic_exception_handler)

# Include routers
app.include_router(receipts_router)
app.include_router(health_router)

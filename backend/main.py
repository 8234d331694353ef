"""
Inspector FastAPI application.

Entry point for the API server.
"""

from __future__ import annotations

import asyncio
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from backend import db
from backend.config import settings
from backend.middleware.errors import register_error_handlers
from backend.middleware.rate_limit import rate_limiter
from backend.routes import components as component_routes
from backend.routes import jsx as jsx_routes
from backend.routes import pages as pages_routes

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


# Background task for cleanup
async def cleanup_task():
    """
    Background task to drop expired rate limit entries.

    Runs every 60 seconds.
    """
    while True:
        try:
            rate_limiter.cleanup_old_entries(max_age_minutes=settings.API_RATE_LIMIT_WINDOW_MINUTES * 2)
        except Exception:
            logger.exception("Error in cleanup task")

        await asyncio.sleep(60)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for FastAPI application.

    Handles startup and shutdown logic:
    - Initialize database pool (only when DATABASE_URL is set)
    - Start background cleanup task
    - Close database pool on shutdown
    """
    if settings.DATABASE_URL:
        await db.init_pool()
    else:
        logger.info("DATABASE_URL not set, using in-memory component store")

    cleanup_task_handle = asyncio.create_task(cleanup_task())
    logger.info("Inspector backend started (%s)", settings.ENVIRONMENT)

    yield

    cleanup_task_handle.cancel()
    try:
        await cleanup_task_handle
    except asyncio.CancelledError:
        logger.info("Background cleanup task stopped")

    await db.close_pool()


app = FastAPI(
    title="Inspector",
    docs_url=None if settings.ENVIRONMENT == "production" else "/docs",
    redoc_url=None,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)

# Register routes
app.include_router(component_routes.router)
app.include_router(jsx_routes.router)
app.include_router(pages_routes.router)


@app.get("/")
async def root():
    """Service banner."""
    return {"status": "ok", "message": "Inspector backend is running"}


@app.get("/health")
async def health():
    """Health check endpoint for uptime monitoring."""
    return {"status": "ok"}

"""
Main application entry point.

This module initializes and configures the FastAPI application.
It handles startup/shutdown events and wires everything together.
"""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from config.settings import settings
from fastapi import FastAPI

from src.presentation import login_routes, routes
from src.presentation.dependencies import build_application_context
from src.presentation.error_handlers import register_exception_handlers

# Configure logging
logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """
    Application lifespan manager.

    Handles startup and shutdown events:
    - Startup: Build the application context, open the pool, create the schema
    - Shutdown: Close database connections gracefully
    """
    logger.info(f"Starting {settings.app_name}...")

    context = build_application_context(settings)
    await context.database.connect()
    logger.info("Database connection pool initialized")

    await context.database.init_schema()
    logger.info("Database schema initialized")

    app.state.context = context
    logger.info("Application startup complete")

    yield

    logger.info(f"Shutting down {settings.app_name}...")
    await context.database.disconnect()
    logger.info("Application shutdown complete")


app = FastAPI(
    title="Newsletter API",
    description="""
    Newsletter subscription and publishing API.

    ## Features
    - Subscription by form with an emailed confirmation link
    - Subscription confirmation with a one-time token
    - Newsletter publishing to confirmed subscribers, guarded by Basic Auth
    - Operator login page

    ## Technical Stack
    - FastAPI for the HTTP layer
    - PostgreSQL (asyncpg) for persistence
    - SMTP (aiosmtplib) for email delivery
    - Argon2 for password hashing
    """,
    version=settings.app_version,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

register_exception_handlers(app)

app.include_router(routes.router)
app.include_router(login_routes.router)


@app.get("/", tags=["root"])
async def root() -> dict[str, str]:
    """Root endpoint with API information."""
    return {
        "service": settings.app_name,
        "version": settings.app_version,
        "status": "running",
        "docs": "/docs",
        "health": "/health_check",
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "src.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.api_reload,
        log_level=settings.log_level.lower(),
    )

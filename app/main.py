"""FastAPI application entry point."""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

import structlog
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.api.health import router as health_router
from app.api.links import router as links_router
from app.api.redirect import router as redirect_router
from app.core.config import get_settings
from app.core.database import close_db, init_db
from app.core.exceptions import LinkRegistryError
from app.core.observability import (
    RequestIDMiddleware,
    RequestLoggingMiddleware,
    setup_observability,
)

settings = get_settings()

# Get logger (will be configured by setup_observability)
logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup and shutdown events."""
    logger.info("Starting Shortlink API", version=settings.app_version)
    if settings.debug:
        # Local runs skip Alembic
        await init_db()
        logger.info("Database tables created")
    yield
    logger.info("Shutting down Shortlink API")
    await close_db()
    logger.info("Database connections closed")


app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="URL shortener with click counting",
    lifespan=lifespan,
)


@app.exception_handler(LinkRegistryError)
async def registry_error_handler(request: Request, exc: LinkRegistryError) -> JSONResponse:
    """Render registry errors as {"error": message} with their HTTP status."""
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


# Set up observability (logging, tracing, metrics, Sentry)
setup_observability(app)

# Last added runs first, so the request ID is bound before request logging
app.add_middleware(RequestLoggingMiddleware)
app.add_middleware(RequestIDMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "DELETE", "OPTIONS"],
    allow_headers=["*"],
    expose_headers=["X-Request-ID"],
)

app.include_router(links_router)
app.include_router(health_router)

# Redirect router must be last: /{code} would otherwise shadow the routes above
app.include_router(redirect_router)


@app.get("/", include_in_schema=False)
async def root() -> dict[str, str]:
    """Root endpoint."""
    return {"message": "Welcome to Shortlink API", "version": settings.app_version}

"""Main FastAPI application entry point."""

from contextlib import asynccontextmanager
from typing import Annotated

from fastapi import Depends, FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.exceptions import HTTPException as StarletteHTTPException

from infrastructure.database.dependencies import (
    close_database_connections,
    get_read_session,
)
from infrastructure.logging import configure_logging
from infrastructure.observability import DefaultConnectionProbe, DefaultStartupProbe
from infrastructure.settings import get_settings
from infrastructure.version import __version__
from pricing.presentation import routes as pricing_routes


@asynccontextmanager
async def ratebook_lifespan(app: FastAPI):
    """Application lifespan context.

    Manages:
    - Logging configuration
    - Read engine lifecycle (created lazily, disposed on shutdown)
    """
    settings = get_settings()
    configure_logging(debug=settings.debug, app_name=settings.app_name)
    probe = DefaultStartupProbe()
    probe.application_started(app_name=settings.app_name, version=__version__)

    yield

    await close_database_connections()
    probe.application_stopped(app_name=settings.app_name)


app = FastAPI(
    title="Ratebook API",
    description="Temporal, scoped rate and price resolution",
    version=__version__,
    lifespan=ratebook_lifespan,
)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Render malformed request bodies as 400 {error}."""
    errors = exc.errors()
    if errors:
        first = errors[0]
        location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = f"Invalid request: {location} {first.get('msg', '')}".strip()
    else:
        message = "Invalid request"
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": message},
    )


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """Render HTTP errors raised by dependencies as {error}."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


# Include Pricing bounded context routes
app.include_router(pricing_routes.router)


@app.get("/health")
def health():
    """Basic health check endpoint."""
    return {"status": "ok"}


@app.get("/health/db")
async def health_db(
    session: Annotated[AsyncSession, Depends(get_read_session)],
) -> dict:
    """Check database connection health.

    Returns the connection status.
    """
    try:
        await session.execute(text("SELECT 1"))
        return {"status": "ok", "connected": True}
    except (SQLAlchemyError, OSError) as e:
        DefaultConnectionProbe().health_check_failed(e)
        return {
            "status": "error",
            "connected": False,
            "error": "Database is unreachable",
        }

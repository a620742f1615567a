"""FastAPI application entry point for the survey workspace service.

This module initializes the FastAPI application, sets up logging,
registers routers, and translates service errors into HTTP responses.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError, NoResultFound

from app.config import get_settings
from app.logging_config import setup_logging, get_logger
from app.routes import health, surveys, teams
from app.services.errors import ResourceNotFoundError
from app.services.telemetry import shutdown_telemetry

# Initialize logger (will be configured during startup)
logger = get_logger(__name__)

SERVICE_NAME = "Survey Workspace Service"
SERVICE_VERSION = "1.0.0"


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager.

    Configures logging on startup; flushes queued telemetry on shutdown.

    Args:
        app: FastAPI application instance

    Yields:
        None
    """
    settings = get_settings()
    setup_logging()

    logger.info(
        f"{SERVICE_NAME} starting - "
        f"Environment: {settings.environment}, "
        f"Log Level: {settings.log_level}, "
        f"Database: {settings.database_url.split('@')[-1] if '@' in settings.database_url else 'configured'}, "
        f"Telemetry: {'enabled' if settings.telemetry_enabled else 'disabled'}"
    )

    yield

    shutdown_telemetry()
    logger.info(f"{SERVICE_NAME} shutting down")


app = FastAPI(
    title=SERVICE_NAME,
    description="Team provisioning and survey lifecycle actions",
    version=SERVICE_VERSION,
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_settings().get_allowed_origins_list(),
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/")
async def root() -> dict:
    """Root endpoint with basic API information.

    Returns:
        dict: API information and status
    """
    settings = get_settings()
    return {
        "service": SERVICE_NAME,
        "version": SERVICE_VERSION,
        "environment": settings.environment,
        "status": "operational"
    }


app.include_router(health.router, tags=["Health"])
app.include_router(teams.router, tags=["Teams"])
app.include_router(surveys.router, tags=["Surveys"])


@app.exception_handler(ResourceNotFoundError)
async def resource_not_found_handler(request: Request, exc: ResourceNotFoundError) -> JSONResponse:
    """Translate a missing resource into 404."""
    return JSONResponse(
        status_code=404,
        content={"error": "Not found", "message": str(exc)}
    )


@app.exception_handler(NoResultFound)
async def no_result_handler(request: Request, exc: NoResultFound) -> JSONResponse:
    """Translate a failed single-row lookup into 404."""
    return JSONResponse(
        status_code=404,
        content={"error": "Not found", "message": "The requested record does not exist."}
    )


@app.exception_handler(IntegrityError)
async def integrity_error_handler(request: Request, exc: IntegrityError) -> JSONResponse:
    """Translate a constraint violation into 409."""
    logger.warning(f"Constraint violation for {request.method} {request.url}: {exc.orig}")
    return JSONResponse(
        status_code=409,
        content={"error": "Conflict", "message": "The request violates a data constraint."}
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Global exception handler for unhandled exceptions.

    Logs all unhandled exceptions and returns a generic error response
    to prevent leaking sensitive information.

    Args:
        request: FastAPI request object
        exc: Exception that was raised

    Returns:
        JSONResponse: Generic error response
    """
    logger.error(
        f"Unhandled exception for {request.method} {request.url}: {exc}",
        exc_info=True
    )

    return JSONResponse(
        status_code=500,
        content={
            "error": "Internal server error",
            "message": "An unexpected error occurred. Please try again later."
        }
    )

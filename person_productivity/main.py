"""FastAPI main application with app factory and route configuration."""

import logging
import time
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config import Settings
from .deps import get_settings
from .errors import DomainError, NotFoundError, OwnershipError, ValidationError
from .routes import persons, tasks
from .schemas import HealthResponse
from .services.registry import Services, get_services, initialize_services
from .utils.logging import setup_logging

logger = logging.getLogger(__name__)

APP_VERSION = "1.0.0"

# Domain error kind -> HTTP status
ERROR_STATUS_CODES = (
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (OwnershipError, status.HTTP_403_FORBIDDEN),
)


def status_code_for(exc: DomainError) -> int:
    for error_type, status_code in ERROR_STATUS_CODES:
        if isinstance(exc, error_type):
            return status_code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def describe_validation_error(error: dict) -> str:
    """One readable line for a request validation error."""
    field = ".".join(str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path"))
    if error.get("type") == "enum":
        expected = error.get("ctx", {}).get("expected", "")
        return f"Invalid value '{error.get('input')}' for {field}. Allowed values are: {expected}"
    return f"{field}: {error.get('msg')}"


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager for startup and shutdown events.

    Args:
        app: FastAPI application instance
    """
    # Startup
    logger.info("Starting up Person Productivity application")

    try:
        settings: Settings = app.state.settings

        setup_logging(settings)
        logger.info("Logging configured")

        initialize_services(app.state.services)
        logger.info("Application startup completed successfully")

    except Exception as e:
        logger.error(f"Error during application startup: {str(e)}")
        raise

    yield

    # Shutdown
    logger.info("Shutting down Person Productivity application")


def create_app(settings: Optional[Settings] = None, services: Optional[Services] = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Settings to use instead of the environment-loaded ones
        services: Pre-built services to install at startup instead of fresh ones

    Returns:
        Configured FastAPI application instance
    """
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="People and the tasks they own: CRUD, filtering, sorting and pagination",
        version=APP_VERSION,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.services = services
    app.dependency_overrides[get_settings] = lambda: settings

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        """Log all HTTP requests with their duration."""
        start_time = time.time()
        logger.info(f"Request: {request.method} {request.url}")

        response = await call_next(request)

        process_time = time.time() - start_time
        logger.info(
            f"Response: {response.status_code} for {request.method} {request.url} in {process_time:.3f}s"
        )
        return response

    # Custom exception handlers
    @app.exception_handler(DomainError)
    async def domain_exception_handler(request: Request, exc: DomainError):
        """Translate service errors onto HTTP status codes."""
        status_code = status_code_for(exc)
        logger.warning(f"HTTP {status_code}: {exc.message} for {request.method} {request.url}")

        content = {
            "error": exc.message,
            "status_code": status_code,
            "path": str(request.url),
        }
        if isinstance(exc, ValidationError):
            content["field"] = exc.field
        return JSONResponse(status_code=status_code, content=content)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        """Handle HTTP exceptions with proper logging."""
        logger.warning(f"HTTP {exc.status_code}: {exc.detail} for {request.method} {request.url}")

        return JSONResponse(
            status_code=exc.status_code,
            content={
                "error": exc.detail,
                "status_code": exc.status_code,
                "path": str(request.url),
            },
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        """Answer malformed requests with 400 and one line per offending field."""
        details = [describe_validation_error(error) for error in exc.errors()]
        logger.warning(f"Validation error for {request.method} {request.url}: {details}")

        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={
                "error": details[0] if details else "Validation error",
                "details": details,
                "status_code": status.HTTP_400_BAD_REQUEST,
                "path": str(request.url),
            },
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        """Handle unexpected exceptions, including record store failures."""
        logger.error(f"Unexpected error for {request.method} {request.url}: {str(exc)}", exc_info=True)

        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "error": "Internal server error",
                "status_code": 500,
                "path": str(request.url),
            },
        )

    @app.get("/healthz", tags=["health"], response_model=HealthResponse)
    async def health_check() -> HealthResponse:
        """Health check endpoint for monitoring and load balancers."""
        services = get_services()
        health = HealthResponse(
            version=APP_VERSION,
            services={
                "person_service": "initialized" if services else "not_initialized",
                "task_service": "initialized" if services else "not_initialized",
            },
        )
        if not services:
            health.status = "degraded"
        return health

    @app.get("/", tags=["root"])
    async def root():
        """Root endpoint with API information."""
        return {
            "name": settings.app_name,
            "version": APP_VERSION,
            "docs_url": "/docs",
            "health_check": "/healthz",
            "endpoints": {
                "persons": "/persons",
                "tasks": "/tasks",
            },
        }

    app.include_router(persons.router)
    app.include_router(tasks.router)

    logger.info("FastAPI application created and configured")

    return app


# Create the app instance
app = create_app()

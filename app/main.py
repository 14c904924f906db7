"""Taskboard API - Main Application Module.

This module initializes the FastAPI application with proper configuration,
middleware, routing, and lifecycle management for the project/task service.
"""

import logging
import sys
import uuid
from contextlib import asynccontextmanager
from pathlib import Path
from urllib.parse import quote

# Add the project root to Python path if running directly
if __name__ == "__main__":
    project_root = Path(__file__).parent.parent
    sys.path.insert(0, str(project_root))

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, RedirectResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.config import ConfigValidator, settings
from app.core.logging import setup_logging
from app.database import Database
from app.schemas.base import ErrorResponse
from models.base import utcnow

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application lifecycle events."""
    logger.info("Starting %s (%s)", settings.app_name, settings.environment.value)
    ConfigValidator.validate_required_settings()

    database = Database.from_settings(settings)
    await database.connect()

    # Development/testing: create tables; production: alembic upgrade head
    if settings.is_development or settings.is_testing:
        await database.create_all()
        logger.info("Database tables created/verified")

    app.state.database = database

    yield

    logger.info("Shutting down %s", settings.app_name)
    await database.dispose()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    setup_logging(settings)

    app = FastAPI(
        title=settings.app_name,
        description="Multi-tenant project and task management",
        version=settings.version,
        lifespan=lifespan,
        docs_url="/docs" if not settings.is_production else None,
        redoc_url="/redoc" if not settings.is_production else None,
    )

    # Add middleware
    setup_middleware(app)

    # Add exception handlers
    setup_exception_handlers(app)

    # Include routers
    setup_routers(app)

    return app


def _matches(path: str, prefixes: list[str]) -> bool:
    return any(path == prefix or path.startswith(prefix.rstrip("/") + "/") for prefix in prefixes)


def setup_middleware(app: FastAPI):
    """Configure application middleware."""

    # Route guard for page navigation
    @app.middleware("http")
    async def route_guard(request: Request, call_next):
        path = request.url.path
        has_credential = bool(request.cookies.get(settings.auth_cookie_name))

        if not has_credential and _matches(path, settings.protected_paths_list):
            return RedirectResponse(
                url=f"{settings.login_path}?callbackUrl={quote(path, safe='')}",
                status_code=307,
            )
        if has_credential and _matches(path, settings.auth_paths_list):
            return RedirectResponse(url=settings.dashboard_path, status_code=307)

        return await call_next(request)

    # Request ID middleware
    @app.middleware("http")
    async def add_request_id(request: Request, call_next):
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        request.state.request_id = request_id
        response = await call_next(request)
        response.headers["X-Request-ID"] = request_id
        return response

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )


def _error_response(
    request: Request,
    status_code: int,
    message: str,
    error_code: str,
    details=None,
) -> JSONResponse:
    body = ErrorResponse(
        error=message,
        error_code=error_code,
        details=details,
        timestamp=utcnow(),
        request_id=getattr(request.state, "request_id", None),
    )
    return JSONResponse(status_code=status_code, content=body.model_dump(mode="json"))


def _validation_message(error: dict) -> str:
    """Message of one pydantic error, without the "Value error, " prefix."""
    ctx = error.get("ctx") or {}
    if error.get("type") == "value_error" and "error" in ctx:
        return str(ctx["error"])
    return str(error.get("msg", "Validation error"))


def setup_exception_handlers(app: FastAPI):
    """Configure global exception handlers."""

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        # Handle custom exceptions that have structured detail
        if isinstance(exc.detail, dict) and "message" in exc.detail:
            message = exc.detail["message"]
            error_code = exc.detail.get("error_code", "HTTP_ERROR")
            details = exc.detail.get("details")
        else:
            message = str(exc.detail) if exc.detail else "An error occurred"
            error_code = "HTTP_ERROR"
            details = None

        return _error_response(request, exc.status_code, message, error_code, details)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        message = _validation_message(errors[0]) if errors else "Validation error"
        details = [
            {"loc": list(error.get("loc", [])), "msg": _validation_message(error)}
            for error in errors
        ]
        return _error_response(request, 400, message, "VALIDATION_ERROR", details)

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception(
            "Unhandled error on %s %s (request_id=%s)",
            request.method,
            request.url.path,
            getattr(request.state, "request_id", None),
        )
        return _error_response(request, 500, "An error occurred", "INTERNAL_ERROR")


def setup_routers(app: FastAPI):
    """Configure application routers."""
    # Import routers
    from app.domains.activity.controller import router as activity_router
    from app.domains.project.controller import router as project_router
    from app.domains.stats.controller import router as stats_router
    from app.domains.task.controller import router as task_router
    from app.domains.user.controller import router as user_router

    @app.get("/health")
    async def health_check(request: Request):
        """Health check endpoint reporting database reachability."""
        database: Database | None = getattr(request.app.state, "database", None)
        if database is None:
            db_status = "not_configured"
        else:
            db_status = "healthy" if await database.ping() else "unhealthy"

        body = {
            "status": "healthy" if db_status == "healthy" else "degraded",
            "version": settings.version,
            "environment": settings.environment.value,
            "timestamp": utcnow().isoformat(),
            "services": {"database": db_status},
        }
        return JSONResponse(status_code=200 if db_status == "healthy" else 503, content=body)

    @app.get("/")
    async def root():
        """Root endpoint with API information."""
        return {
            "name": settings.app_name,
            "version": settings.version,
            "description": "Multi-tenant project and task management",
            "docs_url": "/docs" if not settings.is_production else None,
            "features": ConfigValidator.get_feature_status(),
        }

    # Include domain routers
    app.include_router(user_router)
    app.include_router(project_router)
    app.include_router(task_router)
    app.include_router(stats_router)
    app.include_router(activity_router)


# Create the application instance
app = create_app()


def main():
    """Entry point for running the application directly."""
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.is_development,
        log_level=settings.log_level.value.lower(),
    )


if __name__ == "__main__":
    main()

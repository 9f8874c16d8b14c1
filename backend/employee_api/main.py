"""
Employee API — FastAPI Application Factory
============================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   Called by uvicorn to start the server (uvicorn employee_api.main:app).

Application Architecture:
    ┌──────────────────────────────────────────────────────────┐
    │                      FastAPI App                         │
    │                                                          │
    │  Middleware:  Request ID → Logging → GZip → CORS         │
    │                                                          │
    │  Routes:      /api/v1/auth/login                         │
    │               /api/v1/employees[/{id}]   (bearer token)  │
    │               /health                                    │
    │                                                          │
    │  Route → Dispatcher → Logging → Validation → UnitOfWork  │
    │                                   → Handler → Repository │
    │                                                          │
    │  Exception Handlers (problem+json):                      │
    │    request schema → 400   Unauthorized → 401             │
    │    IntegrityError → 409   EmployeeApiError → 500         │
    │    anything else  → 500                                  │
    └──────────────────────────────────────────────────────────┘

Lifecycle:
    Startup:
    1. Initialize logging
    2. Validate configuration (logged, not fatal: /health stays reachable)
    3. Verify every message type has a handler (fatal)
    4. Create tables, then seed when SEED_DATABASE is true

    Shutdown:
    1. Dispose database engine (close all connections)
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Dict

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from sqlalchemy.exc import IntegrityError

from employee_api import __version__
from employee_api.config import settings
from employee_api.database import async_session_factory, create_tables, dispose_engine
from employee_api.dependencies import handler_registry
from employee_api.exceptions import EmployeeApiError, UnauthorizedError
from employee_api.handlers import MESSAGE_TYPES
from employee_api.middleware import (
    RequestIDLogFilter,
    RequestIDMiddleware,
    RequestLoggingMiddleware,
    request_id_var,
)
from employee_api.problem_details import problem_response
from employee_api.result import ErrorDefinition, ErrorResult
from employee_api.routes import auth, employees, health
from employee_api.services.seeder import seed_database

logger = logging.getLogger(__name__)

INTERNAL_ERROR_DETAIL = "An unexpected error occurred. Please try again or contact support."


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s [%(request_id)s] %(message)s

    The request id comes from RequestIDLogFilter; records emitted outside a
    request carry "-".
    """
    handler = logging.StreamHandler(sys.stdout)  # Docker captures stdout
    handler.addFilter(RequestIDLogFilter())

    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s [%(request_id)s] %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[handler],
        force=True,  # Override any existing logging config
    )

    # Reduce noise from third-party libraries
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    # ── Startup ───────────────────────────────────────────────────────────
    setup_logging()
    logger.info("=" * 60)
    logger.info("Employee API %s starting up...", __version__)

    try:
        settings.validate_required_for_production()
    except ValueError as e:
        logger.error("Configuration error: %s", str(e))
        logger.error("Login will fail until the configuration is fixed.")

    handler_registry.verify(MESSAGE_TYPES)

    await create_tables()
    if settings.seed_database:
        async with async_session_factory() as session:
            written = await seed_database(session)
        logger.info("Seeding complete: %d rows written", written)

    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)
    logger.info("=" * 60)

    yield  # Application runs here

    # ── Shutdown ──────────────────────────────────────────────────────────
    logger.info("Employee API shutting down...")
    await dispose_engine()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _request_validation_errors(exc: RequestValidationError) -> Dict[str, str]:
    """Maps pydantic error locations to request field names."""
    errors: Dict[str, str] = {}
    for error in exc.errors():
        location = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path")]
        field = ".".join(location) or "body"
        errors.setdefault(field, error.get("msg", "Invalid value"))
    return errors


def _internal_error():
    return problem_response(
        status=500,
        title="Internal Server Error",
        detail=INTERNAL_ERROR_DETAIL,
        error_code=ErrorDefinition.ERROR.value,
        error_definition=ErrorDefinition.ERROR.value,
    )


def register_exception_handlers(app: FastAPI) -> None:
    """
    Register global exception handlers for consistent error responses.

    Handler hierarchy:
        RequestValidationError  → 400 (body/query/path failed to parse)
        UnauthorizedError       → 401 (bearer dependency)
        IntegrityError          → 409 (unique/foreign key violated at commit)
        EmployeeApiError (base) → 500 (configuration, registration, database)
        Exception (fallback)    → 500 (unexpected errors)

    Responses never include stack traces or SQL; details are logged.
    """

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        errors = _request_validation_errors(exc)
        error = ErrorResult.validation("Request", errors)
        return problem_response(
            status=400,
            title="Validation Error",
            detail=error.description,
            error_code=error.code,
            error_definition=error.definition.value,
            errors=errors,
        )

    @app.exception_handler(UnauthorizedError)
    async def handle_unauthorized(request: Request, exc: UnauthorizedError):
        return problem_response(
            status=401,
            title="Unauthorized",
            detail=exc.message,
            error_code=ErrorDefinition.UNAUTHORIZED.value,
            error_definition=ErrorDefinition.UNAUTHORIZED.value,
            headers={"WWW-Authenticate": "Bearer"},
        )

    @app.exception_handler(IntegrityError)
    async def handle_integrity_error(request: Request, exc: IntegrityError):
        rid = request_id_var.get()
        logger.warning("[%s] Constraint violation: %s", rid, exc.orig)
        return problem_response(
            status=409,
            title="Data Conflict",
            detail="The change conflicts with existing data.",
            error_code=ErrorDefinition.CONFLICT.value,
            error_definition=ErrorDefinition.CONFLICT.value,
        )

    @app.exception_handler(EmployeeApiError)
    async def handle_application_error(request: Request, exc: EmployeeApiError):
        rid = request_id_var.get()
        logger.error(
            "[%s] %s: %s | Context: %s", rid, type(exc).__name__, exc.message, exc.context
        )
        return _internal_error()

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        rid = request_id_var.get()
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return _internal_error()


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app() -> FastAPI:
    app = FastAPI(
        title="Employee API",
        description=(
            "Employee directory with supervisor hierarchies. Authenticate with "
            "POST /api/v1/auth/login and send the token as a Bearer header."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # ── Register Middleware ───────────────────────────────────────────────
    # Middleware executes in REVERSE order of addition:
    # RequestID → Logging → GZip → CORS → route
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID", "Location"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(auth.router)
    app.include_router(employees.router)
    app.include_router(health.router)

    return app


# ── Application Instance ─────────────────────────────────────────────────
app = create_app()

"""
FixNexus Backend: FastAPI Application Factory
===============================================

What:  Creates and configures the FastAPI application instance.
How:   create_app() registers middleware, exception handlers and routers;
       the lifespan opens and closes the MongoDB client.
Who:   uvicorn (uvicorn fixnexus.main:app) or `python -m fixnexus.main`.

Application Architecture:
    ┌───────────────────────────────────────────────────────────┐
    │                       FastAPI App                         │
    │                                                           │
    │  Middleware: CORS → Request ID → Logging → GZip           │
    │                                                           │
    │  Routes:                                                  │
    │    auth.py             POST /jwt, GET /logout             │
    │    services.py         /services, /home-services, ...     │
    │    booked_services.py  /booked-services, /services-to-do  │
    │    health.py           GET /, GET /health                 │
    │                                                           │
    │  Exception Handlers:                                      │
    │    Validation→400  Unauthorized→401  Forbidden→403        │
    │    Database→500    anything else→500                      │
    └───────────────────────────────────────────────────────────┘

Lifecycle:
    Startup:  logging → config validation → MongoDB client + ping
    Shutdown: close MongoDB client
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from fixnexus import __version__
from fixnexus.config import settings
from fixnexus.database import MongoDatabase
from fixnexus.exceptions import (
    DatabaseError,
    FixNexusError,
    ForbiddenError,
    UnauthorizedError,
    ValidationError,
)
from fixnexus.middleware.logging import RequestLoggingMiddleware
from fixnexus.middleware.request_id import RequestIDMiddleware, request_id_var
from fixnexus.routes import auth, booked_services, health, services

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure the root logger once, at startup.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    Level comes from LOG_LEVEL; chatty driver/server loggers are capped at WARNING.
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("pymongo").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    setup_logging()
    logger.info("FixNexus Backend starting up (NODE_ENV=%s)...", settings.node_env)

    try:
        settings.validate_required_for_production()
    except ValueError as e:
        # Keep serving; /health reports the outage
        logger.error("Configuration error: %s", str(e))

    database = MongoDatabase.from_settings()
    app.state.database = database
    await database.connect()

    logger.info("Server running on port %d", settings.port)

    yield

    logger.info("FixNexus Backend shutting down...")
    await database.close()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _error_response(status_code: int, error: str, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "error": error,
            "message": message,
            "request_id": request_id_var.get(""),
        },
    )


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map application exceptions to HTTP responses.

    Handler hierarchy:
        ValidationError     → 400 Bad Request
        UnauthorizedError   → 401 Unauthorized
        ForbiddenError      → 403 Forbidden
        DatabaseError       → 500 (generic message; details logged)
        FixNexusError       → 500 (catch-all for custom errors)
        Exception           → 500 (stack trace logged, never returned)
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        logger.warning("[%s] Validation error: %s", request_id_var.get(""), exc.message)
        return _error_response(400, "validation_error", exc.message)

    @app.exception_handler(UnauthorizedError)
    async def handle_unauthorized(request: Request, exc: UnauthorizedError):
        return _error_response(401, "unauthorized", exc.message)

    @app.exception_handler(ForbiddenError)
    async def handle_forbidden(request: Request, exc: ForbiddenError):
        logger.warning("[%s] Forbidden: %s | Context: %s",
                       request_id_var.get(""), request.url.path, exc.context)
        return _error_response(403, "forbidden", exc.message)

    @app.exception_handler(DatabaseError)
    async def handle_database_error(request: Request, exc: DatabaseError):
        logger.error("[%s] Database error: %s | Context: %s",
                     request_id_var.get(""), exc.message, exc.context)
        return _error_response(
            500, "server_error", "An internal error occurred. Please try again later."
        )

    @app.exception_handler(FixNexusError)
    async def handle_app_error(request: Request, exc: FixNexusError):
        logger.error("[%s] Unhandled application error: %s", request_id_var.get(""), exc.message)
        return _error_response(500, "server_error", exc.message)

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        logger.error("[%s] Unexpected error: %s", request_id_var.get(""), str(exc), exc_info=True)
        return _error_response(
            500,
            "internal_server_error",
            "An unexpected error occurred. Please try again or contact support.",
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app() -> FastAPI:
    app = FastAPI(
        title="FixNexus API",
        description="Repair-service listings and bookings with cookie-based JWT auth.",
        version=__version__,
        lifespan=lifespan,
    )

    # Middleware executes in REVERSE order of addition: CORS ends up outermost
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )

    register_exception_handlers(app)

    app.include_router(health.router)
    app.include_router(auth.router)
    app.include_router(services.router)
    app.include_router(booked_services.router)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("fixnexus.main:app", host=settings.host, port=settings.port)

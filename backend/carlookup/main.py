"""
CarLookup Backend: FastAPI Application Factory
===============================================

What:  Creates and configures the FastAPI application instance.
Why:   Centralizes app configuration, middleware registration, route mounting,
       and lifecycle management in one place.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   Called by uvicorn to start the server (uvicorn carlookup.main:app).
When:  Once at server startup; the returned app handles all subsequent requests.

Application Architecture:
    ┌───────────────────────────────────────────────────────────────┐
    │                         FastAPI App                           │
    │                                                               │
    │  Middleware Chain (outermost first):                          │
    │  ┌──────┐ ┌──────────┐ ┌──────────┐ ┌──────────────────────┐  │
    │  │ CORS │→│  Req ID  │→│ Logging  │→│ Exception Handling   │  │
    │  └──────┘ └──────────┘ └──────────┘ └──────────────────────┘  │
    │                                                               │
    │  Routes:                                                      │
    │  ┌──────────────┐ ┌──────────────────┐ ┌───────────────────┐  │
    │  │ /api/v1/auth │ │ /api/v1/carmakes │ │ /api/v1/carmodels │  │
    │  └──────────────┘ └──────────────────┘ └───────────────────┘  │
    │  ┌──────────────┐                                             │
    │  │ GET /health  │                                             │
    │  └──────────────┘                                             │
    └───────────────────────────────────────────────────────────────┘

Application-scoped objects (settings, database, services, the exception
mapping chain) are built by create_app() and kept on `app.state`, so a test
can build an app around its own Settings and database without globals.

Lifecycle:
    Startup:
    1. Initialize logging
    2. Optionally create the schema and seed development data
    3. Log startup complete

    Shutdown:
    1. Dispose database engine (close all connections)
    2. Log shutdown complete
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from carlookup import __version__
from carlookup.config import Settings, get_settings
from carlookup.database import Database
from carlookup.error_handlers import ExceptionMappingChain
from carlookup.middleware.exception_handling import ExceptionHandlingMiddleware
from carlookup.middleware.logging import RequestLoggingMiddleware
from carlookup.middleware.request_id import REQUEST_ID_HEADER, RequestIDMiddleware, request_id_var
from carlookup.routes import auth, car_makes, car_models, health
from carlookup.schemas.envelope import failure
from carlookup.services.pagination_service import PaginationService
from carlookup.services.password_service import PasswordService
from carlookup.services.token_service import TokenService

logger = logging.getLogger(__name__)

# Error types for framework-raised HTTP errors (unknown route, wrong method)
_HTTP_ERROR_TYPES = {
    401: "UnauthorizedError",
    403: "ForbiddenError",
    404: "NotFoundError",
    405: "MethodNotAllowedError",
}


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(settings: Settings) -> None:
    """
    Configure logging for the entire application.

    What:    One stdout handler, one format, for every module.
    When:    Called once during app startup (before ANY other initialization).

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    Request-scoped lines carry the request id in their message as `[rid]`.
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Reduce noise from third-party libraries
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Startup: logging, optional schema creation and seeding.
    Shutdown: dispose the engine so pooled connections are closed.
    """
    settings: Settings = app.state.settings
    database: Database = app.state.database

    # ── Startup ───────────────────────────────────────────────────────────
    setup_logging(settings)
    logger.info("=" * 60)
    logger.info("CarLookup API %s starting up...", __version__)

    if settings.auto_create_schema:
        await database.create_schema()
        logger.info("Database schema ensured")

    if settings.seed_on_startup:
        from carlookup.seed import seed_database
        await seed_database(database, app.state.password_service)

    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)
    logger.info("API docs: http://%s:%d/docs", settings.backend_host, settings.backend_port)
    logger.info("=" * 60)

    yield  # Application runs here

    # ── Shutdown ──────────────────────────────────────────────────────────
    logger.info("CarLookup API shutting down...")
    await database.dispose()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def register_exception_handlers(app: FastAPI, chain: ExceptionMappingChain) -> None:
    """
    Render framework-raised errors in the same envelope as everything else.

    RequestValidationError (malformed JSON, non-UUID path ids, non-integer
    query values) goes through the mapping chain and becomes a 400. Starlette
    HTTPExceptions (unknown route, wrong method) keep their status code.
    Everything else propagates to ExceptionHandlingMiddleware.
    """

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        status_code, envelope = chain.resolve(exc)
        chain.log(exc, status_code, request_id_var.get(""), request.url.path)
        return JSONResponse(
            status_code=status_code,
            content=envelope.model_dump(mode="json", by_alias=True),
        )

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        chain.log(exc, exc.status_code, request_id_var.get(""), request.url.path)
        envelope = failure(
            code=exc.status_code,
            error_type=_HTTP_ERROR_TYPES.get(exc.status_code, "HttpError"),
            message=str(exc.detail),
            detail=str(exc.detail),
        )
        return JSONResponse(
            status_code=exc.status_code,
            content=envelope.model_dump(mode="json", by_alias=True),
            headers=getattr(exc, "headers", None),
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings: Configuration to build the app around. Defaults to the
                  cached environment settings.

    Returns: Fully configured FastAPI instance ready to receive requests.
    """
    settings = settings or get_settings()

    app = FastAPI(
        title="CarLookup API",
        description="Car makes and car models catalogue with role-based access.",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # ── Application State ─────────────────────────────────────────────────
    chain = ExceptionMappingChain.default(debug=settings.debug)
    app.state.settings = settings
    app.state.database = Database.from_settings(settings)
    app.state.pagination_service = PaginationService.from_settings(settings)
    app.state.password_service = PasswordService()
    app.state.token_service = TokenService.from_settings(settings)
    app.state.exception_chain = chain

    # ── Register Middleware ───────────────────────────────────────────────
    # Last added = outermost. Execution order becomes:
    # CORS → RequestID → Logging → ExceptionHandling → routes
    app.add_middleware(ExceptionHandlingMiddleware, chain=chain)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=[REQUEST_ID_HEADER, "Location"],
    )

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app, chain)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(auth.router)
    app.include_router(car_makes.router)
    app.include_router(car_models.router)
    app.include_router(health.router)

    return app


# ── Application Instance ─────────────────────────────────────────────────
# uvicorn expects `carlookup.main:app` to be importable
app = create_app()

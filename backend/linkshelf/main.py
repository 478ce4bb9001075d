"""
LinkShelf Backend — FastAPI Application Factory
=================================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   Called by uvicorn to start the server (uvicorn linkshelf.main:app),
       or indirectly through `python -m linkshelf`.

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌──────────┐ ┌─────────────┐ ┌──────┐ ┌────────┐   │
    │  │  Req ID  │→│   Logging   │→│ GZip │→│  CORS  │   │
    │  └──────────┘ └─────────────┘ └──────┘ └────────┘   │
    │                                                     │
    │  Routes (/api):                                     │
    │  ┌──────────────┐ ┌──────────────┐ ┌─────────────┐  │
    │  │ links CRUD   │ │ folders      │ │ health      │  │
    │  └──────────────┘ └──────────────┘ └─────────────┘  │
    │                                                     │
    │  Exception Handlers → {"error": message}:           │
    │  Validation→400 │ NotFound→404 │ Conflict→409 │ 500 │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:  logging → create missing tables → log address
    Shutdown: dispose engine (close pooled connections) → log
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from linkshelf import __version__
from linkshelf.config import settings
from linkshelf.database import dispose_engine, init_models
from linkshelf.exceptions import LinkShelfError
from linkshelf.middleware.logging import RequestLoggingMiddleware
from linkshelf.middleware.request_id import RequestIDMiddleware, request_id_var
from linkshelf.routes import folders, health, links

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the entire application.

    Format: 2024-01-15T12:00:00 [INFO] linkshelf.access: GET /api/links 200 3.1ms [a1b2c3d4] from 127.0.0.1
    Output goes to stdout, which container platforms collect.
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Our access middleware replaces uvicorn's access log
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Manage application lifecycle.

    uvicorn translates SIGINT/SIGTERM into a lifespan shutdown, so the code
    after `yield` is the graceful-shutdown path.
    """
    # ── Startup ───────────────────────────────────────────────────────────
    setup_logging()
    logger.info("LinkShelf Backend %s starting up...", __version__)

    try:
        await init_models()
    except Exception as e:
        # Keep serving: every storage-backed route will report the failure as 500
        logger.error("Error initializing database: %s", e, exc_info=True)

    logger.info("Server running on port %d", settings.backend_port)
    logger.info("API available at http://%s:%d/api", settings.backend_host, settings.backend_port)

    yield  # Application runs here

    # ── Shutdown ──────────────────────────────────────────────────────────
    logger.info("LinkShelf Backend shutting down...")
    await dispose_engine()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def describe_request_error(exc: RequestValidationError) -> str:
    """
    Flatten FastAPI's body parsing errors into one message.

    A body that is not JSON yields the decoder's message
    (e.g. "JSON decode error: Expecting value"); a wrongly typed field
    yields "body.tags: Input should be a valid list".
    """
    parts = []
    for error in exc.errors():
        msg = error.get("msg", "Invalid request")
        ctx_error = (error.get("ctx") or {}).get("error")
        if error.get("type") == "json_invalid" and ctx_error:
            parts.append(f"{msg}: {ctx_error}")
            continue
        loc = ".".join(str(p) for p in error.get("loc", ()))
        parts.append(f"{loc}: {msg}" if loc else msg)
    return "; ".join(parts) or "Invalid request body"


def register_exception_handlers(app: FastAPI) -> None:
    """
    Register global exception handlers.

    Every error response has the shape {"error": <message>}:
        ValidationError          → 400
        NotFoundError            → 404
        ConflictError            → 409
        DatabaseError            → 500 (driver message, unsanitized)
        RequestValidationError   → 500 (malformed or mistyped JSON body)
        Exception (fallback)     → 500 (str(exc))
    """

    @app.exception_handler(LinkShelfError)
    async def handle_app_error(request: Request, exc: LinkShelfError):
        rid = request_id_var.get("")
        if exc.status_code >= 500:
            logger.error("[%s] %s: %s | Context: %s", rid, type(exc).__name__, exc.message, exc.context)
        else:
            logger.debug("[%s] %s: %s", rid, type(exc).__name__, exc.message)
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError):
        rid = request_id_var.get("")
        message = describe_request_error(exc)
        logger.error("[%s] Invalid request body: %s", rid, message)
        return JSONResponse(status_code=500, content={"error": message})

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        """Catch-all; the traceback is logged, the message is returned."""
        rid = request_id_var.get("")
        logger.error("[%s] Unexpected error: %s", rid, exc, exc_info=True)
        return JSONResponse(status_code=500, content={"error": str(exc)})


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Tests call this to get a fresh app whose `get_db_session` dependency
    they can override.
    """
    app = FastAPI(
        title="LinkShelf API",
        description="Bookmark storage: links with notes, folder labels and tags, plus named folders.",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # ── Register Middleware ───────────────────────────────────────────────
    # Last added = first to execute: RequestID → Logging → GZip → CORS
    origins = settings.cors_origins_list
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials="*" not in origins,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(links.router)
    app.include_router(folders.router)
    app.include_router(health.router)

    return app


# ── Application Instance ─────────────────────────────────────────────────
app = create_app()

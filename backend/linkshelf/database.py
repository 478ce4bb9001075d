"""
LinkShelf Backend — Database Session Management
=================================================

What:  Async SQLAlchemy engine, session factory, FastAPI dependency,
       table bootstrap, and storage error classification.
How:   Creates an async engine with connection pooling, provides a session
       dependency that rolls back on error and always closes the session.
Who:   Used by route handlers via FastAPI's dependency injection system,
       by services for error classification, and by the app lifespan.
When:  Engine is created at module import; sessions are created per-request.

Schema management:
    Tables are created with `metadata.create_all` at startup, which only
    issues CREATE TABLE for tables that do not exist yet. There is no
    migration tooling; columns are never altered in place.
"""

import logging
from typing import Any, AsyncGenerator, Dict, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from linkshelf.config import settings

logger = logging.getLogger(__name__)

# SQLSTATE for unique_violation (PostgreSQL error class 23)
PG_UNIQUE_VIOLATION = "23505"


def build_engine(database_url: str) -> AsyncEngine:
    """
    Create the async engine for the configured database.

    SQLite (tests, local hacking) gets the driver's default pool; pool sizing
    arguments are only passed to server databases, where they are accepted.
    """
    options: Dict[str, Any] = {
        # Echo SQL queries in DEBUG mode for development visibility
        "echo": settings.log_level == "DEBUG",
    }
    if not database_url.startswith("sqlite"):
        options.update(
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_pre_ping=settings.db_pool_pre_ping,
            pool_recycle=3600,
        )
        if settings.db_ssl:
            # asyncpg: "require" encrypts without certificate verification
            options["connect_args"] = {"ssl": "require"}
    return create_async_engine(database_url, **options)


# ── Engine Configuration ──────────────────────────────────────────────────
engine = build_engine(settings.database_url)

# ── Session Factory ───────────────────────────────────────────────────────
# expire_on_commit=False: attributes stay readable after the request commits
async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


# ── Base Model ────────────────────────────────────────────────────────────
class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    All models share this metadata, which `init_models()` uses to create
    any missing tables at startup.
    """
    pass


# ── Session Dependency ────────────────────────────────────────────────────
async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session per request.

    How it works:
        1. Creates a new session from the factory
        2. Yields it to the route handler
        3. On success: commits anything still pending
        4. On error: rolls back the transaction
        5. Always: closes the session (returns connection to pool)

    FastAPI runs the code after `yield` once the response has been sent, so
    services commit their own writes before returning. The commit here only
    ends the read transaction of GET handlers.

    Example usage in a route:
        @router.get("/links")
        async def list_links(db: AsyncSession = Depends(get_db_session)):
            return await link_service.list_links(db)
    """
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise  # Re-raise so the global error handler can respond
        finally:
            await session.close()


# ── Error Classification ──────────────────────────────────────────────────
def is_unique_violation(exc: IntegrityError) -> bool:
    """
    Tell a uniqueness violation apart from other integrity failures.

    What:  Inspects the driver error wrapped by SQLAlchemy.
    Why:   Services must raise ConflictError for duplicates without knowing
           which database is behind the engine.

    Recognized signals:
        - PostgreSQL (asyncpg): SQLSTATE 23505 on `.sqlstate` / `.pgcode`
        - SQLite: extended error name SQLITE_CONSTRAINT_UNIQUE (Python 3.11+),
          or the "UNIQUE constraint failed" message on older interpreters
    """
    orig = exc.orig
    for attr in ("sqlstate", "pgcode"):
        if getattr(orig, attr, None) == PG_UNIQUE_VIOLATION:
            return True
    if getattr(orig, "sqlite_errorname", None) in (
        "SQLITE_CONSTRAINT_UNIQUE",
        "SQLITE_CONSTRAINT_PRIMARYKEY",
    ):
        return True
    return "UNIQUE constraint failed" in str(orig)


def storage_error_message(exc: Exception) -> str:
    """
    Return the driver's own message for a storage failure.

    SQLAlchemy's str() appends the SQL statement and a documentation link;
    callers get only the database's wording.
    """
    orig = getattr(exc, "orig", None)
    if orig is not None:
        return str(orig)
    return str(exc)


# ── Lifecycle Helpers ─────────────────────────────────────────────────────
async def init_models(bind: Optional[AsyncEngine] = None) -> None:
    """
    What:  Creates the `links` and `folders` tables if they are absent.
    When:  Called once during application startup (lifespan handler).
    """
    # Register the models on Base.metadata before create_all
    from linkshelf.models import folder, link  # noqa: F401

    target = bind or engine
    async with target.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database tables initialized")


async def dispose_engine() -> None:
    """
    What:  Gracefully closes all connections in the pool.
    When:  Called during application shutdown (lifespan handler).
    """
    await engine.dispose()
    logger.info("Database connection closed")

"""
UGC Agency Backend — Database Handle and Session Management
============================================================

What:  The explicit `Database` handle (async engine + session factory),
       the declarative `Base`, and the per-request session dependency.
Why:   One object owns the connection pool and its lifecycle. It is built at
       process start, attached to the FastAPI app, and disposed at shutdown.
       Nothing opens connections at import time.
How:   `create_app(database=...)` stores the handle on `app.state.db`;
       `get_db_session` reads it back from the request.
Who:   Route handlers (via Depends), the CLI, Alembic, and the test suite.

Connection Pooling Strategy (PostgreSQL):
    pool_size=20:      Persistent connections for normal load
    max_overflow=10:   Temporary connections for traffic spikes
    pool_pre_ping:     Validates connections before use
    pool_recycle=3600: Recycles connections every hour

SQLite (tests, local experiments) uses SQLAlchemy's default pool for the
dialect; passing pool sizing to it is an error, so those options are only
applied to server databases.
"""

from typing import Any, AsyncGenerator, Optional

from fastapi import Request
from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from ugc_backend.config import settings


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    All models inherit from this class to register with the shared metadata
    (used by Alembic for migrations and by `Database.create_all` in tests).
    """
    pass


class Database:
    """
    Owns the async engine and the session factory.

    Example:
        db = Database(settings.database_url)
        async with db.session() as session:
            ...
        await db.dispose()
    """

    def __init__(self, url: Optional[str] = None, echo: bool = False, **engine_kwargs: Any):
        self.url = url or settings.database_url
        if not self.url.startswith("sqlite"):
            engine_kwargs.setdefault("pool_size", settings.db_pool_size)
            engine_kwargs.setdefault("max_overflow", settings.db_max_overflow)
            engine_kwargs.setdefault("pool_pre_ping", settings.db_pool_pre_ping)
            engine_kwargs.setdefault("pool_recycle", 3600)

        self.engine: AsyncEngine = create_async_engine(self.url, echo=echo, **engine_kwargs)

        # expire_on_commit=False: objects stay readable after the request commits
        self.session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    def session(self) -> AsyncSession:
        """Open a new session. Use as `async with db.session() as s:`."""
        return self.session_factory()

    async def ping(self) -> bool:
        """Run `SELECT 1`; used by the health check."""
        async with self.engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
        return True

    async def create_all(self) -> None:
        """
        Create every table known to `Base.metadata`.

        Production schemas are managed by Alembic; this exists for tests and
        throwaway SQLite databases.
        """
        import ugc_backend.models  # noqa: F401  (registers all tables)

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def drop_all(self) -> None:
        import ugc_backend.models  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)

    async def dispose(self) -> None:
        """Close all pooled connections. Called during application shutdown."""
        await self.engine.dispose()


# ── Session Dependency ────────────────────────────────────────────────────
async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session per request.

    How it works:
        1. Takes the `Database` handle the app was created with
        2. Yields a fresh session to the route handler
        3. On success: commits the transaction
        4. On error: rolls back and re-raises for the global error handler
        5. Always: closes the session (returns connection to pool)
    """
    database: Database = request.app.state.db
    async with database.session() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()

"""
Jotter Backend — Persistence Adapter
=====================================

What:  One lazily-established, process-wide connection to the note store,
       plus the per-operation session helper and FastAPI dependency.
How:   `StoreAdapter.get_connection()` creates the async SQLAlchemy engine on
       first use. Concurrent first callers share a single in-flight attempt;
       once it succeeds the established connection is cached for the
       lifetime of the process.
Who:   NoteService (via `store.session()`), the health route, and the app
       lifespan (dispose on shutdown).

Connection states:
    idle ──get_connection()──▶ connecting ──ok──▶ connected
                                   │
                                   └──error──▶ idle (next caller tries again)

Only one attempt is ever in flight. Callers arriving while it runs await the
same future; the future is shielded so that a caller whose request is
cancelled does not cancel the attempt for everyone else.
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from sqlalchemy import text
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from app.config import Settings, settings

logger = logging.getLogger(__name__)


# ── Base Model ────────────────────────────────────────────────────────────
class Base(DeclarativeBase):
    """Base class for all SQLAlchemy ORM models (shared metadata for Alembic)."""
    pass


class StoreConnection:
    """An established store connection: the engine and its session factory."""

    def __init__(self, engine: AsyncEngine):
        self.engine = engine
        # expire_on_commit=False: attributes stay readable after commit
        self.session_factory = async_sessionmaker(
            engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    async def ping(self) -> None:
        async with self.engine.connect() as conn:
            await conn.execute(text("SELECT 1"))


class StoreAdapter:
    """
    Lazily connects to the note store and caches the connection.

    Args:
        database_url:   Async SQLAlchemy URL
        pool_size:      Persistent pooled connections (not used for SQLite)
        max_overflow:   Extra connections for bursts (not used for SQLite)
        pool_pre_ping:  Validate pooled connections before use
        create_schema:  Create missing tables when the connection is established
        echo:           Echo SQL statements
    """

    def __init__(
        self,
        database_url: str,
        pool_size: int = 5,
        max_overflow: int = 10,
        pool_pre_ping: bool = True,
        create_schema: bool = True,
        echo: bool = False,
    ):
        self.database_url = database_url
        self.pool_size = pool_size
        self.max_overflow = max_overflow
        self.pool_pre_ping = pool_pre_ping
        self.create_schema = create_schema
        self.echo = echo

        self._connection: Optional[StoreConnection] = None
        self._pending: Optional["asyncio.Future[StoreConnection]"] = None

    @classmethod
    def from_settings(cls, config: Settings) -> "StoreAdapter":
        return cls(
            database_url=config.database_url,
            pool_size=config.db_pool_size,
            max_overflow=config.db_max_overflow,
            pool_pre_ping=config.db_pool_pre_ping,
            create_schema=config.db_create_schema,
            echo=config.log_level == "DEBUG",
        )

    @property
    def is_connected(self) -> bool:
        return self._connection is not None

    async def get_connection(self) -> StoreConnection:
        """
        Return the cached connection, establishing it on first use.

        - Connected: returns immediately.
        - Attempt in flight: awaits that same attempt.
        - Otherwise: starts one attempt and caches its future.

        A failed attempt is dropped so a later call starts over. Nothing here
        retries on its own.
        """
        if self._connection is not None:
            return self._connection

        if self._pending is None:
            self._pending = asyncio.ensure_future(self._connect())

        pending = self._pending
        try:
            connection = await asyncio.shield(pending)
        except asyncio.CancelledError:
            # Only this caller was cancelled; the shared attempt keeps running
            raise
        except Exception:
            if self._pending is pending:
                self._pending = None
            raise

        if self._connection is None:
            self._connection = connection
            self._pending = None
        return self._connection

    async def _connect(self) -> StoreConnection:
        url = make_url(self.database_url)
        logger.info("Connecting to store (%s)", url.render_as_string(hide_password=True))

        engine_kwargs = {"pool_pre_ping": self.pool_pre_ping, "echo": self.echo}
        if url.get_backend_name() != "sqlite":
            engine_kwargs.update(
                pool_size=self.pool_size,
                max_overflow=self.max_overflow,
                pool_recycle=3600,
            )
        engine = create_async_engine(url, **engine_kwargs)

        try:
            async with engine.begin() as conn:
                if self.create_schema:
                    # Import registers the model on Base.metadata
                    from app.models import note  # noqa: F401
                    await conn.run_sync(Base.metadata.create_all)
                else:
                    await conn.execute(text("SELECT 1"))
        except Exception:
            await engine.dispose()
            raise

        logger.info("Store connection established")
        return StoreConnection(engine)

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        """
        Yield a session on the shared connection.

        Commits are explicit (the caller commits its single write). Any
        exception rolls the session back before propagating.
        """
        connection = await self.get_connection()
        async with connection.session_factory() as session:
            try:
                yield session
            except Exception:
                await session.rollback()
                raise

    async def dispose(self) -> None:
        """Close pooled connections and forget the cached connection."""
        pending, self._pending = self._pending, None
        if pending is not None and not pending.done():
            pending.cancel()
        connection, self._connection = self._connection, None
        if connection is not None:
            await connection.engine.dispose()
            logger.info("Store connection closed")


# ── Process-wide adapter ──────────────────────────────────────────────────
store = StoreAdapter.from_settings(settings)


def get_store() -> StoreAdapter:
    """FastAPI dependency returning the process-wide adapter."""
    return store


async def dispose_store() -> None:
    """Called during application shutdown (lifespan handler)."""
    await store.dispose()

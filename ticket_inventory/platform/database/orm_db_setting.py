"""
SQLAlchemy async engine and session management

This module provides:
1. Base: declarative base shared by all ORM models
2. Database: engine + session factory handle owned by the DI container

PostgreSQL (asyncpg) is the production backend. SQLite (aiosqlite) is accepted
for local development and tests; it serializes writers on the database lock,
so the busy timeout must cover the longest purchase transaction.
"""

from typing import Any

from sqlalchemy import event
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from ticket_inventory.platform.config.core_setting import settings
from ticket_inventory.platform.logging.loguru_io import Logger


# =============================================================================
# Base Model
# =============================================================================


class Base(DeclarativeBase):
    pass


# =============================================================================
# Engine options
# =============================================================================


def _is_sqlite(db_url: str) -> bool:
    return make_url(db_url).get_backend_name() == 'sqlite'


def _engine_options(db_url: str) -> dict[str, Any]:
    if _is_sqlite(db_url):
        return {'connect_args': {'timeout': settings.SQLITE_BUSY_TIMEOUT}}
    return {
        'pool_size': settings.DB_POOL_SIZE,
        'max_overflow': settings.DB_POOL_MAX_OVERFLOW,
        'pool_timeout': settings.DB_POOL_TIMEOUT,
        'pool_recycle': settings.DB_POOL_RECYCLE,
        'pool_pre_ping': settings.DB_POOL_PRE_PING,
    }


def _enable_sqlite_foreign_keys(dbapi_connection: Any, connection_record: Any) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute('PRAGMA foreign_keys=ON')
    cursor.close()


# =============================================================================
# Database Class (for DI)
# =============================================================================


class Database:
    """
    Owns one async engine and its session factory.

    The engine connects lazily, so constructing a Database never touches the
    network; the first session does.
    """

    def __init__(self, *, db_url: str, echo: bool = False) -> None:
        self._db_url = db_url
        self._engine: AsyncEngine = create_async_engine(
            db_url, echo=echo, **_engine_options(db_url)
        )
        if _is_sqlite(db_url):
            event.listen(self._engine.sync_engine, 'connect', _enable_sqlite_foreign_keys)

        self._session_factory = async_sessionmaker(
            self._engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @property
    def engine(self) -> AsyncEngine:
        return self._engine

    @property
    def session_factory(self) -> async_sessionmaker[AsyncSession]:
        return self._session_factory

    async def create_tables(self) -> None:
        """Create database tables if they don't exist"""
        # Register every model on Base.metadata before create_all
        import ticket_inventory.service.ticketing.driven_adapter.model  # noqa: F401

        async with self._engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all, checkfirst=True)
        Logger.base.info(f'🗄️  [DB] Tables ensured on {make_url(self._db_url).get_backend_name()}')

    async def dispose(self) -> None:
        await self._engine.dispose()

"""
SQLAlchemy async engine and session management

This module provides:
1. AsyncEngineManager: event-loop-aware engine and session maker
2. Base: declarative base shared by every service's models
3. Database class (session factory handed to repositories through DI)
"""

import asyncio
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from src.platform.config.core_setting import settings
from src.platform.logging.loguru_io import Logger


# =============================================================================
# Event-loop-aware Engine Manager
# =============================================================================


class AsyncEngineManager:
    """
    Keeps one engine per running event loop.

    Test clients spin up fresh loops; reusing an engine created on another loop
    fails with "Task got Future attached to a different loop".
    """

    def __init__(self) -> None:
        self._engine: Optional[AsyncEngine] = None
        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self._session_maker: Optional[async_sessionmaker[AsyncSession]] = None

    def get_engine(self) -> AsyncEngine:
        try:
            current_loop = asyncio.get_running_loop()
        except RuntimeError:
            if self._engine is None:
                self._engine = self._create_engine()
            return self._engine

        if self._loop is not current_loop:
            if self._engine is not None:
                Logger.base.warning('🔄 [DB] Event loop changed, dropping old engine...')
                self._session_maker = None
            Logger.base.info(f'🔗 [DB] Creating engine for event loop {id(current_loop)}')
            self._engine = self._create_engine()
            self._loop = current_loop

        return self._engine  # type: ignore[return-value]

    def get_session_maker(self) -> async_sessionmaker[AsyncSession]:
        engine = self.get_engine()
        if self._session_maker is None:
            self._session_maker = async_sessionmaker(
                engine,
                class_=AsyncSession,
                expire_on_commit=False,
            )
        return self._session_maker

    async def dispose(self) -> None:
        if self._engine is not None:
            await self._engine.dispose()
        self._engine = None
        self._loop = None
        self._session_maker = None

    @staticmethod
    def _create_engine() -> AsyncEngine:
        return create_async_engine(
            settings.DATABASE_URL_ASYNC,
            echo=False,
            pool_size=settings.DB_POOL_SIZE,
            max_overflow=settings.DB_POOL_MAX_OVERFLOW,
            pool_timeout=settings.DB_POOL_TIMEOUT,
            pool_recycle=settings.DB_POOL_RECYCLE,
            pool_pre_ping=settings.DB_POOL_PRE_PING,
        )


_engine_manager = AsyncEngineManager()


def get_engine() -> AsyncEngine:
    return _engine_manager.get_engine()


async def dispose_engine() -> None:
    await _engine_manager.dispose()
    Logger.base.info('🗄️  [DB] Engine disposed')


# =============================================================================
# Base Model
# =============================================================================


class Base(DeclarativeBase):
    pass


# =============================================================================
# Table Creation
# =============================================================================


def _register_models() -> None:
    """Import every model so it is on Base.metadata before create_all / drop_all"""
    from src.service.booking.driven_adapter.model import booking_model  # noqa: F401
    from src.service.catalog.driven_adapter.model import (  # noqa: F401
        favorite_movie_model,
        movie_model,
        show_model,
    )
    from src.service.shared_kernel.driven_adapter.model import user_model  # noqa: F401


async def create_db_and_tables() -> None:
    """Create database tables if they don't exist"""
    _register_models()

    try:
        async with get_engine().begin() as conn:
            await conn.run_sync(Base.metadata.create_all, checkfirst=True)
    except Exception as e:
        error_msg = str(e).lower()
        if any(keyword in error_msg for keyword in ['already exists', 'duplicate key']):
            # Concurrent workers racing on first start
            Logger.base.info('Tables already exist, skipping creation')
        else:
            Logger.base.error(f'Error creating tables: {e}')
            raise


async def drop_all_tables() -> None:
    _register_models()
    async with get_engine().begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    Logger.base.info('🗑️  [DB] All tables dropped')


# =============================================================================
# Database Class (for DI)
# =============================================================================


class Database:
    """Session factory for repositories: `session_factory=database.provided.session`"""

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """Yields a session; rolls back on exception, closes on exit"""
        async with _engine_manager.get_session_maker()() as session:
            yield session

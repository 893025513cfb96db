"""
Async database access for the jobs and candidate_profiles tables.

One process-wide ``SQLModelDatabaseManager`` owns an asyncpg-backed engine.
Startup registers the pgvector extension so embedding columns and the HNSW
index can be used.
"""

from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Dict, Optional

import structlog
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.sql import text

from app.core.config import Settings

logger = structlog.get_logger(__name__)

_ASYNC_DIALECT = "postgresql+asyncpg://"


def to_async_url(url: str) -> str:
    """Rewrite a plain PostgreSQL URL for the asyncpg driver."""
    for prefix in ("postgresql://", "postgres://"):
        if url.startswith(prefix):
            return _ASYNC_DIALECT + url[len(prefix):]
    return url


class SQLModelDatabaseManager:
    """Engine lifecycle plus transactional sessions for repositories."""

    def __init__(self, settings: Settings):
        self.settings = settings
        self.engine: Optional[AsyncEngine] = None
        self._sessions: Optional[async_sessionmaker] = None

    @property
    def is_initialized(self) -> bool:
        return self.engine is not None and self._sessions is not None

    async def initialize(self) -> None:
        if self.is_initialized:
            logger.warning("Database engine already running; skipping init")
            return

        url = to_async_url(str(self.settings.get_postgres_url()))
        engine = create_async_engine(
            url,
            pool_size=self.settings.DATABASE_POOL_SIZE,
            max_overflow=self.settings.DATABASE_MAX_OVERFLOW,
            pool_timeout=30,
            pool_recycle=3600,
            pool_pre_ping=True,
            echo=self.settings.DEBUG,
            connect_args={"server_settings": {"application_name": "job-board-matching"}},
        )
        try:
            async with engine.begin() as conn:
                await conn.execute(text("CREATE EXTENSION IF NOT EXISTS vector"))
        except Exception as e:
            logger.error("Database engine could not connect", error=str(e))
            await engine.dispose()
            raise

        self.engine = engine
        self._sessions = async_sessionmaker(
            bind=engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )
        # Log host and database only, never credentials
        logger.info("Database engine ready", target=url.rsplit("@", 1)[-1])

    @asynccontextmanager
    async def get_session(self) -> AsyncGenerator[AsyncSession, None]:
        """Yield a session; commit when the block exits cleanly, roll back otherwise."""
        if self._sessions is None:
            raise RuntimeError("Database manager not initialized")

        async with self._sessions() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    async def health_check(self) -> Dict[str, Any]:
        if self.engine is None:
            return {"status": "unhealthy", "error": "Database manager not initialized"}

        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
        except Exception as e:
            logger.warning("Database ping failed", error=str(e))
            return {"status": "unhealthy", "error": str(e)}

        pool = self.engine.pool
        return {
            "status": "healthy",
            "pool_size": pool.size(),
            "checked_out": pool.checkedout(),
        }

    async def shutdown(self) -> None:
        engine, self.engine, self._sessions = self.engine, None, None
        if engine is None:
            return
        try:
            await engine.dispose()
            logger.info("Database engine disposed")
        except Exception as e:
            logger.error("Database engine dispose failed", error=str(e))


_sqlmodel_db_manager: Optional[SQLModelDatabaseManager] = None


def get_sqlmodel_db_manager(settings: Optional[Settings] = None) -> SQLModelDatabaseManager:
    """Process-wide manager, created lazily from ``get_settings()`` when none is given."""
    global _sqlmodel_db_manager

    if _sqlmodel_db_manager is None:
        if settings is None:
            from app.core.config import get_settings
            settings = get_settings()
        _sqlmodel_db_manager = SQLModelDatabaseManager(settings)

    return _sqlmodel_db_manager


async def init_sqlmodel_database(settings: Optional[Settings] = None) -> SQLModelDatabaseManager:
    manager = get_sqlmodel_db_manager(settings)
    await manager.initialize()
    return manager


async def shutdown_sqlmodel_database() -> None:
    global _sqlmodel_db_manager
    manager, _sqlmodel_db_manager = _sqlmodel_db_manager, None
    if manager is not None:
        await manager.shutdown()

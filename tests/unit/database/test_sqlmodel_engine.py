"""Tests for the async database manager that need no running PostgreSQL."""

import pytest

from app.core.config import Settings
from app.database.sqlmodel_engine import (
    SQLModelDatabaseManager,
    get_sqlmodel_db_manager,
    shutdown_sqlmodel_database,
    to_async_url,
)


class TestToAsyncUrl:

    @pytest.mark.parametrize(
        "url, expected",
        [
            ("postgresql://u:p@db:5432/jobs", "postgresql+asyncpg://u:p@db:5432/jobs"),
            ("postgres://u:p@db/jobs", "postgresql+asyncpg://u:p@db/jobs"),
            ("postgresql+asyncpg://u:p@db/jobs", "postgresql+asyncpg://u:p@db/jobs"),
        ],
    )
    def test_driver_rewrite(self, url, expected):
        assert to_async_url(url) == expected


class TestSQLModelDatabaseManager:

    @pytest.fixture
    def manager(self):
        return SQLModelDatabaseManager(Settings(ENVIRONMENT="test"))

    def test_starts_uninitialized(self, manager):
        assert manager.is_initialized is False

    @pytest.mark.asyncio
    async def test_session_requires_initialization(self, manager):
        with pytest.raises(RuntimeError, match="not initialized"):
            async with manager.get_session():
                pass

    @pytest.mark.asyncio
    async def test_health_reports_uninitialized_engine(self, manager):
        health = await manager.health_check()

        assert health["status"] == "unhealthy"

    @pytest.mark.asyncio
    async def test_shutdown_without_engine_is_noop(self, manager):
        await manager.shutdown()

        assert manager.is_initialized is False


class TestGlobalManager:

    @pytest.mark.asyncio
    async def test_one_manager_until_shutdown(self):
        first = get_sqlmodel_db_manager(Settings(ENVIRONMENT="test"))

        assert get_sqlmodel_db_manager() is first

        await shutdown_sqlmodel_database()

        assert get_sqlmodel_db_manager(Settings(ENVIRONMENT="test")) is not first
        await shutdown_sqlmodel_database()

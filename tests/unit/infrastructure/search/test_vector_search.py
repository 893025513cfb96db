"""Tests for the pgvector job index adapter."""

from contextlib import asynccontextmanager
from datetime import datetime
from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

import pytest
from sqlalchemy.exc import DBAPIError

from app.domain.entities.match import MatchType
from app.domain.exceptions import VectorIndexUnavailableError
from app.infrastructure.persistence.models.job_table import JobTable
from app.infrastructure.search.vector_search import PgVectorJobIndex, is_missing_capability


class FakePostgresError(Exception):
    """Driver error carrying a SQLSTATE like asyncpg/psycopg exceptions."""

    def __init__(self, message, sqlstate=None):
        super().__init__(message)
        self.sqlstate = sqlstate


def _dbapi_error(message, sqlstate=None, wrapped=False):
    orig = FakePostgresError(message, sqlstate)
    if wrapped:
        adapted = Exception(message)
        adapted.__cause__ = orig
        orig = adapted
    return DBAPIError("SELECT 1", {}, orig)


class FakeDatabaseManager:
    """Hands out one scripted session."""

    def __init__(self, session):
        self.session = session

    @asynccontextmanager
    async def get_session(self):
        yield self.session


class TestMissingCapability:

    @pytest.mark.parametrize("sqlstate", ["42704", "42883", "42P01", "58P01"])
    def test_missing_objects(self, sqlstate):
        assert is_missing_capability(_dbapi_error("missing", sqlstate))

    def test_sqlstate_on_wrapped_driver_error(self):
        assert is_missing_capability(_dbapi_error('type "vector" does not exist', "42704", wrapped=True))

    def test_dimension_mismatch(self):
        assert is_missing_capability(_dbapi_error("different vector dimensions 384 and 3", "22000"))

    @pytest.mark.parametrize("sqlstate", ["57014", "40001", None])
    def test_genuine_failures(self, sqlstate):
        assert not is_missing_capability(_dbapi_error("canceling statement", sqlstate))


class TestPgVectorJobIndex:

    @pytest.mark.asyncio
    async def test_disabled_index_is_unavailable(self):
        index = PgVectorJobIndex(db_manager=MagicMock(), enabled=False)

        with pytest.raises(VectorIndexUnavailableError):
            await index.query([1.0, 0.0], pool_size=10, limit=5)

        assert (await index.check_health())["status"] == "disabled"

    @pytest.mark.asyncio
    async def test_missing_index_is_unavailable(self):
        session = AsyncMock()
        result = MagicMock()
        result.first.return_value = None
        session.execute.return_value = result
        index = PgVectorJobIndex(db_manager=FakeDatabaseManager(session), enabled=True)

        with pytest.raises(VectorIndexUnavailableError, match="not found"):
            await index.query([1.0, 0.0], pool_size=10, limit=5)

    @pytest.mark.asyncio
    async def test_query_maps_rows_to_scored_hits(self):
        row = JobTable(
            id=uuid4(),
            title="Python Developer",
            description="APIs",
            skills=["Python"],
            status="active",
            embedding=[1.0, 0.0],
            created_at=datetime(2026, 1, 1),
            updated_at=datetime(2026, 1, 1),
        )
        rows = MagicMock()
        rows.all.return_value = [(row, 0.87)]
        session = AsyncMock()
        session.execute.side_effect = [None, rows]
        index = PgVectorJobIndex(db_manager=FakeDatabaseManager(session), enabled=True)
        index._index_present = True

        hits = await index.query([1.0, 0.0], pool_size=200, limit=5)

        assert len(hits) == 1
        assert hits[0].job.title == "Python Developer"
        assert hits[0].score == pytest.approx(0.87)
        assert hits[0].match_type == MatchType.SEMANTIC
        assert "hnsw.ef_search = 200" in str(session.execute.call_args_list[0].args[0])

    @pytest.mark.asyncio
    async def test_nan_similarity_reported_as_zero(self):
        row = JobTable(
            id=uuid4(),
            title="Blank Vector",
            status="active",
            embedding=[0.0, 0.0],
            created_at=datetime(2026, 1, 1),
            updated_at=datetime(2026, 1, 1),
        )
        rows = MagicMock()
        rows.all.return_value = [(row, float("nan"))]
        session = AsyncMock()
        session.execute.side_effect = [None, rows]
        index = PgVectorJobIndex(db_manager=FakeDatabaseManager(session), enabled=True)
        index._index_present = True

        hits = await index.query([1.0, 0.0], pool_size=10, limit=5)

        assert [hit.score for hit in hits] == [0.0]

    @pytest.mark.asyncio
    async def test_ef_search_is_clamped(self):
        rows = MagicMock()
        rows.all.return_value = []
        session = AsyncMock()
        session.execute.side_effect = [None, rows]
        index = PgVectorJobIndex(db_manager=FakeDatabaseManager(session), enabled=True)
        index._index_present = True

        await index.query([1.0, 0.0], pool_size=50000, limit=5)

        assert "hnsw.ef_search = 1000" in str(session.execute.call_args_list[0].args[0])

    @pytest.mark.asyncio
    async def test_missing_operator_becomes_unavailable(self):
        session = AsyncMock()
        session.execute.side_effect = _dbapi_error("operator does not exist: vector <=> vector", "42883")
        index = PgVectorJobIndex(db_manager=FakeDatabaseManager(session), enabled=True)
        index._index_present = True

        with pytest.raises(VectorIndexUnavailableError):
            await index.query([1.0, 0.0], pool_size=10, limit=5)

        assert index._index_present is None

    @pytest.mark.asyncio
    async def test_other_database_errors_propagate(self):
        session = AsyncMock()
        session.execute.side_effect = _dbapi_error("canceling statement due to statement timeout", "57014")
        index = PgVectorJobIndex(db_manager=FakeDatabaseManager(session), enabled=True)
        index._index_present = True

        with pytest.raises(DBAPIError):
            await index.query([1.0, 0.0], pool_size=10, limit=5)

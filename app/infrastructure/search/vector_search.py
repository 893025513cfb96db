"""
Native vector index over job embeddings using pgvector.

- HNSW cosine index (``vector_cosine_ops``) on ``jobs.embedding``
- Candidate pool controlled per query through ``hnsw.ef_search``
- Scores reported as cosine similarity (1 - cosine distance)
- Missing extension, index or operator surfaces as VectorIndexUnavailableError
"""

import math
from datetime import datetime
from typing import Any, Dict, List, Optional

import structlog
from sqlalchemy import select, text
from sqlalchemy.exc import DBAPIError

from app.core.config import get_settings
from app.database.sqlmodel_engine import SQLModelDatabaseManager, get_sqlmodel_db_manager
from app.domain.entities.job_posting import JobStatus
from app.domain.entities.match import MatchType, RetrievalHit
from app.domain.exceptions import VectorIndexUnavailableError
from app.domain.interfaces import INativeVectorIndex
from app.infrastructure.persistence.mappers.job_mapper import JobMapper
from app.infrastructure.persistence.models.job_table import JobTable

logger = structlog.get_logger(__name__)

# pgvector rejects ef_search values above this
MAX_EF_SEARCH = 1000

# undefined_object, undefined_function, undefined_table, undefined_file
MISSING_CAPABILITY_SQLSTATES = {"42704", "42883", "42P01", "58P01"}


def _sqlstate(error: DBAPIError) -> Optional[str]:
    orig = getattr(error, "orig", None)
    for candidate in (orig, getattr(orig, "__cause__", None)):
        if candidate is None:
            continue
        code = getattr(candidate, "sqlstate", None) or getattr(candidate, "pgcode", None)
        if code:
            return str(code)
    return None


def _similarity(value: Any) -> float:
    # Zero-norm vectors give a NaN cosine distance
    if value is None:
        return 0.0
    score = float(value)
    return score if math.isfinite(score) else 0.0


def is_missing_capability(error: DBAPIError) -> bool:
    """True when the failure means the index cannot serve queries at all."""
    if _sqlstate(error) in MISSING_CAPABILITY_SQLSTATES:
        return True
    return "different vector dimensions" in str(error).lower()


class PgVectorJobIndex(INativeVectorIndex):
    """Approximate nearest-neighbour search through the jobs HNSW index."""

    def __init__(
        self,
        db_manager: Optional[SQLModelDatabaseManager] = None,
        index_name: Optional[str] = None,
        enabled: Optional[bool] = None,
    ):
        settings = get_settings()
        self._db_manager = db_manager
        self.index_name = index_name or settings.VECTOR_INDEX_NAME
        self.enabled = settings.VECTOR_INDEX_ENABLED if enabled is None else enabled
        self._index_present: Optional[bool] = None
        self._stats = {
            "queries": 0,
            "unavailable": 0,
            "errors": 0,
        }

    def _get_db_manager(self) -> SQLModelDatabaseManager:
        if self._db_manager is None:
            self._db_manager = get_sqlmodel_db_manager()
        return self._db_manager

    async def _index_exists(self) -> bool:
        if self._index_present is None:
            async with self._get_db_manager().get_session() as session:
                result = await session.execute(
                    text("SELECT 1 FROM pg_indexes WHERE indexname = :name"),
                    {"name": self.index_name},
                )
                self._index_present = result.first() is not None
            logger.info("Vector index lookup", index=self.index_name, present=self._index_present)
        return self._index_present

    async def query(
        self,
        vector: List[float],
        pool_size: int,
        limit: int,
        status: JobStatus = JobStatus.ACTIVE,
    ) -> List[RetrievalHit]:
        if not self.enabled:
            self._stats["unavailable"] += 1
            raise VectorIndexUnavailableError("Native vector index is disabled")

        try:
            if not await self._index_exists():
                self._stats["unavailable"] += 1
                raise VectorIndexUnavailableError(f"Vector index '{self.index_name}' not found")

            ef_search = max(1, min(max(pool_size, limit), MAX_EF_SEARCH))
            distance = JobTable.embedding.cosine_distance(vector)
            statement = (
                select(JobTable, (1 - distance).label("score"))
                .where(
                    JobTable.status == status.value,
                    JobTable.embedding.is_not(None),
                )
                .order_by(distance)
                .limit(limit)
            )

            async with self._get_db_manager().get_session() as session:
                await session.execute(text(f"SET LOCAL hnsw.ef_search = {ef_search}"))
                rows = (await session.execute(statement)).all()

        except DBAPIError as e:
            if is_missing_capability(e):
                self._stats["unavailable"] += 1
                self._index_present = None
                raise VectorIndexUnavailableError(f"Vector index unusable: {e.orig}") from e
            self._stats["errors"] += 1
            raise

        self._stats["queries"] += 1
        hits = [
            RetrievalHit(job=JobMapper.to_domain(row), score=_similarity(score), match_type=MatchType.SEMANTIC)
            for row, score in rows
        ]
        logger.debug("Native vector query completed", ef_search=ef_search, hits=len(hits))
        return hits

    async def check_health(self) -> Dict[str, Any]:
        health: Dict[str, Any] = {
            "enabled": self.enabled,
            "index": self.index_name,
            "stats": self._stats.copy(),
            "timestamp": datetime.now().isoformat(),
        }
        if not self.enabled:
            health["status"] = "disabled"
            return health

        try:
            self._index_present = None
            present = await self._index_exists()
        except Exception as e:
            health.update(status="unhealthy", error=str(e))
            return health

        health["status"] = "healthy" if present else "unavailable"
        return health


__all__ = ["PgVectorJobIndex", "is_missing_capability"]

"""
Vector retrieval with graceful degradation.

Retrieval strategies, tried in order:
- Native approximate index on the document store (pgvector HNSW)
- Brute-force cosine scan over every active, embedded job posting

The caller only sees hits and the strategy that produced them; the
degradation itself is logged, never raised.
"""

from __future__ import annotations

import asyncio
import math
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import List, Optional, Sequence

import numpy as np
import structlog

from app.domain.entities.job_posting import JobPosting, JobStatus
from app.domain.entities.match import MatchType, RetrievalHit
from app.domain.exceptions import RetrievalDegradedError
from app.domain.interfaces import INativeVectorIndex
from app.domain.repositories.job_repository import IJobRepository

logger = structlog.get_logger(__name__)


class RetrievalStrategy(str, Enum):
    """Which retrieval path produced a result set."""

    NATIVE_INDEX = "native_index"
    BRUTE_FORCE = "brute_force"


@dataclass
class RetrievalResult:
    """Ranked hits plus the strategy tag."""

    hits: List[RetrievalHit] = field(default_factory=list)
    strategy: RetrievalStrategy = RetrievalStrategy.BRUTE_FORCE

    def __len__(self) -> int:
        return len(self.hits)


def finite_score(score: Optional[float]) -> float:
    """Non-finite or missing scores count as no similarity."""
    if score is None or not math.isfinite(score):
        return 0.0
    return float(score)


def cosine_scores(query: Sequence[float], candidates: Sequence[Sequence[float]]) -> List[float]:
    """
    Cosine similarity of the query against each candidate.

    Zero-norm vectors and any non-finite result score 0.
    """
    if not candidates:
        return []

    query_arr = np.asarray(query, dtype=np.float64)
    matrix = np.asarray(candidates, dtype=np.float64)

    dots = matrix @ query_arr
    norms = np.linalg.norm(matrix, axis=1) * np.linalg.norm(query_arr)
    with np.errstate(divide="ignore", invalid="ignore"):
        scores = np.where(norms > 0, dots / norms, 0.0)
    scores = np.nan_to_num(scores, nan=0.0, posinf=0.0, neginf=0.0)
    return scores.tolist()


def rank_by_cosine(
    query_vector: Sequence[float],
    jobs: Sequence[JobPosting],
    limit: int,
    min_score: Optional[float] = None,
) -> List[RetrievalHit]:
    """Score, filter and rank jobs; ties keep input order."""
    dimension = len(query_vector)
    eligible = [
        job for job in jobs
        if job.is_retrievable() and len(job.embedding) == dimension
    ]
    skipped = len(jobs) - len(eligible)
    if skipped:
        logger.debug("Skipped jobs with missing or mismatched embeddings", skipped=skipped)

    scores = cosine_scores(query_vector, [job.embedding for job in eligible])
    hits = [
        RetrievalHit(job=job, score=score, match_type=MatchType.SEMANTIC)
        for job, score in zip(eligible, scores)
    ]
    if min_score is not None:
        hits = [hit for hit in hits if hit.score >= min_score]

    # sorted() is stable
    hits = sorted(hits, key=lambda hit: hit.score, reverse=True)
    return hits[:max(limit, 0)]


class VectorRetriever:
    """Top-k job retrieval for a query vector."""

    def __init__(
        self,
        job_repository: IJobRepository,
        native_index: Optional[INativeVectorIndex] = None,
    ):
        self.job_repository = job_repository
        self.native_index = native_index

    async def retrieve(
        self,
        query_vector: Optional[Sequence[float]],
        limit: int,
        candidate_pool_size: int,
        min_score: Optional[float] = None,
    ) -> RetrievalResult:
        """
        Return at most ``limit`` hits sorted by descending score.

        The native index is tried first. If it is unavailable or returns
        no rows at all, an exhaustive scan runs instead. Native rows that
        all fall under ``min_score`` give an empty native result. Other
        index failures propagate to the caller.
        """
        if not query_vector or limit <= 0:
            return RetrievalResult(hits=[], strategy=RetrievalStrategy.BRUTE_FORCE)

        vector = [float(value) for value in query_vector]

        if self.native_index is not None:
            native_hits = await self._query_native(vector, limit, candidate_pool_size, min_score)
            if native_hits is not None:
                logger.info(
                    "Vector retrieval completed",
                    strategy=RetrievalStrategy.NATIVE_INDEX.value,
                    hits=len(native_hits),
                )
                return RetrievalResult(hits=native_hits, strategy=RetrievalStrategy.NATIVE_INDEX)

        hits = await self._brute_force(vector, limit, min_score)
        logger.info(
            "Vector retrieval completed",
            strategy=RetrievalStrategy.BRUTE_FORCE.value,
            hits=len(hits),
        )
        return RetrievalResult(hits=hits, strategy=RetrievalStrategy.BRUTE_FORCE)

    async def _query_native(
        self,
        vector: List[float],
        limit: int,
        candidate_pool_size: int,
        min_score: Optional[float],
    ) -> Optional[List[RetrievalHit]]:
        """Ranked native hits, or None when the index cannot serve the query."""
        pool_size = max(candidate_pool_size, limit)
        try:
            raw_hits = await self.native_index.query(
                vector,
                pool_size=pool_size,
                limit=limit,
                status=JobStatus.ACTIVE,
            )
        except RetrievalDegradedError as exc:
            logger.warning(
                "Native vector index unavailable, falling back to brute force",
                reason=str(exc),
            )
            return None

        # Only an empty index answer degrades; hits under the floor are a real empty result
        if not raw_hits:
            logger.warning("Native vector index returned no results, falling back to brute force")
            return None

        hits = [
            replace(hit, score=finite_score(hit.score))
            for hit in raw_hits
            if hit.job.is_retrievable()
        ]
        if min_score is not None:
            hits = [hit for hit in hits if hit.score >= min_score]
        return sorted(hits, key=lambda hit: hit.score, reverse=True)[:limit]

    async def _brute_force(
        self,
        vector: List[float],
        limit: int,
        min_score: Optional[float],
    ) -> List[RetrievalHit]:
        jobs = await self.job_repository.find_active_embedded()
        logger.debug("Brute-force scan started", candidates=len(jobs))
        return await asyncio.to_thread(rank_by_cosine, vector, jobs, limit, min_score)


__all__ = [
    "RetrievalStrategy",
    "RetrievalResult",
    "VectorRetriever",
    "cosine_scores",
    "finite_score",
    "rank_by_cosine",
]

"""Application layer orchestrator for job matching workflows following hexagonal architecture."""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, List, Optional, Sequence
from uuid import UUID

import structlog

from app.application.search.vector_retriever import VectorRetriever
from app.core.config import Settings, get_settings
from app.domain.entities.candidate_profile import CandidateProfile
from app.domain.entities.match import (
    NO_SIMILARITY_SCORE,
    MatchOutcome,
    MatchResult,
    MatchType,
    RetrievalHit,
)
from app.domain.exceptions import (
    EmbeddingGenerationError,
    FileSizeExceededError,
    ValidationError,
)
from app.domain.services.lexical_matcher import build_search_terms

if TYPE_CHECKING:
    from app.application.dependencies.matching_dependencies import MatchingDependencies


logger = structlog.get_logger(__name__)

NO_PROFILE_MESSAGE = "No CV uploaded yet. Upload a CV to get matches."
UPLOAD_RECENT_ONLY_MESSAGE = "No personalized matches. Showing recent listings."
UPLOAD_PARTIAL_MESSAGE = "CV processed. Some jobs are recent listings (no similarity score)."
UPLOAD_MATCHED_MESSAGE = "CV processed and matches retrieved"
PROFILE_PARTIAL_MESSAGE = "Matches retrieved. Some are recent listings."
PROFILE_MATCHED_MESSAGE = "Matches retrieved"


class TextSearchMode(str, Enum):
    """Primary (semantic) or explicit secondary (keyword) text search."""

    SEMANTIC = "semantic"
    KEYWORD = "keyword"


class MatchingApplicationService:
    """Coordinates text search and CV matching across retrieval strategies.

    The service owns ordering and policy only:
    - extract, embed, persist, retrieve and augment run strictly in sequence
    - retrieval degradation is absorbed by the retriever
    - unrecoverable failures surface as domain exceptions
    """

    def __init__(self, dependencies: MatchingDependencies, settings: Optional[Settings] = None) -> None:
        """Initialize with injected dependencies.

        Args:
            dependencies: All required services and repositories
            settings: Optional settings override, defaults to the cached settings
        """
        self._deps = dependencies
        self._settings = settings or get_settings()
        self._retriever = VectorRetriever(
            job_repository=dependencies.job_repository,
            native_index=dependencies.native_index,
        )

    @property
    def deps(self) -> MatchingDependencies:
        return self._deps

    def normalize_limit(self, limit: Optional[int]) -> int:
        """Missing or non-positive limits use the default; everything is capped."""
        if limit is None or limit < 1:
            limit = self._settings.MATCH_DEFAULT_LIMIT
        return min(limit, self._settings.MATCH_MAX_LIMIT)

    # ------------------------------------------------------------------
    # Text search
    # ------------------------------------------------------------------

    async def search_by_text(
        self,
        query: str,
        mode: TextSearchMode = TextSearchMode.SEMANTIC,
    ) -> List[MatchResult]:
        """Ranked jobs for a free-text query, falling back to keyword matching."""
        query = (query or "").strip()
        if not query:
            raise ValidationError("Search query is required")

        if TextSearchMode(mode) == TextSearchMode.KEYWORD:
            return await self._search_lexical(query)

        vector = None
        try:
            vector = await self._deps.embedding_provider.generate_embedding(query)
        except EmbeddingGenerationError as exc:
            logger.warning("Query embedding failed, using keyword search", error=str(exc))

        if not vector:
            return await self._search_lexical(query)

        embedded_jobs = await self._deps.job_repository.count_active_embedded()
        if embedded_jobs == 0:
            logger.warning("No embedded jobs available, using keyword search")
            return await self._search_lexical(query)

        result = await self._retriever.retrieve(
            vector,
            limit=self._settings.SEARCH_MAX_RESULTS,
            candidate_pool_size=self._settings.VECTOR_CANDIDATE_POOL_SIZE,
            min_score=self._settings.SEARCH_SIMILARITY_THRESHOLD,
        )
        hits = self._deps.augmenter.dedupe(result.hits)

        logger.info(
            "Semantic search completed",
            strategy=result.strategy.value,
            results=len(hits),
        )
        return self._build_results(hits, query)

    async def _search_lexical(self, query: str) -> List[MatchResult]:
        terms = build_search_terms(query)
        jobs = await self._deps.job_repository.search_active_by_terms(
            terms, self._settings.LEXICAL_MAX_RESULTS
        )
        hits = [
            RetrievalHit(job=job, score=NO_SIMILARITY_SCORE, match_type=MatchType.KEYWORD)
            for job in jobs
        ]
        hits = self._deps.augmenter.dedupe(hits)[: self._settings.LEXICAL_MAX_RESULTS]

        logger.info("Keyword search completed", terms=len(terms), results=len(hits))
        return self._build_results(hits, query)

    # ------------------------------------------------------------------
    # CV matching
    # ------------------------------------------------------------------

    async def match_from_profile(self, user_id: UUID, limit: Optional[int] = None) -> MatchOutcome:
        """Matches for the user's stored CV without a new upload."""
        limit = self.normalize_limit(limit)

        profile = await self._deps.profile_repository.find_latest_by_user(user_id)
        if profile is None or not profile.has_embedding:
            logger.info("No candidate profile found", user_id=str(user_id))
            return MatchOutcome(matches=[], semantic_count=0, fallback=False, message=NO_PROFILE_MESSAGE)

        return await self._match_profile(profile, limit, fresh_upload=False)

    async def match_from_upload(
        self,
        user_id: UUID,
        file_bytes: bytes,
        media_type: Optional[str],
        limit: Optional[int] = None,
        original_filename: Optional[str] = None,
    ) -> MatchOutcome:
        """Process an uploaded CV, replace the stored profile and return matches.

        A failed profile write aborts the request before any retrieval.
        """
        limit = self.normalize_limit(limit)

        if not file_bytes:
            raise ValidationError('No CV file uploaded. Use field name "cv" and PDF or DOCX.')
        if len(file_bytes) > self._settings.MAX_FILE_SIZE:
            raise FileSizeExceededError(len(file_bytes), self._settings.MAX_FILE_SIZE, original_filename)

        logger.info(
            "CV upload received",
            user_id=str(user_id),
            media_type=media_type,
            file_size=len(file_bytes),
        )

        text = await self._deps.document_extractor.extract(file_bytes, media_type or "")

        embedding = await self._deps.embedding_provider.generate_embedding(text)
        if not embedding:
            raise EmbeddingGenerationError("Failed to generate CV embedding.")

        profile = CandidateProfile.from_upload(
            user_id,
            text,
            embedding,
            self._deps.augmenter.extract_skill_tags(text),
            original_filename=original_filename,
            max_text_length=self._settings.CV_MAX_TEXT_LENGTH,
        )
        saved = await self._deps.profile_repository.upsert(profile)
        logger.info(
            "Candidate profile stored",
            user_id=str(user_id),
            skills=len(saved.extracted_skills),
            text_length=len(saved.extracted_text),
        )

        return await self._match_profile(saved, limit, fresh_upload=True)

    async def _match_profile(self, profile: CandidateProfile, limit: int, *, fresh_upload: bool) -> MatchOutcome:
        result = await self._retriever.retrieve(
            profile.embedding,
            limit=limit,
            candidate_pool_size=self._settings.VECTOR_CANDIDATE_POOL_SIZE,
        )
        semantic_hits = self._deps.augmenter.dedupe(result.hits)[:limit]
        semantic_count = len(semantic_hits)

        min_results = min(self._settings.MATCH_MIN_RESULTS, limit)
        hits = semantic_hits
        if semantic_count < min_results:
            recent_jobs = await self._deps.job_repository.find_recent_active(limit + semantic_count)
            hits = self._deps.augmenter.pad(semantic_hits, min_results, limit, recent_jobs)
        padded_count = len(hits) - semantic_count

        if semantic_count == 0:
            logger.warning(
                "No semantic matches for profile",
                user_id=str(profile.user_id),
                embedding_dimension=len(profile.embedding),
            )

        matches = self._build_results(hits, profile.extracted_text)
        fallback = padded_count > 0

        logger.info(
            "Profile matching completed",
            user_id=str(profile.user_id),
            strategy=result.strategy.value,
            semantic_count=semantic_count,
            padded_count=padded_count,
            total=len(matches),
        )
        return MatchOutcome(
            matches=matches,
            semantic_count=semantic_count,
            fallback=fallback,
            message=self._outcome_message(fresh_upload, fallback, semantic_count),
        )

    @staticmethod
    def _outcome_message(fresh_upload: bool, fallback: bool, semantic_count: int) -> str:
        if not fresh_upload:
            return PROFILE_PARTIAL_MESSAGE if fallback else PROFILE_MATCHED_MESSAGE
        if not fallback:
            return UPLOAD_MATCHED_MESSAGE
        return UPLOAD_RECENT_ONLY_MESSAGE if semantic_count == 0 else UPLOAD_PARTIAL_MESSAGE

    def _build_results(self, hits: Sequence[RetrievalHit], source_text: str) -> List[MatchResult]:
        percentages = self._deps.normalizer.normalize([hit.score for hit in hits])
        return [
            MatchResult.from_hit(
                hit,
                normalized_score=percentage,
                matching_skills=self._deps.augmenter.highlight(source_text, hit.job.skills),
            )
            for hit, percentage in zip(hits, percentages)
        ]


__all__ = [
    "MatchingApplicationService",
    "TextSearchMode",
    "NO_PROFILE_MESSAGE",
]

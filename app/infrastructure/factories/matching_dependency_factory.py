"""Concrete factory for creating MatchingApplicationService dependencies."""

from __future__ import annotations

from app.application.dependencies import IMatchingDependencyFactory, MatchingDependencies
from app.core.config import get_settings
from app.domain.services.result_augmenter import ResultAugmenter
from app.domain.services.score_normalizer import ScoreNormalizer
from app.infrastructure.providers.ai_provider import get_embedding_service
from app.infrastructure.providers.document_provider import get_document_extractor
from app.infrastructure.providers.repository_provider import (
    get_candidate_profile_repository,
    get_job_repository,
)
from app.infrastructure.providers.search_provider import get_native_vector_index


class MatchingDependencyFactory(IMatchingDependencyFactory):
    """Concrete factory for creating matching dependencies using current providers."""

    async def create_dependencies(self) -> MatchingDependencies:
        """Create and return matching dependencies."""
        settings = get_settings()

        # Repository implementations (via providers for singleton pattern)
        job_repository = await get_job_repository()
        profile_repository = await get_candidate_profile_repository()

        # Service implementations
        embedding_provider = await get_embedding_service()
        document_extractor = await get_document_extractor()
        native_index = await get_native_vector_index() if settings.VECTOR_INDEX_ENABLED else None

        return MatchingDependencies(
            # Repositories
            job_repository=job_repository,
            profile_repository=profile_repository,

            # Services
            embedding_provider=embedding_provider,
            document_extractor=document_extractor,
            native_index=native_index,

            # Domain services
            augmenter=ResultAugmenter(skill_tag_limit=settings.SKILL_TAG_LIMIT),
            normalizer=ScoreNormalizer(),
        )


# Singleton instance for global usage
_matching_dependency_factory: MatchingDependencyFactory | None = None


async def get_matching_dependency_factory() -> MatchingDependencyFactory:
    """Get singleton instance of matching dependency factory."""
    global _matching_dependency_factory
    if _matching_dependency_factory is None:
        _matching_dependency_factory = MatchingDependencyFactory()
    return _matching_dependency_factory


async def get_matching_dependencies() -> MatchingDependencies:
    """Helper function to get matching dependencies directly."""
    factory = await get_matching_dependency_factory()
    return await factory.create_dependencies()


__all__ = ["MatchingDependencyFactory", "get_matching_dependency_factory", "get_matching_dependencies"]

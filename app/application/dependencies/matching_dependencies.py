"""Dependencies interface for MatchingApplicationService."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Optional

from app.domain.interfaces import (
    IDocumentExtractor,
    IEmbeddingProvider,
    INativeVectorIndex,
)
from app.domain.repositories.candidate_profile_repository import ICandidateProfileRepository
from app.domain.repositories.job_repository import IJobRepository
from app.domain.services.result_augmenter import ResultAugmenter
from app.domain.services.score_normalizer import ScoreNormalizer


@dataclass
class MatchingDependencies:
    """Dependencies required by MatchingApplicationService."""

    # Repositories (domain layer)
    job_repository: IJobRepository
    profile_repository: ICandidateProfileRepository

    # Services (infrastructure layer)
    embedding_provider: IEmbeddingProvider
    document_extractor: IDocumentExtractor
    native_index: Optional[INativeVectorIndex] = None

    # Pure domain services
    augmenter: ResultAugmenter = field(default_factory=ResultAugmenter)
    normalizer: ScoreNormalizer = field(default_factory=ScoreNormalizer)


class IMatchingDependencyFactory(ABC):
    """Abstract factory for creating matching dependencies."""

    @abstractmethod
    async def create_dependencies(self) -> MatchingDependencies:
        """Create and return matching dependencies."""
        pass

"""Domain-layer service interfaces.

These abstractions define the stable contracts that the application layer relies on,
while infrastructure adapters provide concrete implementations.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from app.domain.entities.job_posting import JobStatus
from app.domain.entities.match import RetrievalHit


class IHealthCheck:
    """Health check interface mixin."""

    @abstractmethod
    async def check_health(self) -> Dict[str, Any]:
        """Return health check details."""
        pass


class IEmbeddingProvider(IHealthCheck, ABC):
    """Text to vector encoder shared by every request."""

    @abstractmethod
    async def generate_embedding(self, text: str) -> Optional[List[float]]:
        """Return the embedding for text, or None when the text is blank.

        Raises EmbeddingUnavailableError when the model cannot be loaded.
        """
        pass

    @property
    @abstractmethod
    def dimension(self) -> int:
        """Configured embedding dimension."""
        pass


class IDocumentExtractor(ABC):
    """Turns an uploaded document into normalised plain text."""

    @abstractmethod
    async def extract(self, buffer: bytes, media_type: str) -> str:
        """Extract text.

        Raises UnsupportedMediaTypeError for unknown media types and
        ExtractionError when too little text can be read.
        """
        pass


class INativeVectorIndex(IHealthCheck, ABC):
    """Optional approximate nearest-neighbour capability of the document store."""

    @abstractmethod
    async def query(
        self,
        vector: List[float],
        pool_size: int,
        limit: int,
        status: JobStatus = JobStatus.ACTIVE,
    ) -> List[RetrievalHit]:
        """Return hits sorted by relevance.

        Raises VectorIndexUnavailableError when the capability is absent or
        misconfigured; any other exception is a genuine failure.
        """
        pass


__all__ = [
    "IHealthCheck",
    "IEmbeddingProvider",
    "IDocumentExtractor",
    "INativeVectorIndex",
]

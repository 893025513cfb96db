"""
Errors raised by the matching domain and its ports.

The API layer translates them into HTTP responses; nothing here knows about HTTP.
"""

from typing import Iterable, Optional

_MB = 1024 * 1024


class DomainException(Exception):
    """Root of every error the matching service raises on purpose."""


class ValidationError(DomainException):
    """Caller input is unusable as given (blank query, bad limit, empty upload)."""


class UnsupportedMediaTypeError(ValidationError):
    """Upload is neither PDF nor Word."""

    def __init__(self, media_type: Optional[str] = None, allowed: Iterable[str] = ()):
        self.media_type = media_type
        self.allowed = tuple(allowed)
        super().__init__(f"Unsupported file type: {media_type or 'unknown'}. Use PDF or DOCX.")


class FileSizeExceededError(ValidationError):
    """Upload is larger than MAX_FILE_SIZE."""

    def __init__(self, actual_size: int, max_size: int, filename: Optional[str] = None):
        self.actual_size = actual_size
        self.max_size = max_size
        self.filename = filename

        label = f"CV '{filename}'" if filename else "CV"
        super().__init__(
            f"{label} is {actual_size / _MB:.2f}MB; uploads are limited to {max_size / _MB:.2f}MB"
        )


class ProcessingError(DomainException):
    """Input was valid but could not be turned into something searchable."""


class ExtractionError(ProcessingError):
    """Too little readable text came out of a document."""


class EmbeddingGenerationError(ProcessingError):
    """The model failed to encode text or returned a vector of the wrong size."""


class EmbeddingUnavailableError(EmbeddingGenerationError):
    """The embedding model could not be loaded."""


class RetrievalDegradedError(DomainException):
    """A retrieval strategy cannot run and its fallback should take over."""


class VectorIndexUnavailableError(RetrievalDegradedError):
    """pgvector, the HNSW index, or the cosine operator is missing or disabled."""


class PersistenceError(DomainException):
    """A candidate profile write did not reach the database."""


__all__ = [
    "DomainException",
    "ValidationError",
    "UnsupportedMediaTypeError",
    "FileSizeExceededError",
    "ProcessingError",
    "ExtractionError",
    "EmbeddingGenerationError",
    "EmbeddingUnavailableError",
    "RetrievalDegradedError",
    "VectorIndexUnavailableError",
    "PersistenceError",
]

"""
FastAPI wiring for the matching application service.

Routers depend on ``MatchingServiceDep`` and translate domain exceptions with
``map_domain_exception_to_http``.
"""

from typing import Annotated

import structlog
from fastapi import Depends, HTTPException

from app.application.matching_service import MatchingApplicationService
from app.domain.exceptions import (
    DomainException,
    EmbeddingGenerationError,
    ExtractionError,
    FileSizeExceededError,
    PersistenceError,
    ProcessingError,
    UnsupportedMediaTypeError,
    ValidationError,
)
from app.infrastructure.factories.matching_dependency_factory import (
    get_matching_dependencies,
)

logger = structlog.get_logger(__name__)


async def get_matching_service() -> MatchingApplicationService:
    try:
        dependencies = await get_matching_dependencies()
    except Exception as e:
        logger.error("Matching dependencies could not be assembled", error=str(e))
        raise HTTPException(status_code=500, detail="Matching service unavailable") from e
    return MatchingApplicationService(dependencies)


MatchingServiceDep = Annotated[MatchingApplicationService, Depends(get_matching_service)]


def map_domain_exception_to_http(exception: Exception) -> HTTPException:
    """Status code and client-safe detail for an exception raised by the service layer."""

    # Subclasses of ValidationError come first so they keep their own status
    if isinstance(exception, UnsupportedMediaTypeError):
        return HTTPException(status_code=415, detail=str(exception))

    elif isinstance(exception, FileSizeExceededError):
        return HTTPException(status_code=413, detail=str(exception))

    elif isinstance(exception, ValidationError):
        return HTTPException(status_code=400, detail=str(exception))

    elif isinstance(exception, (ExtractionError, EmbeddingGenerationError, ProcessingError)):
        return HTTPException(status_code=422, detail=str(exception))

    elif isinstance(exception, PersistenceError):
        logger.error("Candidate profile write failed", error=str(exception))
        return HTTPException(status_code=500, detail="Failed to store candidate profile")

    elif isinstance(exception, DomainException):
        logger.error("Unmapped domain exception", exception_type=type(exception).__name__, error=str(exception))
        return HTTPException(status_code=500, detail="Domain operation failed")

    logger.error("Unexpected exception reached the API layer", exception_type=type(exception).__name__, error=str(exception))
    return HTTPException(status_code=500, detail="Internal server error")


__all__ = [
    "get_matching_service",
    "MatchingServiceDep",
    "map_domain_exception_to_http"
]

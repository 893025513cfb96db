"""Infrastructure provider accessors package."""

from .ai_provider import (  # noqa: F401
    get_embedding_service,
    reset_ai_services,
)
from .document_provider import (  # noqa: F401
    get_document_extractor,
    reset_document_extractor,
)
from .repository_provider import (  # noqa: F401
    get_candidate_profile_repository,
    get_job_repository,
    reset_repositories,
)
from .search_provider import (  # noqa: F401
    get_native_vector_index,
    reset_search_services,
)


async def reset_all_providers() -> None:
    """Drop every cached provider singleton."""
    await reset_ai_services()
    await reset_document_extractor()
    await reset_repositories()
    await reset_search_services()


__all__ = [
    "get_embedding_service",
    "reset_ai_services",
    "get_document_extractor",
    "reset_document_extractor",
    "get_candidate_profile_repository",
    "get_job_repository",
    "reset_repositories",
    "get_native_vector_index",
    "reset_search_services",
    "reset_all_providers",
]

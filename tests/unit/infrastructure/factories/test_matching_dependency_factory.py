"""Tests for wiring matching dependencies from providers."""

import pytest

from app.core.config import get_settings
from app.infrastructure.ai.embedding_service import SentenceTransformerEmbeddingService
from app.infrastructure.document.content_extractor import DocumentTextExtractor
from app.infrastructure.factories.matching_dependency_factory import get_matching_dependencies
from app.infrastructure.persistence.repositories.candidate_profile_repository import (
    PostgresCandidateProfileRepository,
)
from app.infrastructure.persistence.repositories.job_repository import PostgresJobRepository
from app.infrastructure.providers import get_embedding_service
from app.infrastructure.search.vector_search import PgVectorJobIndex


@pytest.mark.asyncio
async def test_wires_concrete_adapters():
    dependencies = await get_matching_dependencies()

    assert isinstance(dependencies.job_repository, PostgresJobRepository)
    assert isinstance(dependencies.profile_repository, PostgresCandidateProfileRepository)
    assert isinstance(dependencies.embedding_provider, SentenceTransformerEmbeddingService)
    assert isinstance(dependencies.document_extractor, DocumentTextExtractor)
    assert isinstance(dependencies.native_index, PgVectorJobIndex)


@pytest.mark.asyncio
async def test_embedding_service_shared_across_requests():
    first = await get_matching_dependencies()
    second = await get_matching_dependencies()

    assert first.embedding_provider is second.embedding_provider
    assert first.embedding_provider is await get_embedding_service()
    assert not first.embedding_provider.is_loaded


@pytest.mark.asyncio
async def test_native_index_omitted_when_disabled(monkeypatch):
    monkeypatch.setenv("VECTOR_INDEX_ENABLED", "false")
    get_settings.cache_clear()

    dependencies = await get_matching_dependencies()

    assert dependencies.native_index is None


@pytest.mark.asyncio
async def test_skill_tag_limit_from_settings(monkeypatch):
    monkeypatch.setenv("SKILL_TAG_LIMIT", "2")
    get_settings.cache_clear()

    dependencies = await get_matching_dependencies()

    assert dependencies.augmenter.skill_tag_limit == 2

"""Pytest fixtures for provider-based architecture."""

from __future__ import annotations

import os
from collections.abc import AsyncIterator

import pytest

os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("EMBEDDING_PRELOAD", "false")

from app.core.config import get_settings  # noqa: E402
from app.infrastructure.providers import reset_all_providers  # noqa: E402


@pytest.fixture(autouse=True)
async def reset_provider_state() -> AsyncIterator[None]:
    """Ensure each test starts with clean provider singletons."""
    get_settings.cache_clear()
    await reset_all_providers()
    yield
    await reset_all_providers()
    get_settings.cache_clear()

"""Accessor for the shared sentence-transformers embedding service."""

from __future__ import annotations

import asyncio
from typing import Optional

from app.infrastructure.ai.embedding_service import SentenceTransformerEmbeddingService

_embedding_service: Optional[SentenceTransformerEmbeddingService] = None
_embedding_lock = asyncio.Lock()


async def get_embedding_service() -> SentenceTransformerEmbeddingService:
    """One service per process; constructing it does not load the model."""
    global _embedding_service

    if _embedding_service is None:
        async with _embedding_lock:
            if _embedding_service is None:
                _embedding_service = SentenceTransformerEmbeddingService()
    return _embedding_service


async def reset_ai_services() -> None:
    """Forget the service and with it any loaded model."""
    global _embedding_service
    async with _embedding_lock:
        _embedding_service = None


__all__ = ["get_embedding_service", "reset_ai_services"]

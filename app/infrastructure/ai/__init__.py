"""AI infrastructure services.

This module contains AI-related infrastructure implementations:
- Local sentence-transformers embedding service
"""

from app.infrastructure.ai.embedding_service import SentenceTransformerEmbeddingService

__all__ = [
    "SentenceTransformerEmbeddingService",
]

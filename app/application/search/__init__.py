"""
Search Application Services

Components:
- VectorRetriever: native index retrieval with brute-force cosine fallback
"""

from app.application.search.vector_retriever import (
    RetrievalResult,
    RetrievalStrategy,
    VectorRetriever,
)

__all__ = [
    "RetrievalResult",
    "RetrievalStrategy",
    "VectorRetriever",
]

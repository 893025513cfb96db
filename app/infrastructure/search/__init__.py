"""
Infrastructure Search Services

- PgVectorJobIndex: pgvector HNSW index adapter over job embeddings
"""

from app.infrastructure.search.vector_search import PgVectorJobIndex

__all__ = [
    "PgVectorJobIndex",
]

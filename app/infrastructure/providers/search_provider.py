"""Provider for the native vector index adapter."""

from __future__ import annotations

import asyncio
from typing import Optional

from app.database.sqlmodel_engine import get_sqlmodel_db_manager
from app.infrastructure.search.vector_search import PgVectorJobIndex

_native_vector_index: Optional[PgVectorJobIndex] = None
_index_lock = asyncio.Lock()


async def get_native_vector_index() -> PgVectorJobIndex:
    """Return the pgvector-backed job index (disabled instances report unavailable)."""
    global _native_vector_index

    if _native_vector_index is not None:
        return _native_vector_index

    async with _index_lock:
        if _native_vector_index is not None:
            return _native_vector_index

        _native_vector_index = PgVectorJobIndex(db_manager=get_sqlmodel_db_manager())
        return _native_vector_index


async def reset_search_services() -> None:
    global _native_vector_index
    async with _index_lock:
        _native_vector_index = None


__all__ = ["get_native_vector_index", "reset_search_services"]

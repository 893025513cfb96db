"""Provider utilities for document processing services."""

from __future__ import annotations

import asyncio
from typing import Optional

from app.infrastructure.document.content_extractor import DocumentTextExtractor

_document_extractor: Optional[DocumentTextExtractor] = None
_extractor_lock = asyncio.Lock()


async def get_document_extractor() -> DocumentTextExtractor:
    """Return singleton CV text extractor."""
    global _document_extractor

    if _document_extractor is not None:
        return _document_extractor

    async with _extractor_lock:
        if _document_extractor is not None:
            return _document_extractor

        _document_extractor = DocumentTextExtractor()
        return _document_extractor


async def reset_document_extractor() -> None:
    global _document_extractor
    async with _extractor_lock:
        _document_extractor = None


__all__ = ["get_document_extractor", "reset_document_extractor"]

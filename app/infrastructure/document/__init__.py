"""Infrastructure layer document processing services."""

from app.infrastructure.document.content_extractor import (
    DocumentTextExtractor,
    clean_extracted_text,
)

__all__ = [
    "DocumentTextExtractor",
    "clean_extracted_text",
]

"""
CV text extraction for PDF and Word uploads.

Parsing runs in a worker thread; the extracted text is normalised into a
single whitespace-collapsed string ready for embedding.
"""

import asyncio
import io
import re
from typing import Dict, List, Mapping, Optional

import docx
import structlog
from PyPDF2 import PdfReader

from app.core.config import get_settings
from app.core.system_constants import CV_MEDIA_TYPES
from app.domain.exceptions import ExtractionError, UnsupportedMediaTypeError
from app.domain.interfaces import IDocumentExtractor

logger = structlog.get_logger(__name__)

_BLANK_LINES = re.compile(r"\n{3,}")
_WHITESPACE = re.compile(r"\s+")

INSUFFICIENT_TEXT_MESSAGE = (
    "Could not extract enough text from the document. "
    "Ensure the file is a valid PDF or DOCX with readable text."
)


def clean_extracted_text(raw: Optional[str], max_length: int = 30000) -> str:
    """Normalise line endings, collapse whitespace, trim and cap length."""
    if not raw or not isinstance(raw, str):
        return ""

    text = raw.replace("\r\n", "\n").replace("\r", "\n")
    text = _BLANK_LINES.sub("\n\n", text)
    text = _WHITESPACE.sub(" ", text)
    return text.strip()[:max_length]


class DocumentTextExtractor(IDocumentExtractor):
    """Extracts plain text from CV documents."""

    def __init__(
        self,
        min_text_length: Optional[int] = None,
        max_text_length: Optional[int] = None,
        media_types: Optional[Mapping[str, str]] = None,
    ):
        settings = get_settings()
        self.min_text_length = min_text_length if min_text_length is not None else settings.CV_MIN_TEXT_LENGTH
        self.max_text_length = max_text_length if max_text_length is not None else settings.CV_MAX_TEXT_LENGTH
        self.media_types: Dict[str, str] = dict(media_types or CV_MEDIA_TYPES)

    async def extract(self, buffer: bytes, media_type: str) -> str:
        """
        Extract and clean text from an uploaded document.

        Args:
            buffer: Raw file content
            media_type: Declared MIME type of the upload

        Returns:
            Cleaned text of at least ``min_text_length`` characters
        """
        document_kind = self.media_types.get((media_type or "").lower())
        if document_kind is None:
            raise UnsupportedMediaTypeError(media_type, tuple(self.media_types))

        if not buffer:
            raise ExtractionError(INSUFFICIENT_TEXT_MESSAGE)

        if document_kind == "pdf":
            raw_text = await asyncio.to_thread(self._read_pdf, buffer)
        else:
            raw_text = await asyncio.to_thread(self._read_word, buffer)

        text = clean_extracted_text(raw_text, self.max_text_length)
        if len(text) < self.min_text_length:
            logger.warning(
                "Insufficient text extracted from document",
                document_kind=document_kind,
                text_length=len(text),
                min_text_length=self.min_text_length,
            )
            raise ExtractionError(INSUFFICIENT_TEXT_MESSAGE)

        logger.debug("Document text extracted", document_kind=document_kind, text_length=len(text))
        return text

    @staticmethod
    def _read_pdf(content: bytes) -> str:
        try:
            pdf_reader = PdfReader(io.BytesIO(content))
            pages: List[str] = []
            for page in pdf_reader.pages:
                pages.append(page.extract_text() or "")
        except Exception as e:
            logger.warning("PDF processing failed", error=str(e))
            raise ExtractionError(INSUFFICIENT_TEXT_MESSAGE) from e
        return "\n".join(pages)

    @staticmethod
    def _read_word(content: bytes) -> str:
        # Legacy .doc binaries are not readable by python-docx and fail here
        try:
            document = docx.Document(io.BytesIO(content))
        except Exception as e:
            logger.warning("Word processing failed", error=str(e))
            raise ExtractionError(INSUFFICIENT_TEXT_MESSAGE) from e

        lines = [paragraph.text for paragraph in document.paragraphs]
        for table in document.tables:
            for row in table.rows:
                lines.append(" ".join(cell.text for cell in row.cells))
        return "\n".join(lines)


__all__ = ["DocumentTextExtractor", "clean_extracted_text"]

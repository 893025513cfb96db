"""Tests for CV text extraction."""

import io
from unittest.mock import MagicMock, patch

import docx
import pytest

from app.domain.exceptions import ExtractionError, UnsupportedMediaTypeError
from app.infrastructure.document.content_extractor import DocumentTextExtractor, clean_extracted_text

PDF = "application/pdf"
DOCX = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
READER_PATH = "app.infrastructure.document.content_extractor.PdfReader"

LONG_TEXT = "Senior Python developer with extensive experience in SQL and cloud platforms."


def _docx_bytes(*paragraphs, table_rows=()):
    document = docx.Document()
    for paragraph in paragraphs:
        document.add_paragraph(paragraph)
    if table_rows:
        table = document.add_table(rows=len(table_rows), cols=len(table_rows[0]))
        for row_index, row in enumerate(table_rows):
            for col_index, value in enumerate(row):
                table.cell(row_index, col_index).text = value
    buffer = io.BytesIO()
    document.save(buffer)
    return buffer.getvalue()


def _pdf_reader(*page_texts):
    reader = MagicMock()
    pages = []
    for page_text in page_texts:
        page = MagicMock()
        page.extract_text.return_value = page_text
        pages.append(page)
    reader.pages = pages
    return reader


@pytest.fixture
def extractor():
    return DocumentTextExtractor(min_text_length=50, max_text_length=30000)


class TestCleanExtractedText:

    def test_collapses_whitespace_and_trims(self):
        assert clean_extracted_text("  Python\r\n\r\n\r\n\tSQL   Docker \n") == "Python SQL Docker"

    def test_caps_length(self):
        assert clean_extracted_text("a" * 100, max_length=10) == "a" * 10

    @pytest.mark.parametrize("raw", [None, "", 42])
    def test_empty_or_non_text(self, raw):
        assert clean_extracted_text(raw) == ""


class TestWordExtraction:

    @pytest.mark.asyncio
    async def test_extracts_paragraphs_and_tables(self, extractor):
        content = _docx_bytes(LONG_TEXT, "Languages:", table_rows=[("French", "Fluent")])

        text = await extractor.extract(content, DOCX)

        assert text.startswith("Senior Python developer")
        assert "Languages:" in text
        assert "French Fluent" in text
        assert "\n" not in text

    @pytest.mark.asyncio
    async def test_short_document_rejected(self, extractor):
        with pytest.raises(ExtractionError, match="Could not extract enough text"):
            await extractor.extract(_docx_bytes("Too short"), DOCX)

    @pytest.mark.asyncio
    async def test_corrupt_word_file_rejected(self, extractor):
        with pytest.raises(ExtractionError):
            await extractor.extract(b"definitely not a zip archive", DOCX)


class TestPdfExtraction:

    @pytest.mark.asyncio
    async def test_joins_pages(self, extractor):
        with patch(READER_PATH, return_value=_pdf_reader(LONG_TEXT, None, "Page three")):
            text = await extractor.extract(b"%PDF-1.4", PDF)

        assert text == f"{LONG_TEXT} Page three"

    @pytest.mark.asyncio
    async def test_media_type_is_case_insensitive(self, extractor):
        with patch(READER_PATH, return_value=_pdf_reader(LONG_TEXT)):
            text = await extractor.extract(b"%PDF-1.4", "Application/PDF")

        assert text == LONG_TEXT

    @pytest.mark.asyncio
    async def test_unreadable_pdf_rejected(self, extractor):
        with patch(READER_PATH, side_effect=ValueError("EOF marker not found")):
            with pytest.raises(ExtractionError):
                await extractor.extract(b"%PDF-broken", PDF)

    @pytest.mark.asyncio
    async def test_scanned_pdf_without_text_rejected(self, extractor):
        with patch(READER_PATH, return_value=_pdf_reader("", "  ")):
            with pytest.raises(ExtractionError):
                await extractor.extract(b"%PDF-1.4", PDF)

    @pytest.mark.asyncio
    async def test_text_capped_at_max_length(self):
        extractor = DocumentTextExtractor(min_text_length=5, max_text_length=20)

        with patch(READER_PATH, return_value=_pdf_reader(LONG_TEXT)):
            text = await extractor.extract(b"%PDF-1.4", PDF)

        assert len(text) == 20


class TestMediaTypes:

    @pytest.mark.asyncio
    @pytest.mark.parametrize("media_type", ["image/png", "text/plain", "", None])
    async def test_unsupported_type_rejected_before_parsing(self, extractor, media_type):
        with patch(READER_PATH) as reader_cls:
            with pytest.raises(UnsupportedMediaTypeError):
                await extractor.extract(b"%PDF-1.4", media_type)

        reader_cls.assert_not_called()

    @pytest.mark.asyncio
    async def test_empty_buffer_rejected(self, extractor):
        with pytest.raises(ExtractionError):
            await extractor.extract(b"", PDF)

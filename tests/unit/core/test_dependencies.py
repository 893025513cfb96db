"""Tests for identity resolution and domain exception mapping."""

from unittest.mock import MagicMock
from uuid import uuid4

import pytest
from fastapi import HTTPException

from app.api.dependencies import map_domain_exception_to_http
from app.core.config import Settings
from app.core.dependencies import get_current_user_id
from app.domain.exceptions import (
    DomainException,
    EmbeddingGenerationError,
    EmbeddingUnavailableError,
    ExtractionError,
    FileSizeExceededError,
    PersistenceError,
    UnsupportedMediaTypeError,
    ValidationError,
)


def _request(headers):
    request = MagicMock()
    request.headers = headers
    return request


class TestCurrentUserId:

    @pytest.mark.asyncio
    async def test_reads_configured_header(self):
        user_id = uuid4()
        settings = Settings(ENVIRONMENT="test", USER_ID_HEADER="X-Gateway-User")

        resolved = await get_current_user_id(_request({"X-Gateway-User": f" {user_id} "}), settings)

        assert resolved == user_id

    @pytest.mark.asyncio
    @pytest.mark.parametrize("headers, detail", [({}, "Authentication required"), ({"X-User-Id": "abc"}, "Invalid user identity")])
    async def test_missing_or_invalid_identity(self, headers, detail):
        with pytest.raises(HTTPException) as exc_info:
            await get_current_user_id(_request(headers), Settings(ENVIRONMENT="test"))

        assert exc_info.value.status_code == 401
        assert exc_info.value.detail == detail


class TestDomainExceptionMapping:

    @pytest.mark.parametrize(
        "exception, status_code",
        [
            (UnsupportedMediaTypeError("image/png"), 415),
            (FileSizeExceededError(20 * 1024 * 1024, 10 * 1024 * 1024, "cv.pdf"), 413),
            (ValidationError("bad input"), 400),
            (ExtractionError("too short"), 422),
            (EmbeddingGenerationError("no vector"), 422),
            (EmbeddingUnavailableError("model offline"), 422),
            (PersistenceError("write failed"), 500),
            (DomainException("other"), 500),
            (RuntimeError("boom"), 500),
        ],
    )
    def test_status_codes(self, exception, status_code):
        assert map_domain_exception_to_http(exception).status_code == status_code

    def test_persistence_details_not_leaked(self):
        http_exc = map_domain_exception_to_http(PersistenceError("password=secret"))

        assert http_exc.detail == "Failed to store candidate profile"

    def test_file_size_message(self):
        http_exc = map_domain_exception_to_http(FileSizeExceededError(20 * 1024 * 1024, 10 * 1024 * 1024))

        assert "limited to 10.00MB" in http_exc.detail

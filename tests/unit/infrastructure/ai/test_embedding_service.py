"""Tests for the sentence-transformers embedding service."""

import asyncio

import pytest

pytest.importorskip("numpy")
from unittest.mock import MagicMock, patch
import numpy as np

from app.domain.exceptions import EmbeddingGenerationError, EmbeddingUnavailableError
from app.infrastructure.ai.embedding_service import SentenceTransformerEmbeddingService

MODEL_PATH = "app.infrastructure.ai.embedding_service.SentenceTransformer"


@pytest.fixture
def mock_model():
    """Model whose encode returns a unit vector of dimension 3."""
    model = MagicMock()
    model.encode.return_value = np.array([0.6, 0.8, 0.0], dtype=np.float32)
    return model


@pytest.fixture
def embedding_service():
    return SentenceTransformerEmbeddingService(model_name="test-model", dimension=3)


class TestEmbeddingGeneration:
    """Test embedding generation."""

    @pytest.mark.asyncio
    async def test_generate_embedding(self, embedding_service, mock_model):
        with patch(MODEL_PATH, return_value=mock_model):
            result = await embedding_service.generate_embedding("python developer")

        assert result == pytest.approx([0.6, 0.8, 0.0])
        assert isinstance(result, list)
        mock_model.encode.assert_called_once()
        assert mock_model.encode.call_args.kwargs["normalize_embeddings"] is True
        assert embedding_service._metrics["embeddings_generated"] == 1

    @pytest.mark.asyncio
    @pytest.mark.parametrize("text", ["", "   ", None])
    async def test_blank_text_returns_none_without_loading(self, embedding_service, text):
        with patch(MODEL_PATH) as model_cls:
            assert await embedding_service.generate_embedding(text) is None

        model_cls.assert_not_called()
        assert not embedding_service.is_loaded

    @pytest.mark.asyncio
    async def test_dimension_mismatch_raises(self, embedding_service, mock_model):
        mock_model.encode.return_value = np.zeros(5)

        with patch(MODEL_PATH, return_value=mock_model):
            with pytest.raises(EmbeddingGenerationError):
                await embedding_service.generate_embedding("text")

    @pytest.mark.asyncio
    async def test_encode_failure_raises(self, embedding_service, mock_model):
        mock_model.encode.side_effect = RuntimeError("cuda out of memory")

        with patch(MODEL_PATH, return_value=mock_model):
            with pytest.raises(EmbeddingGenerationError, match="cuda out of memory"):
                await embedding_service.generate_embedding("text")

        assert embedding_service._metrics["encode_failures"] == 1


class TestModelLoading:
    """Lazy single-flight model loading."""

    @pytest.mark.asyncio
    async def test_concurrent_first_calls_load_once(self, embedding_service, mock_model):
        with patch(MODEL_PATH, return_value=mock_model) as model_cls:
            results = await asyncio.gather(
                *(embedding_service.generate_embedding(f"text {i}") for i in range(10))
            )

        model_cls.assert_called_once_with("test-model")
        assert len(results) == 10
        assert embedding_service._metrics["model_loads"] == 1

    @pytest.mark.asyncio
    async def test_failed_load_is_retried(self, embedding_service, mock_model):
        with patch(MODEL_PATH, side_effect=[OSError("download failed"), mock_model]) as model_cls:
            with pytest.raises(EmbeddingUnavailableError):
                await embedding_service.generate_embedding("text")

            health = await embedding_service.check_health()
            assert health["status"] == "unhealthy"
            assert "download failed" in health["error"]

            result = await embedding_service.generate_embedding("text")

        assert result == pytest.approx([0.6, 0.8, 0.0])
        assert model_cls.call_count == 2
        assert embedding_service.is_loaded

    @pytest.mark.asyncio
    async def test_unavailable_is_an_embedding_error(self, embedding_service):
        with patch(MODEL_PATH, side_effect=OSError("offline")):
            with pytest.raises(EmbeddingGenerationError):
                await embedding_service.warm_up()

    @pytest.mark.asyncio
    async def test_device_passed_when_configured(self, mock_model):
        service = SentenceTransformerEmbeddingService(model_name="test-model", dimension=3, device="cpu")

        with patch(MODEL_PATH, return_value=mock_model) as model_cls:
            await service.warm_up()

        model_cls.assert_called_once_with("test-model", device="cpu")


class TestHealthCheck:

    @pytest.mark.asyncio
    async def test_not_loaded_until_first_use(self, embedding_service):
        health = await embedding_service.check_health()

        assert health["status"] == "not_loaded"
        assert health["dimension"] == 3

    @pytest.mark.asyncio
    async def test_healthy_after_load(self, embedding_service, mock_model):
        with patch(MODEL_PATH, return_value=mock_model):
            await embedding_service.warm_up()

        health = await embedding_service.check_health()
        assert health["status"] == "healthy"
        assert health["loaded"] is True

"""
Local embedding service backed by sentence-transformers.

- Lazy, single-flight model loading shared by every request
- Model load and encoding off the event loop
- Mean-pooled, L2-normalised vectors (cosine-ready)
- Failed loads are forgotten so the next call retries
"""

import asyncio
from datetime import datetime
from typing import Any, Dict, List, Optional

import numpy as np
import structlog
from sentence_transformers import SentenceTransformer

from app.core.config import get_settings
from app.domain.exceptions import EmbeddingGenerationError, EmbeddingUnavailableError
from app.domain.interfaces import IEmbeddingProvider

logger = structlog.get_logger(__name__)


class SentenceTransformerEmbeddingService(IEmbeddingProvider):
    """
    Embedding provider for job and CV text.

    The model is built at most once per process. Concurrent first callers
    await the same load task; a cancelled caller does not cancel the load.
    """

    def __init__(
        self,
        model_name: Optional[str] = None,
        dimension: Optional[int] = None,
        device: Optional[str] = None,
    ):
        self.settings = get_settings()
        self.model_name = model_name or self.settings.EMBEDDING_MODEL_NAME
        self._dimension = dimension or self.settings.EMBEDDING_DIMENSION
        self.device = device if device is not None else self.settings.EMBEDDING_DEVICE

        self._model: Optional[SentenceTransformer] = None
        self._load_task: Optional[asyncio.Task] = None
        self._load_lock = asyncio.Lock()
        self._last_load_error: Optional[str] = None
        self._metrics = {
            "embeddings_generated": 0,
            "model_loads": 0,
            "load_failures": 0,
            "encode_failures": 0,
        }

    @property
    def dimension(self) -> int:
        return self._dimension

    @property
    def is_loaded(self) -> bool:
        return self._model is not None

    async def generate_embedding(self, text: str) -> Optional[List[float]]:
        """
        Embed text with the shared model.

        Args:
            text: Text content to embed

        Returns:
            Normalised embedding, or None for blank text
        """
        if not text or not text.strip():
            return None

        model = await self._get_model()

        try:
            encoded = await asyncio.to_thread(
                model.encode,
                text,
                normalize_embeddings=True,
                convert_to_numpy=True,
                show_progress_bar=False,
            )
        except Exception as e:
            self._metrics["encode_failures"] += 1
            logger.error("Embedding generation failed", model=self.model_name, error=str(e))
            raise EmbeddingGenerationError(f"Failed to generate embedding: {e}") from e

        vector = np.asarray(encoded, dtype=np.float64).ravel()
        if vector.size != self._dimension:
            self._metrics["encode_failures"] += 1
            raise EmbeddingGenerationError(
                f"Model produced {vector.size}-dimensional embedding, expected {self._dimension}"
            )

        self._metrics["embeddings_generated"] += 1
        logger.debug("Generated embedding", text_length=len(text), dimension=int(vector.size))
        return vector.tolist()

    async def warm_up(self) -> None:
        """Load the model ahead of the first request."""
        await self._get_model()

    async def _get_model(self) -> SentenceTransformer:
        if self._model is not None:
            return self._model

        async with self._load_lock:
            if self._model is not None:
                return self._model
            if self._load_task is None:
                self._load_task = asyncio.create_task(self._load_model())
            task = self._load_task

        try:
            return await asyncio.shield(task)
        except EmbeddingUnavailableError:
            async with self._load_lock:
                if self._load_task is task:
                    self._load_task = None
            raise

    async def _load_model(self) -> SentenceTransformer:
        self._metrics["model_loads"] += 1
        started = datetime.now()
        logger.info("Loading embedding model", model=self.model_name, device=self.device)

        try:
            model = await asyncio.to_thread(self._build_model)
        except Exception as e:
            self._metrics["load_failures"] += 1
            self._last_load_error = str(e)
            logger.error("Embedding model failed to load", model=self.model_name, error=str(e))
            raise EmbeddingUnavailableError(
                f"Embedding model '{self.model_name}' could not be loaded"
            ) from e

        self._model = model
        self._last_load_error = None
        logger.info(
            "Embedding model loaded",
            model=self.model_name,
            load_time_ms=int((datetime.now() - started).total_seconds() * 1000),
        )
        return model

    def _build_model(self) -> SentenceTransformer:
        if self.device:
            return SentenceTransformer(self.model_name, device=self.device)
        return SentenceTransformer(self.model_name)

    async def check_health(self) -> Dict[str, Any]:
        """Report model state without forcing a load."""
        if self.is_loaded:
            status = "healthy"
        elif self._last_load_error:
            status = "unhealthy"
        else:
            status = "not_loaded"

        health: Dict[str, Any] = {
            "status": status,
            "model": self.model_name,
            "dimension": self._dimension,
            "loaded": self.is_loaded,
            "loading": self._load_task is not None and not self._load_task.done(),
            "metrics": self._metrics.copy(),
            "timestamp": datetime.now().isoformat(),
        }
        if self._last_load_error:
            health["error"] = self._last_load_error
        return health


__all__ = ["SentenceTransformerEmbeddingService"]

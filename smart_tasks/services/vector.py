"""
Vector Embedding Service

Local embedding generation using sentence-transformers.
Default model: thenlper/gte-small (384 dimensions, mean pooling),
the same model the backend used to embed stored tasks.

Design choices:
    - Singleton pattern: model loaded once, reused across requests.
    - Lazy loading: model downloaded/loaded on first embed call.
    - asyncio.to_thread: model inference is CPU-bound and must not
      block the FastAPI event loop.

Pre-download the model for production:
    python -c "from sentence_transformers import SentenceTransformer; \\
               SentenceTransformer('thenlper/gte-small')"
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, ClassVar

from smart_tasks.core.config import get_settings
from smart_tasks.models.orm import EMBEDDING_DIMENSION

logger = logging.getLogger(__name__)


class VectorService:
    """
    Async embedding service backed by a local sentence-transformers model.

    The model is loaded lazily on first use and cached as a class-level
    singleton. All inference runs in a thread pool to keep the event
    loop responsive. The class itself satisfies the ``Embedder`` port.

    Usage::

        vector = await VectorService.embed_query("buy milk")
        assert len(vector) == 384
    """

    _model: ClassVar[Any] = None

    @classmethod
    def _get_model(cls) -> Any:
        """
        Get or lazily initialize the sentence-transformers model.

        The import is deferred so that ``sentence_transformers`` is not
        required at module-import time (keeps test collection fast).
        """
        if cls._model is None:
            from sentence_transformers import SentenceTransformer

            model_name = get_settings().EMBEDDING_MODEL
            logger.info("Loading embedding model: %s ...", model_name)
            cls._model = SentenceTransformer(model_name)
            logger.info("Model loaded (dim=%d)", EMBEDDING_DIMENSION)
        return cls._model

    @classmethod
    def _encode_sync(cls, texts: list[str]) -> list[list[float]]:
        """
        Synchronous batch encoding.

        Always call via ``asyncio.to_thread``: this is CPU-bound
        and blocks the calling thread for the duration of inference.

        Returns:
            List of 384-dimensional float vectors (L2-normalized).
        """
        model = cls._get_model()
        embeddings = model.encode(texts, normalize_embeddings=True)
        # numpy ndarray → native Python lists for JSON / pgvector
        result: list[list[float]] = embeddings.tolist()
        return result

    @classmethod
    async def embed_texts(cls, texts: list[str]) -> list[list[float]]:
        """
        Generate embeddings for a batch of texts.

        Args:
            texts: Strings to embed (task titles, queries).

        Returns:
            One 384-dimensional vector per input, in input order.
        """
        if not texts:
            return []
        return await asyncio.to_thread(cls._encode_sync, texts)

    @classmethod
    async def embed_query(cls, query: str) -> list[float]:
        """Generate a single embedding for a search query."""
        results = await cls.embed_texts([query])
        return results[0]

    @classmethod
    def reset(cls) -> None:
        """Release the model from memory."""
        cls._model = None
        logger.info("VectorService model released")

"""
Embeddings Module - Single Responsibility: Generate text embeddings.

It has ONE job: convert text to vector embeddings. Anything that goes
wrong on the way (transport error, timeout, a response without a usable
vector) is reported as EmbeddingError so callers see one failure type.
"""

from __future__ import annotations

import hashlib
import os

import numpy as np
from openai import OpenAI, OpenAIError

from meeting_search.core import EmbeddingError, EmbeddingProvider


class OpenAIEmbeddings:
    """
    OpenAI-based embedding provider.

    Uses text-embedding-3-small by default (1536 dimensions).
    Retries are disabled: a failed call is a provider failure, not
    something to paper over.
    """

    def __init__(
        self,
        model: str = "text-embedding-3-small",
        api_key: str | None = None,
        timeout: float = 30.0,
    ):
        self.model = model
        self._client = OpenAI(
            api_key=api_key or os.environ.get("OPENAI_API_KEY"),
            timeout=timeout,
            max_retries=0,
        )

    @property
    def dimensions(self) -> int:
        """Return embedding dimensions for the model."""
        model_dims = {
            "text-embedding-3-small": 1536,
            "text-embedding-3-large": 3072,
            "text-embedding-ada-002": 1536,
        }
        return model_dims.get(self.model, 1536)

    def _create(self, payload: str | list[str]) -> list:
        try:
            response = self._client.embeddings.create(input=payload, model=self.model)
        except OpenAIError as e:
            raise EmbeddingError(f"Embedding request failed: {e}") from e

        data = getattr(response, "data", None)
        if not data:
            raise EmbeddingError("Embedding response contained no data")
        return data

    def embed(self, text: str) -> np.ndarray:
        """Generate embedding for a single text."""
        data = self._create(text)
        return _to_vector(getattr(data[0], "embedding", None))

    def embed_batch(self, texts: list[str]) -> list[np.ndarray]:
        """Generate embeddings for multiple texts efficiently."""
        if not texts:
            return []

        data = self._create(texts)
        if len(data) != len(texts):
            raise EmbeddingError(
                f"Embedding response size mismatch: sent {len(texts)}, got {len(data)}"
            )
        return [_to_vector(getattr(item, "embedding", None)) for item in data]


class MockEmbeddings:
    """
    Mock embedding provider for testing without API calls.

    Generates deterministic unit-length pseudo-embeddings from text hashes.
    NOT for production use - only for testing/development.
    """

    def __init__(self, dimensions: int = 1536):
        self._dimensions = dimensions

    @property
    def dimensions(self) -> int:
        return self._dimensions

    def embed(self, text: str) -> np.ndarray:
        """Generate deterministic pseudo-embedding from text hash."""
        seed = int.from_bytes(hashlib.sha256(text.encode()).digest()[:8], "big")
        vector = np.random.default_rng(seed).standard_normal(self._dimensions)
        return (vector / np.linalg.norm(vector)).astype(np.float32)

    def embed_batch(self, texts: list[str]) -> list[np.ndarray]:
        """Generate embeddings for multiple texts."""
        return [self.embed(text) for text in texts]


def _to_vector(raw) -> np.ndarray:
    """Validate a raw provider vector and convert it to float32."""
    if raw is None:
        raise EmbeddingError("Embedding response item had no embedding")
    try:
        vector = np.asarray(raw, dtype=np.float32)
    except (TypeError, ValueError) as e:
        raise EmbeddingError(f"Embedding is not numeric: {e}") from e
    validate_embedding(vector)
    return vector


def validate_embedding(vector) -> None:
    """Raise EmbeddingError unless ``vector`` is a non-empty finite 1-D array."""
    if not isinstance(vector, np.ndarray):
        raise EmbeddingError(f"Embedding must be an ndarray, got {type(vector).__name__}")
    if vector.ndim != 1 or vector.size == 0:
        raise EmbeddingError(f"Embedding must be a non-empty vector, got shape {vector.shape}")
    if not np.all(np.isfinite(vector)):
        raise EmbeddingError("Embedding contains non-finite values")


def get_embedding_provider(
    use_mock: bool = False,
    model: str = "text-embedding-3-small",
    timeout: float = 30.0,
) -> EmbeddingProvider:
    """
    Factory function to get the appropriate embedding provider.

    Args:
        use_mock: If True, return MockEmbeddings (for testing)
        model: OpenAI embedding model name
        timeout: Per-request timeout in seconds
    """
    if use_mock:
        return MockEmbeddings()
    return OpenAIEmbeddings(model=model, timeout=timeout)

"""
Core protocols defining the collaborator contracts of the search pipeline.

Every external boundary (embedding provider, completion provider, lexical
store, nearest-neighbour store) is a Protocol. The pipeline only ever talks
to these, so the merge/dedup logic can be exercised with in-memory stores
and mock providers.

PATTERN:
--------
- Protocol defines the contract
- Production implementation talks to the network
- Test double answers deterministically
- Factory function picks one
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, Union, runtime_checkable

import numpy as np

if TYPE_CHECKING:
    from meeting_search.retrieval.document import Document


# Opaque document identifier. Postgres-backed corpora usually hand out
# integers, hand-curated ones use strings; the pipeline only compares them.
DocumentId = Union[str, int]


# ---------------------------------------------------------------------------
# PROVIDERS
# ---------------------------------------------------------------------------


@runtime_checkable
class EmbeddingProvider(Protocol):
    """
    Contract for embedding generation.

    Implementations:
    - OpenAIEmbeddings (production)
    - MockEmbeddings (testing)
    """

    def embed(self, text: str) -> np.ndarray:
        """Generate embedding for a single text."""
        ...

    def embed_batch(self, texts: list[str]) -> list[np.ndarray]:
        """Generate embeddings for multiple texts."""
        ...


@runtime_checkable
class CompletionProvider(Protocol):
    """
    Contract for free-text completion.

    Implementations:
    - ChatCompletion (production, langchain-openai)
    - MockCompletion (testing)
    """

    def complete(self, prompt: str) -> str:
        """Return the model's text response for a fully assembled prompt."""
        ...


# ---------------------------------------------------------------------------
# STORES
# ---------------------------------------------------------------------------


@runtime_checkable
class LexicalStore(Protocol):
    """Substring matching over the document text column."""

    def find_containing(self, text: str, limit: int) -> list[Document]:
        """Documents whose content contains ``text`` (case-insensitive)."""
        ...


@runtime_checkable
class NearestNeighborStore(Protocol):
    """Similarity search over stored embedding vectors."""

    def search_similar(self, embedding: np.ndarray, k: int) -> list[Document]:
        """Top-k documents by vector similarity, best first."""
        ...


@runtime_checkable
class DocumentStore(LexicalStore, NearestNeighborStore, Protocol):
    """
    A store that serves both retrieval channels.

    Implementations:
    - PgDocumentStore (production with PostgreSQL + pgvector)
    - InMemoryDocumentStore (testing/development)
    """

    def connect(self) -> None:
        ...

    def close(self) -> None:
        ...

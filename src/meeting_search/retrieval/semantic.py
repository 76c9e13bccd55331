"""
Semantic matcher - embedding-based recall channel.

The query is embedded once and handed to the nearest-neighbour store.
Its ranking is trusted as-is: no re-scoring, no similarity threshold.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from meeting_search.core import FailureSource, guarded_call
from meeting_search.embeddings import validate_embedding

if TYPE_CHECKING:
    from meeting_search.core import EmbeddingProvider, NearestNeighborStore
    from meeting_search.retrieval.document import Document

logger = logging.getLogger(__name__)


class SemanticMatcher:
    """Embed the query, then ask the store for its top-k neighbours."""

    def __init__(self, embeddings: EmbeddingProvider, store: NearestNeighborStore):
        self._embeddings = embeddings
        self._store = store

    def embed_query(self, query: str):
        """
        Embed ``query``. Provider failures are fatal and surface as EmbeddingError.
        """
        vector = guarded_call(FailureSource.EMBEDDING, self._embeddings.embed, query)
        validate_embedding(vector)
        return vector

    def match(self, query: str, k: int) -> list[Document]:
        """Return up to ``k`` documents in the store's similarity order."""
        vector = self.embed_query(query)
        docs = guarded_call(FailureSource.VECTOR_STORE, self._store.search_similar, vector, k)
        logger.debug("Semantic match: %d documents (k=%d)", len(docs), k)
        return docs[:k]

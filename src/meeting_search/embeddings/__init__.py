"""
Embeddings module - text embedding generation.

1. Protocol (EmbeddingProvider, defined in core) is the interface
2. Production implementation (OpenAIEmbeddings)
3. Test double (MockEmbeddings) for fast testing
4. Factory function (get_embedding_provider)
"""

from meeting_search.core import EmbeddingProvider
from meeting_search.embeddings.openai_embeddings import (
    OpenAIEmbeddings,
    MockEmbeddings,
    get_embedding_provider,
    validate_embedding,
)

__all__ = [
    "EmbeddingProvider",
    "OpenAIEmbeddings",
    "MockEmbeddings",
    "get_embedding_provider",
    "validate_embedding",
]

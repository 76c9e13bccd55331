"""
Core module - shared protocols and error policy for the search pipeline.

USAGE:
------
from meeting_search.core import DocumentStore, EmbeddingProvider

class MyStore:
    '''Implements DocumentStore protocol.'''
    ...
"""

from meeting_search.core.protocols import (
    CompletionProvider,
    DocumentId,
    DocumentStore,
    EmbeddingProvider,
    LexicalStore,
    NearestNeighborStore,
)
from meeting_search.core.errors import (
    FAILURE_POLICY,
    FATAL_ERRORS,
    CompletionError,
    EmbeddingError,
    FailurePolicy,
    FailureSource,
    InputMalformed,
    ProviderFailure,
    RetrievalDegraded,
    SearchError,
    guarded_call,
)

__all__ = [
    # Protocols
    "CompletionProvider",
    "DocumentId",
    "DocumentStore",
    "EmbeddingProvider",
    "LexicalStore",
    "NearestNeighborStore",
    # Errors
    "SearchError",
    "ProviderFailure",
    "EmbeddingError",
    "CompletionError",
    "InputMalformed",
    "RetrievalDegraded",
    # Policy
    "FailureSource",
    "FailurePolicy",
    "FAILURE_POLICY",
    "FATAL_ERRORS",
    "guarded_call",
]

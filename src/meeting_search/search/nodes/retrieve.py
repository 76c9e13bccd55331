"""
Retrieval nodes - one per channel.

The two nodes share no state and run side by side in the graph. Each is
built by a factory so tests can inject matchers over an in-memory store.
"""

from __future__ import annotations

import time
from typing import TYPE_CHECKING, Callable

from meeting_search.search.state import SearchState

if TYPE_CHECKING:
    from meeting_search.retrieval.lexical import LexicalMatcher
    from meeting_search.retrieval.semantic import SemanticMatcher


def create_lexical_node(
    matcher: LexicalMatcher,
    limit: int,
) -> Callable[[SearchState], dict]:
    """
    Factory that creates the lexical retrieval node.

    Args:
        matcher: LexicalMatcher bound to a store
        limit: Maximum lexical documents for this mode
    """

    def lexical_match(state: SearchState) -> dict:
        """
        Reads: query
        Writes: lexical_docs, lexical_strategy, lexical_latency_ms
        """
        start = time.time()
        result = matcher.match(state["query"], limit)

        return {
            "lexical_docs": result.documents,
            "lexical_strategy": result.strategy,
            "lexical_latency_ms": (time.time() - start) * 1000,
        }

    return lexical_match


def create_semantic_node(
    matcher: SemanticMatcher,
    k: int,
) -> Callable[[SearchState], dict]:
    """
    Factory that creates the semantic retrieval node.

    An EmbeddingError raised here is not handled: it aborts the graph run.
    """

    def semantic_match(state: SearchState) -> dict:
        """
        Reads: query
        Writes: semantic_docs, semantic_latency_ms
        """
        start = time.time()
        docs = matcher.match(state["query"], k)

        return {
            "semantic_docs": docs,
            "semantic_latency_ms": (time.time() - start) * 1000,
        }

    return semantic_match

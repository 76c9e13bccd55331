"""
Search state definition - the data flowing through the LangGraph.

Each request builds a fresh state; nothing in it outlives the call.
The lexical and semantic nodes write disjoint keys so they can run in
the same superstep.
"""

from typing import Optional, TypedDict

from meeting_search.core import DocumentId
from meeting_search.retrieval.document import Document


class SearchState(TypedDict):
    """State that flows through the search graph."""

    # -------------------------------------------------------------------------
    # INPUT (set at invocation)
    # -------------------------------------------------------------------------
    query: str
    exclude_ids: list[DocumentId]

    # -------------------------------------------------------------------------
    # RETRIEVAL (one key set per channel)
    # -------------------------------------------------------------------------
    lexical_docs: list[Document]
    lexical_strategy: str
    semantic_docs: list[Document]

    # -------------------------------------------------------------------------
    # MERGE / PAGINATION
    # -------------------------------------------------------------------------
    candidates: list[Document]
    has_more: bool
    current_id: Optional[DocumentId]

    # -------------------------------------------------------------------------
    # OUTPUT
    # -------------------------------------------------------------------------
    context: str
    answer: str
    sources: list[dict]

    # -------------------------------------------------------------------------
    # METRICS
    # -------------------------------------------------------------------------
    lexical_latency_ms: float
    semantic_latency_ms: float
    synthesis_latency_ms: float


def create_initial_state(
    query: str,
    exclude_ids: Optional[list[DocumentId]] = None,
) -> SearchState:
    """Create an initial search state for graph invocation."""
    return SearchState(
        query=query,
        exclude_ids=list(exclude_ids or []),
        lexical_docs=[],
        lexical_strategy="none",
        semantic_docs=[],
        candidates=[],
        has_more=False,
        current_id=None,
        context="",
        answer="",
        sources=[],
        lexical_latency_ms=0,
        semantic_latency_ms=0,
        synthesis_latency_ms=0,
    )

"""
Graph construction with dependency injection.

The graph is just WIRING - all logic lives in nodes and matchers.

Bulk graph:
    START -+-> lexical_match --+-> merge_candidates -+-> assemble_context -> synthesize_answer -> END
           +-> semantic_match -+                     +-> no_results -> END

Paginated graph: the same, with select_current between the merge and
assembly, wider retrieval limits, and no cap on the merge.

The two retrieval nodes have no edge between them, so LangGraph runs
them in the same superstep; merge_candidates waits for both.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from langgraph.graph import END, START, StateGraph

from meeting_search.config import SearchSettings
from meeting_search.retrieval.lexical import LexicalMatcher
from meeting_search.retrieval.semantic import SemanticMatcher
from meeting_search.search.state import SearchState
from meeting_search.search.nodes import (
    AnswerSynthesizer,
    create_assemble_node,
    create_lexical_node,
    create_merge_node,
    create_no_results_node,
    create_semantic_node,
    create_synthesize_node,
    select_current_candidate,
)

if TYPE_CHECKING:
    from meeting_search.core import CompletionProvider, DocumentStore, EmbeddingProvider


def route_after_merge(state: SearchState, paginated: bool = False) -> str:
    """Pick the branch after the merge: empty short-circuit, page selection or assembly."""
    if not state["candidates"]:
        return "no_results"
    return "select_current" if paginated else "assemble_context"


def build_search_graph(
    store: DocumentStore,
    embeddings: EmbeddingProvider,
    completion: CompletionProvider,
    settings: SearchSettings | None = None,
    paginated: bool = False,
):
    """
    Build the search workflow with injected dependencies.

    Args:
        store: Serves both the lexical and the nearest-neighbour channel
        embeddings: Embedding provider for the semantic channel
        completion: Completion provider for the answer
        settings: Limits and wording (defaults if not provided)
        paginated: Build the one-candidate-per-call variant

    Returns:
        Compiled StateGraph ready for invocation

    Example:
        store = InMemoryDocumentStore(MockEmbeddings())
        graph = build_search_graph(store, MockEmbeddings(), MockCompletion())
        graph.invoke(create_initial_state("bus deficit"))
    """
    settings = settings or SearchSettings()

    lexical = LexicalMatcher(
        store,
        broad_limit=settings.broad_fetch_limit,
        min_word_length=settings.min_word_length,
    )
    semantic = SemanticMatcher(embeddings, store)
    synthesizer = AnswerSynthesizer(completion)

    if paginated:
        lexical_limit, semantic_k, merge_cap = (
            settings.page_lexical_limit, settings.page_semantic_k, None,
        )
    else:
        lexical_limit, semantic_k, merge_cap = (
            settings.bulk_lexical_limit, settings.bulk_semantic_k, settings.context_cap,
        )

    workflow = StateGraph(SearchState)

    workflow.add_node("lexical_match", create_lexical_node(lexical, lexical_limit))
    workflow.add_node("semantic_match", create_semantic_node(semantic, semantic_k))
    workflow.add_node("merge_candidates", create_merge_node(merge_cap))
    workflow.add_node("assemble_context", create_assemble_node(settings.context_cap))
    workflow.add_node("synthesize_answer", create_synthesize_node(synthesizer))
    workflow.add_node(
        "no_results",
        create_no_results_node(settings.no_results_message, settings.no_more_results_message),
    )

    # Fan-out / fan-in
    workflow.add_edge(START, "lexical_match")
    workflow.add_edge(START, "semantic_match")
    workflow.add_edge(["lexical_match", "semantic_match"], "merge_candidates")

    branches = {"no_results": "no_results", "assemble_context": "assemble_context"}
    if paginated:
        workflow.add_node("select_current", select_current_candidate)
        workflow.add_edge("select_current", "assemble_context")
        branches = {"no_results": "no_results", "select_current": "select_current"}

    workflow.add_conditional_edges(
        "merge_candidates",
        lambda state: route_after_merge(state, paginated),
        branches,
    )
    workflow.add_edge("assemble_context", "synthesize_answer")
    workflow.add_edge("synthesize_answer", END)
    workflow.add_edge("no_results", END)

    return workflow.compile()

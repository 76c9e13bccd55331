"""
Span attribute keys and builders for search requests.

GenAI keys follow the OpenTelemetry GenAI conventions; everything else
lives under the ``search.`` namespace.
Reference: https://opentelemetry.io/docs/specs/semconv/gen-ai/
"""

from __future__ import annotations

from typing import Any

# GenAI (OTel standard)
GEN_AI_SYSTEM = "gen_ai.system"
GEN_AI_REQUEST_MODEL = "gen_ai.request.model"

# Request
SEARCH_MODE = "search.mode"  # "bulk" or "page"
SEARCH_QUERY = "search.query"  # only when capture_query_text is on
SEARCH_QUERY_LENGTH = "search.query.length"
SEARCH_EXCLUDED_COUNT = "search.excluded_count"

# Retrieval
SEARCH_LEXICAL_STRATEGY = "search.lexical.strategy"
SEARCH_LEXICAL_COUNT = "search.lexical.count"
SEARCH_SEMANTIC_COUNT = "search.semantic.count"
SEARCH_CANDIDATE_COUNT = "search.candidate_count"
SEARCH_CANDIDATE_IDS = "search.candidate_ids"

# Outcome
SEARCH_NO_RESULTS = "search.no_results"
SEARCH_HAS_MORE = "search.page.has_more"
SEARCH_CURRENT_ID = "search.page.current_id"
SEARCH_SYNTHESIS_LATENCY_MS = "search.synthesis_latency_ms"


def search_request_attributes(
    mode: str,
    query: str,
    excluded_count: int = 0,
    capture_query_text: bool = False,
) -> dict[str, Any]:
    """Attributes set when a request span opens."""
    attrs: dict[str, Any] = {
        SEARCH_MODE: mode,
        SEARCH_QUERY_LENGTH: len(query),
        SEARCH_EXCLUDED_COUNT: excluded_count,
    }
    if capture_query_text:
        attrs[SEARCH_QUERY] = query
    return attrs


def search_result_attributes(state: dict[str, Any]) -> dict[str, Any]:
    """Attributes describing a finished graph run."""
    candidates = state.get("candidates") or []
    return {
        SEARCH_LEXICAL_STRATEGY: state.get("lexical_strategy"),
        SEARCH_LEXICAL_COUNT: len(state.get("lexical_docs") or []),
        SEARCH_SEMANTIC_COUNT: len(state.get("semantic_docs") or []),
        SEARCH_CANDIDATE_COUNT: len(candidates),
        SEARCH_CANDIDATE_IDS: [str(doc.id) for doc in candidates],
        SEARCH_NO_RESULTS: not candidates,
        SEARCH_HAS_MORE: state.get("has_more"),
        SEARCH_CURRENT_ID: None if state.get("current_id") is None else str(state["current_id"]),
        SEARCH_SYNTHESIS_LATENCY_MS: state.get("synthesis_latency_ms"),
    }

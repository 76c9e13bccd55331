"""
Search pipeline - LangGraph wiring of retrieval, merge, pagination and synthesis.
"""

from meeting_search.search.state import SearchState, create_initial_state
from meeting_search.search.graph import build_search_graph, route_after_merge
from meeting_search.search.service import (
    SearchService,
    clear_service_cache,
    get_search_service,
    normalize_query,
)

__all__ = [
    "SearchState",
    "create_initial_state",
    "build_search_graph",
    "route_after_merge",
    "SearchService",
    "get_search_service",
    "clear_service_cache",
    "normalize_query",
]

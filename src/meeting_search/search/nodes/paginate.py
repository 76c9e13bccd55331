"""
Pagination node - exposes exactly one candidate per request.

The service keeps no cursor. The caller sends back every id it has
already received, the merge drops them, and this node hands out the
head of what remains.
"""

from __future__ import annotations

from meeting_search.search.state import SearchState


def select_current_candidate(state: SearchState) -> dict:
    """
    Reads: candidates (full merged list, exclusions already removed)
    Writes: candidates (head only), has_more, current_id
    """
    merged = state["candidates"]
    if not merged:
        return {"candidates": [], "has_more": False, "current_id": None}

    current = merged[0]
    return {
        "candidates": [current],
        "has_more": len(merged) > 1,
        "current_id": current.id,
    }

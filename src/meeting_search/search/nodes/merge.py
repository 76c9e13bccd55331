"""
Merge node - fan-in point of the two retrieval channels.
"""

from __future__ import annotations

import logging
from typing import Callable

from meeting_search.retrieval.merge import merge_candidates
from meeting_search.search.state import SearchState

logger = logging.getLogger(__name__)


def create_merge_node(cap: int | None) -> Callable[[SearchState], dict]:
    """
    Factory that creates the merge node.

    Args:
        cap: Candidate cap for bulk mode; None in paginated mode where
             only the head of the list is consumed
    """

    def merge(state: SearchState) -> dict:
        """
        Reads: lexical_docs, semantic_docs, exclude_ids
        Writes: candidates
        """
        candidates = merge_candidates(
            state["lexical_docs"],
            state["semantic_docs"],
            exclude_ids=state["exclude_ids"],
            cap=cap,
        )
        logger.info(
            "Merged %d lexical (%s) + %d semantic -> %d candidates (excluded %d)",
            len(state["lexical_docs"]),
            state["lexical_strategy"],
            len(state["semantic_docs"]),
            len(candidates),
            len(state["exclude_ids"]),
        )
        return {"candidates": candidates}

    return merge

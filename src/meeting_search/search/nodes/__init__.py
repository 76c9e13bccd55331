"""
Search graph nodes - isolated, testable functions.

PATTERN:
--------
1. Pure nodes (no dependencies) are simple functions
2. Nodes with dependencies use factory pattern: create_X_node(deps) -> node_fn
"""

from meeting_search.search.nodes.retrieve import create_lexical_node, create_semantic_node
from meeting_search.search.nodes.merge import create_merge_node
from meeting_search.search.nodes.paginate import select_current_candidate
from meeting_search.search.nodes.assemble import (
    RECORD_SEPARATOR,
    assemble_context,
    create_assemble_node,
)
from meeting_search.search.nodes.synthesize import (
    AnswerSynthesizer,
    build_answer_prompt,
    create_no_results_node,
    create_synthesize_node,
)

__all__ = [
    "create_lexical_node",
    "create_semantic_node",
    "create_merge_node",
    "select_current_candidate",
    "RECORD_SEPARATOR",
    "assemble_context",
    "create_assemble_node",
    "AnswerSynthesizer",
    "build_answer_prompt",
    "create_no_results_node",
    "create_synthesize_node",
]

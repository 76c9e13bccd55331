"""
Context assembly - turns candidates into the prompt's evidence block.

Every record carries the same metadata header. Missing fields are
written as "unknown" instead of being dropped, so the model never reads
an absent field as a fact. Content is passed through whole; the only
size control is the candidate cap.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable

from meeting_search.search.state import SearchState

if TYPE_CHECKING:
    from meeting_search.retrieval.document import Document

UNKNOWN = "unknown"
RECORD_SEPARATOR = "\n\n===== END OF RECORD =====\n\n"

# (label, metadata key) in header order
METADATA_FIELDS = (
    ("type", "meeting_type"),
    ("date", "date"),
    ("session", "session_num"),
    ("source", "source"),
)


def _field(metadata: dict, key: str) -> str:
    value = metadata.get(key)
    if value is None or str(value).strip() == "":
        return UNKNOWN
    return str(value)


def format_record(index: int, doc: Document) -> str:
    """Render one candidate as ``[Record n] header`` followed by its content."""
    metadata = doc.metadata or {}
    header = " | ".join(f"{label}: {_field(metadata, key)}" for label, key in METADATA_FIELDS)
    return f"[Record {index}] {header}\n{doc.content}"


def assemble_context(documents: list[Document], cap: int | None = None) -> str:
    """
    Build the context block for a candidate slice.

    This is a PURE FUNCTION - same inputs always produce same output.

    Args:
        documents: Candidates in priority order
        cap: Maximum number of records to include

    Returns:
        Records joined by RECORD_SEPARATOR, numbered from 1
    """
    selected = documents if cap is None else documents[:cap]
    return RECORD_SEPARATOR.join(
        format_record(i, doc) for i, doc in enumerate(selected, start=1)
    )


def create_assemble_node(cap: int | None) -> Callable[[SearchState], dict]:
    """Factory for the assembly node; ``sources`` mirrors the records in the context."""

    def assemble(state: SearchState) -> dict:
        selected = state["candidates"] if cap is None else state["candidates"][:cap]
        return {
            "context": assemble_context(selected),
            "sources": [dict(doc.metadata or {}) for doc in selected],
        }

    return assemble

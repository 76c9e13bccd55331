"""
Result merger - ordinal priority merge of the two retrieval channels.

Lexical documents always come before semantic-only documents, whatever
the similarity scores say. Ids are unique in the output and never
intersect the exclusion set. The cap is applied last, after dedup.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable

if TYPE_CHECKING:
    from meeting_search.core import DocumentId
    from meeting_search.retrieval.document import Document


def merge_candidates(
    lexical: Iterable[Document],
    semantic: Iterable[Document],
    exclude_ids: Iterable[DocumentId] | None = None,
    cap: int | None = None,
) -> list[Document]:
    """
    Merge lexical and semantic results into one candidate list.

    Args:
        lexical: Lexical matcher output, in its order
        semantic: Semantic matcher output, in its order
        exclude_ids: Ids the caller has already seen (pagination)
        cap: Maximum length of the merged list; None for no cap

    Returns:
        Deduplicated, priority-ordered list of documents
    """
    seen = set(exclude_ids or ())
    merged: list[Document] = []

    for channel in (lexical, semantic):
        for doc in channel:
            if doc.id in seen:
                continue
            seen.add(doc.id)
            merged.append(doc)

    if cap is not None:
        return merged[:cap]
    return merged

"""
Lexical matcher - keyword retrieval with a strict-to-loose cascade.

Strategies, tried in order until one returns documents:

1. exact_phrase - content contains the whole query
2. all_words    - broad first-word fetch, filtered to documents that
                  also contain every other query word
3. first_word   - the broad first-word fetch, unfiltered

All matching is case-insensitive. A store failure degrades the lexical
channel to "no results"; it never aborts the request.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Literal

from meeting_search.core import FailureSource, guarded_call

if TYPE_CHECKING:
    from meeting_search.core import LexicalStore
    from meeting_search.retrieval.document import Document

logger = logging.getLogger(__name__)

LexicalStrategy = Literal["exact_phrase", "all_words", "first_word", "none"]


@dataclass
class LexicalMatch:
    """Documents found by the lexical channel and the strategy that found them."""
    documents: list[Document] = field(default_factory=list)
    strategy: LexicalStrategy = "none"


def tokenize_query(query: str, min_word_length: int = 2) -> list[str]:
    """Split on whitespace and keep words of at least ``min_word_length`` characters."""
    return [word for word in query.split() if len(word) >= min_word_length]


class LexicalMatcher:
    """
    Cascading substring matcher over a LexicalStore.

    Args:
        store: Anything implementing find_containing(text, limit)
        broad_limit: Size of the first-word candidate pool
        min_word_length: Shortest query word used by strategies 2 and 3
    """

    def __init__(
        self,
        store: LexicalStore,
        broad_limit: int = 30,
        min_word_length: int = 2,
    ):
        self._store = store
        self.broad_limit = broad_limit
        self.min_word_length = min_word_length

    def _find(self, text: str, limit: int) -> list[Document]:
        return guarded_call(FailureSource.LEXICAL_STORE, self._store.find_containing, text, limit)

    def match(self, query: str, limit: int) -> LexicalMatch:
        """Run the cascade for a trimmed query."""
        query = query.strip()
        if not query:
            return LexicalMatch()

        exact = self._find(query, limit)
        if exact:
            logger.debug("Lexical exact-phrase match: %d documents", len(exact))
            return LexicalMatch(exact[:limit], "exact_phrase")

        words = tokenize_query(query, self.min_word_length)
        if not words:
            return LexicalMatch()

        first, rest = words[0], [w.lower() for w in words[1:]]
        broad = self._find(first, self.broad_limit)
        if not broad:
            return LexicalMatch()

        all_words = [
            doc for doc in broad
            if all(word in doc.content.lower() for word in rest)
        ]
        if all_words:
            logger.debug("Lexical all-words match: %d of %d", len(all_words), len(broad))
            return LexicalMatch(all_words[:limit], "all_words")

        logger.debug("Lexical first-word fallback: %d documents", len(broad))
        return LexicalMatch(broad[:limit], "first_word")

"""
Unit Tests for the Lexical Matcher

Covers the strict-to-loose cascade, tokenization, and graceful
degradation when the store fails.

PATTERNS:
---------
1. MagicMock store to observe exactly which lookups the cascade makes
2. InMemoryDocumentStore for realistic case-insensitive matching
3. No network, no database
"""

import pytest
from unittest.mock import MagicMock, call
import numpy as np

from meeting_search.retrieval.document import Document
from meeting_search.retrieval.lexical import LexicalMatcher, tokenize_query
from meeting_search.retrieval.store import InMemoryDocumentStore


# ---------------------------------------------------------------------------
# FIXTURES
# ---------------------------------------------------------------------------


@pytest.fixture
def memory_store():
    """In-memory store with a handful of minutes excerpts."""
    embeddings = MagicMock()
    embeddings.embed.return_value = np.array([1.0, 0.0, 0.0])
    store = InMemoryDocumentStore(embeddings)
    store.insert_document(Document(
        id="d1",
        content="The Youth Housing Subsidy was discussed at length.",
        metadata={"meeting_type": "plenary"},
    ))
    store.insert_document(Document(
        id="d2",
        content="Housing for seniors and the elderly care budget.",
        metadata={"meeting_type": "committee"},
    ))
    store.insert_document(Document(
        id="d3",
        content="Bus deficit guarantee and housing loans.",
        metadata={"meeting_type": "committee"},
    ))
    return store


# ---------------------------------------------------------------------------
# TOKENIZATION
# ---------------------------------------------------------------------------


class TestTokenizeQuery:

    def test_splits_on_whitespace(self):
        assert tokenize_query("bus  deficit\tguarantee") == ["bus", "deficit", "guarantee"]

    def test_drops_single_character_words(self):
        assert tokenize_query("a bus x route") == ["bus", "route"]

    def test_custom_minimum_length(self):
        assert tokenize_query("the bus fare", min_word_length=4) == ["fare"]

    def test_empty_query(self):
        assert tokenize_query("   ") == []


# ---------------------------------------------------------------------------
# CASCADE
# ---------------------------------------------------------------------------


class TestCascade:

    def test_exact_phrase_short_circuits(self):
        """An exact-phrase hit means the word strategies are never tried."""
        store = MagicMock()
        store.find_containing.return_value = [Document(id="d1", content="youth housing subsidy")]

        result = LexicalMatcher(store).match("youth housing", limit=5)

        assert result.strategy == "exact_phrase"
        assert [d.id for d in result.documents] == ["d1"]
        store.find_containing.assert_called_once_with("youth housing", 5)

    def test_exact_phrase_is_case_insensitive(self, memory_store):
        result = LexicalMatcher(memory_store).match("youth HOUSING subsidy", limit=5)

        assert result.strategy == "exact_phrase"
        assert [d.id for d in result.documents] == ["d1"]

    def test_all_words_filters_broad_fetch(self, memory_store):
        """No document has the phrase, but d3 has every word."""
        result = LexicalMatcher(memory_store).match("housing bus", limit=5)

        assert result.strategy == "all_words"
        assert [d.id for d in result.documents] == ["d3"]

    def test_all_words_uses_broad_limit_for_first_word(self):
        store = MagicMock()
        store.find_containing.side_effect = [
            [],
            [Document(id="d1", content="housing and bus routes")],
        ]

        LexicalMatcher(store, broad_limit=30).match("housing bus", limit=5)

        assert store.find_containing.call_args_list == [
            call("housing bus", 5),
            call("housing", 30),
        ]

    def test_first_word_fallback_when_and_filter_empty(self, memory_store):
        result = LexicalMatcher(memory_store).match("housing festival", limit=2)

        assert result.strategy == "first_word"
        assert [d.id for d in result.documents] == ["d1", "d2"]

    def test_all_words_truncates_to_limit(self):
        docs = [Document(id=f"d{i}", content="housing bus") for i in range(10)]
        store = MagicMock()
        store.find_containing.side_effect = [[], docs]

        result = LexicalMatcher(store).match("housing bus", limit=3)

        assert result.strategy == "all_words"
        assert len(result.documents) == 3

    def test_no_match_anywhere(self, memory_store):
        result = LexicalMatcher(memory_store).match("festival parade", limit=5)

        assert result.strategy == "none"
        assert result.documents == []

    def test_query_with_only_short_words(self):
        store = MagicMock()
        store.find_containing.return_value = []

        result = LexicalMatcher(store).match("a b", limit=5)

        assert result.documents == []
        store.find_containing.assert_called_once()

    def test_query_is_trimmed(self):
        store = MagicMock()
        store.find_containing.return_value = [Document(id="d1", content="bus")]

        LexicalMatcher(store).match("  bus  ", limit=5)

        store.find_containing.assert_called_once_with("bus", 5)


# ---------------------------------------------------------------------------
# DEGRADATION
# ---------------------------------------------------------------------------


class TestLexicalDegradation:

    def test_store_error_yields_empty_result(self):
        """A failing store never raises out of the matcher."""
        store = MagicMock()
        store.find_containing.side_effect = RuntimeError("connection reset")

        result = LexicalMatcher(store).match("bus deficit", limit=5)

        assert result.documents == []
        assert result.strategy == "none"

    def test_store_error_is_logged(self, caplog):
        store = MagicMock()
        store.find_containing.side_effect = RuntimeError("connection reset")

        with caplog.at_level("WARNING"):
            LexicalMatcher(store).match("bus", limit=5)

        assert "lexical_store" in caplog.text

"""
End-to-end tests for the search graph through SearchService.

No network: stores are MagicMocks or InMemoryDocumentStore, providers
are MagicMock / MockEmbeddings. Covers the documented scenarios, the
pagination walk, and the failure policy.
"""

import pytest
from unittest.mock import MagicMock
import numpy as np

from meeting_search.completion.chat_completion import RECORD_HEADER
from meeting_search.config import SearchSettings
from meeting_search.core import CompletionError, EmbeddingError, InputMalformed
from meeting_search.embeddings import MockEmbeddings
from meeting_search.observability import NoOpTracer
from meeting_search.retrieval import InMemoryDocumentStore, seed_document_store
from meeting_search.retrieval.document import Document
from meeting_search.search.service import SearchService, normalize_query


# ---------------------------------------------------------------------------
# FIXTURES
# ---------------------------------------------------------------------------


D1 = Document(id="D1", content="youth housing subsidy debate", metadata={"date": "2023-03-14"})
D2 = Document(id="D2", content="housing deposit transfer", metadata={"date": "2023-03-16"})
D3 = Document(id="D3", content="rental support overview", metadata={"date": "2023-07-05"})


@pytest.fixture
def settings():
    return SearchSettings(no_results_message="NO RESULTS", no_more_results_message="NO MORE")


@pytest.fixture
def mock_embeddings():
    embeddings = MagicMock()
    embeddings.embed.return_value = np.array([0.1, 0.2, 0.3], dtype=np.float32)
    return embeddings


@pytest.fixture
def mock_completion():
    completion = MagicMock()
    completion.complete.return_value = "Grounded answer citing [Record 1]."
    return completion


@pytest.fixture
def store_ab():
    """Lexical channel returns [D1, D2]; semantic channel returns [D2, D3]."""
    store = MagicMock()
    store.find_containing.return_value = [D1, D2]
    store.search_similar.return_value = [D2, D3]
    return store


@pytest.fixture
def empty_store():
    store = MagicMock()
    store.find_containing.return_value = []
    store.search_similar.return_value = []
    return store


def make_service(store, embeddings, completion, settings):
    return SearchService(store, embeddings, completion, settings, tracer=NoOpTracer())


# ---------------------------------------------------------------------------
# BULK MODE
# ---------------------------------------------------------------------------


class TestBulkSearch:

    def test_merged_order_lexical_first(self, store_ab, mock_embeddings, mock_completion, settings):
        service = make_service(store_ab, mock_embeddings, mock_completion, settings)

        response = service.search("housing")

        assert response.answer == "Grounded answer citing [Record 1]."
        assert response.sources == [D1.metadata, D2.metadata, D3.metadata]

    def test_context_sent_to_model_in_merged_order(
        self, store_ab, mock_embeddings, mock_completion, settings
    ):
        make_service(store_ab, mock_embeddings, mock_completion, settings).search("housing")

        prompt = mock_completion.complete.call_args[0][0]
        assert prompt.index(D1.content) < prompt.index(D2.content) < prompt.index(D3.content)
        assert prompt.count(D2.content) == 1

    def test_both_channels_empty_skips_model(
        self, empty_store, mock_embeddings, mock_completion, settings
    ):
        response = make_service(empty_store, mock_embeddings, mock_completion, settings).search("zzz")

        assert response.answer == "NO RESULTS"
        assert response.sources == []
        mock_completion.complete.assert_not_called()

    def test_context_cap(self, mock_embeddings, mock_completion):
        store = MagicMock()
        store.find_containing.return_value = [
            Document(id=f"L{i}", content=f"lex {i}") for i in range(5)
        ]
        store.search_similar.return_value = [
            Document(id=f"S{i}", content=f"sem {i}") for i in range(10)
        ]
        settings = SearchSettings(context_cap=8)

        response = make_service(store, mock_embeddings, mock_completion, settings).search("lex")

        assert len(response.sources) == 8
        prompt = mock_completion.complete.call_args[0][0]
        assert len(RECORD_HEADER.findall(prompt)) == 8

    def test_bulk_limits_passed_to_channels(self, store_ab, mock_embeddings, mock_completion):
        settings = SearchSettings(bulk_lexical_limit=5, bulk_semantic_k=10)

        make_service(store_ab, mock_embeddings, mock_completion, settings).search("housing")

        store_ab.find_containing.assert_called_once_with("housing", 5)
        assert store_ab.search_similar.call_args[0][1] == 10

    def test_query_is_trimmed_before_retrieval(
        self, store_ab, mock_embeddings, mock_completion, settings
    ):
        make_service(store_ab, mock_embeddings, mock_completion, settings).search("  housing \n")

        mock_embeddings.embed.assert_called_once_with("housing")


# ---------------------------------------------------------------------------
# PAGINATED MODE
# ---------------------------------------------------------------------------


class TestPaginatedSearch:

    def test_excluding_first_returns_second(
        self, store_ab, mock_embeddings, mock_completion, settings
    ):
        service = make_service(store_ab, mock_embeddings, mock_completion, settings)

        page = service.search_page("housing", exclude_ids=["D1"])

        assert page.current_id == "D2"
        assert page.has_more is True
        assert page.sources == [D2.metadata]

    def test_only_current_record_reaches_model(
        self, store_ab, mock_embeddings, mock_completion, settings
    ):
        make_service(store_ab, mock_embeddings, mock_completion, settings).search_page("housing")

        prompt = mock_completion.complete.call_args[0][0]
        assert D1.content in prompt
        assert D2.content not in prompt
        assert len(RECORD_HEADER.findall(prompt)) == 1

    def test_all_excluded(self, store_ab, mock_embeddings, mock_completion, settings):
        service = make_service(store_ab, mock_embeddings, mock_completion, settings)

        page = service.search_page("housing", exclude_ids=["D1", "D2", "D3"])

        assert page.has_more is False
        assert page.current_id is None
        assert page.sources == []
        assert page.answer == "NO MORE"
        mock_completion.complete.assert_not_called()

    def test_nothing_matches_without_exclusions(
        self, empty_store, mock_embeddings, mock_completion, settings
    ):
        page = make_service(empty_store, mock_embeddings, mock_completion, settings).search_page("q")

        assert page.answer == "NO RESULTS"
        assert page.current_id is None

    def test_last_page_has_no_more(self, store_ab, mock_embeddings, mock_completion, settings):
        page = make_service(store_ab, mock_embeddings, mock_completion, settings).search_page(
            "housing", exclude_ids=["D1", "D2"]
        )

        assert page.current_id == "D3"
        assert page.has_more is False

    def test_wider_limits_than_bulk(self, store_ab, mock_embeddings, mock_completion):
        settings = SearchSettings(page_lexical_limit=20, page_semantic_k=30)

        make_service(store_ab, mock_embeddings, mock_completion, settings).search_page("housing")

        store_ab.find_containing.assert_called_once_with("housing", 20)
        assert store_ab.search_similar.call_args[0][1] == 30

    def test_exclusion_is_not_remembered_between_calls(
        self, store_ab, mock_embeddings, mock_completion, settings
    ):
        service = make_service(store_ab, mock_embeddings, mock_completion, settings)

        service.search_page("housing", exclude_ids=["D1"])
        page = service.search_page("housing")

        assert page.current_id == "D1"

    def test_string_exclusions_rejected(self, store_ab, mock_embeddings, mock_completion, settings):
        service = make_service(store_ab, mock_embeddings, mock_completion, settings)

        with pytest.raises(InputMalformed):
            service.search_page("housing", exclude_ids="D1")


class TestPaginationWalk:
    """Walk the seeded in-memory corpus the way a client would."""

    @pytest.fixture
    def seeded_service(self, mock_completion, settings):
        embeddings = MockEmbeddings(dimensions=64)
        store = InMemoryDocumentStore(embeddings)
        seed_document_store(store)
        return make_service(store, embeddings, mock_completion, settings), len(store)

    def test_walk_terminates_and_visits_each_record_once(self, seeded_service):
        service, corpus_size = seeded_service

        pages = list(service.iter_pages("housing subsidy"))
        ids = [p.current_id for p in pages]

        assert len(ids) == len(set(ids))
        # semantic k exceeds the corpus, so every record is reachable
        assert len(ids) == corpus_size
        assert pages[-1].has_more is False
        assert all(p.has_more for p in pages[:-1])

    def test_walk_starts_with_lexical_match(self, seeded_service):
        service, _ = seeded_service

        first = next(service.iter_pages("youth housing subsidy"))

        assert first.current_id == "rec_plenary_2023_301_1"

    def test_excluded_ids_never_come_back(self, seeded_service):
        service, _ = seeded_service
        seen = []

        for _ in range(3):
            page = service.search_page("budget", exclude_ids=seen)
            assert page.current_id not in seen
            seen.append(page.current_id)

    def test_max_pages(self, seeded_service):
        service, _ = seeded_service

        assert len(list(service.iter_pages("budget", max_pages=2))) == 2


# ---------------------------------------------------------------------------
# FAILURE POLICY
# ---------------------------------------------------------------------------


class TestFailurePolicy:

    def test_lexical_failure_degrades_to_semantic(
        self, mock_embeddings, mock_completion, settings
    ):
        store = MagicMock()
        store.find_containing.side_effect = RuntimeError("statement timeout")
        store.search_similar.return_value = [D3]

        response = make_service(store, mock_embeddings, mock_completion, settings).search("q")

        assert response.sources == [D3.metadata]

    def test_vector_store_failure_degrades_to_lexical(
        self, mock_embeddings, mock_completion, settings
    ):
        store = MagicMock()
        store.find_containing.return_value = [D1]
        store.search_similar.side_effect = RuntimeError("index offline")

        response = make_service(store, mock_embeddings, mock_completion, settings).search("q")

        assert response.sources == [D1.metadata]

    def test_both_channels_failing_is_no_results(self, mock_embeddings, mock_completion, settings):
        store = MagicMock()
        store.find_containing.side_effect = RuntimeError("down")
        store.search_similar.side_effect = RuntimeError("down")

        response = make_service(store, mock_embeddings, mock_completion, settings).search("q")

        assert response.answer == "NO RESULTS"
        mock_completion.complete.assert_not_called()

    def test_embedding_failure_is_fatal(self, store_ab, mock_completion, settings):
        embeddings = MagicMock()
        embeddings.embed.side_effect = EmbeddingError("malformed payload")

        with pytest.raises(EmbeddingError):
            make_service(store_ab, embeddings, mock_completion, settings).search("housing")

        mock_completion.complete.assert_not_called()

    def test_completion_failure_is_fatal(self, store_ab, mock_embeddings, settings):
        completion = MagicMock()
        completion.complete.side_effect = CompletionError("rate limited")

        with pytest.raises(CompletionError):
            make_service(store_ab, mock_embeddings, completion, settings).search("housing")


# ---------------------------------------------------------------------------
# INPUT
# ---------------------------------------------------------------------------


class TestQueryValidation:

    def test_normalize_trims(self):
        assert normalize_query("  bus  ") == "bus"

    @pytest.mark.parametrize("bad", ["", "   ", None, 42])
    def test_rejects_blank_or_non_text(self, bad):
        with pytest.raises(InputMalformed):
            normalize_query(bad)

    def test_service_rejects_blank_query(self, store_ab, mock_embeddings, mock_completion, settings):
        service = make_service(store_ab, mock_embeddings, mock_completion, settings)

        with pytest.raises(InputMalformed):
            service.search("  ")

        store_ab.find_containing.assert_not_called()

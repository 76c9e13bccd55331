"""
Search service - the public API for running the pipeline.

A thin layer that converts between the wire schemas and SearchState,
invokes the compiled graphs and records a span per request. It holds
no per-caller state: pagination progress lives entirely in the
exclusion list the caller sends back.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Iterable, Iterator

from meeting_search.config import SearchSettings, get_settings
from meeting_search.core import InputMalformed
from meeting_search.observability import (
    get_config as get_tracing_config,
    get_tracer,
    search_request_attributes,
    search_result_attributes,
)
from meeting_search.schemas.search import PageResponse, SearchResponse
from meeting_search.search.graph import build_search_graph
from meeting_search.search.state import create_initial_state

if TYPE_CHECKING:
    from meeting_search.core import (
        CompletionProvider,
        DocumentId,
        DocumentStore,
        EmbeddingProvider,
    )
    from meeting_search.observability import TracerProtocol

logger = logging.getLogger(__name__)


def normalize_query(query) -> str:
    """Trim the query; anything that is not non-blank text is malformed input."""
    if not isinstance(query, str):
        raise InputMalformed(f"query must be a string, got {type(query).__name__}")
    query = query.strip()
    if not query:
        raise InputMalformed("query must not be blank")
    return query


class SearchService:
    """
    Bulk and paginated hybrid search over one document store.

    Example:
        service = SearchService(store, embeddings, completion)
        service.search("bus deficit guarantee")
        service.search_page("bus deficit guarantee", exclude_ids=["rec_1"])
    """

    def __init__(
        self,
        store: DocumentStore,
        embeddings: EmbeddingProvider,
        completion: CompletionProvider,
        settings: SearchSettings | None = None,
        tracer: TracerProtocol | None = None,
    ):
        self.settings = settings or get_settings()
        self.store = store
        self._tracer = tracer or get_tracer()
        self._bulk_graph = build_search_graph(
            store, embeddings, completion, self.settings, paginated=False
        )
        self._page_graph = build_search_graph(
            store, embeddings, completion, self.settings, paginated=True
        )

    def _run(self, mode: str, graph, query: str, exclude_ids: list) -> dict:
        attrs = search_request_attributes(
            mode,
            query,
            excluded_count=len(exclude_ids),
            capture_query_text=get_tracing_config().capture_query_text,
        )
        with self._tracer.start_span("search.request", attributes=attrs) as span:
            try:
                state = graph.invoke(create_initial_state(query, exclude_ids))
            except Exception as e:
                span.record_exception(e)
                span.set_status("error", str(e))
                raise
            for key, value in search_result_attributes(state).items():
                span.set_attribute(key, value)
            span.set_status("ok")
        return state

    def search(self, query: str) -> SearchResponse:
        """Answer a query over the top merged candidates."""
        query = normalize_query(query)
        logger.info("Bulk search: query_len=%d", len(query))

        state = self._run("bulk", self._bulk_graph, query, [])
        return SearchResponse(answer=state["answer"], sources=state["sources"])

    def search_page(
        self,
        query: str,
        exclude_ids: Iterable[DocumentId] | None = None,
    ) -> PageResponse:
        """Answer over the first candidate not in ``exclude_ids``."""
        query = normalize_query(query)
        if isinstance(exclude_ids, (str, bytes)):
            raise InputMalformed("exclude_ids must be a sequence of ids, not a string")
        excluded = list(exclude_ids or [])
        logger.info("Paginated search: query_len=%d excluded=%d", len(query), len(excluded))

        state = self._run("page", self._page_graph, query, excluded)
        return PageResponse(
            answer=state["answer"],
            sources=state["sources"],
            has_more=state["has_more"],
            current_id=state["current_id"],
        )

    def iter_pages(self, query: str, max_pages: int | None = None) -> Iterator[PageResponse]:
        """
        Walk every page for ``query``, feeding each current_id back as an exclusion.

        This is what a client does across requests; it terminates because
        each step removes one document from a finite corpus.
        """
        excluded: list = []
        pages = 0
        while max_pages is None or pages < max_pages:
            page = self.search_page(query, excluded)
            if page.current_id is None:
                return
            yield page
            pages += 1
            if not page.has_more:
                return
            excluded.append(page.current_id)


# ---------------------------------------------------------------------------
# SERVICE CACHING
# ---------------------------------------------------------------------------

_service_cache: dict[str, SearchService] = {}


def get_search_service(
    settings: SearchSettings | None = None,
    force_rebuild: bool = False,
) -> SearchService:
    """
    Get or create the default search service.

    Providers and store are chosen from settings. An in-memory store is
    seeded with the sample meeting records on first use.
    """
    cache_key = "default"
    if cache_key in _service_cache and not force_rebuild:
        return _service_cache[cache_key]

    from meeting_search.completion import get_completion_provider
    from meeting_search.embeddings import get_embedding_provider
    from meeting_search.retrieval import (
        InMemoryDocumentStore,
        get_document_store,
        seed_document_store,
    )

    settings = settings or get_settings()
    embeddings = get_embedding_provider(
        use_mock=settings.use_mock_embeddings,
        model=settings.embedding_model,
        timeout=settings.provider_timeout_s,
    )
    completion = get_completion_provider(
        use_mock=settings.use_mock_completion,
        model_name=settings.completion_model,
        temperature=settings.completion_temperature,
        max_tokens=settings.completion_max_tokens,
        timeout=settings.provider_timeout_s,
    )
    store = get_document_store(use_postgres=settings.use_postgres, embeddings=embeddings)
    store.connect()

    if isinstance(store, InMemoryDocumentStore):
        seed_document_store(store)
        logger.info("Seeded in-memory store with %d records", len(store))

    service = SearchService(store, embeddings, completion, settings)
    _service_cache[cache_key] = service
    return service


def clear_service_cache() -> None:
    """Close and drop the cached service. Useful for testing."""
    for service in _service_cache.values():
        service.store.close()
    _service_cache.clear()

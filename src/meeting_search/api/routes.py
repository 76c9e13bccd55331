"""
Search endpoints - bulk and paginated.

Both endpoints are synchronous and run in the threadpool. A client
disconnect does not cancel the request: in-flight provider calls run to
completion or to their own timeout (PROVIDER_TIMEOUT_S) and the result
is discarded.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Request

from meeting_search.schemas.search import (
    PageRequest,
    PageResponse,
    SearchRequest,
    SearchResponse,
)
from meeting_search.search.service import SearchService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["search"])


def get_service(request: Request) -> SearchService:
    """Return the SearchService stored on app.state at startup."""
    return request.app.state.service


@router.post("/search", response_model=SearchResponse)
def search(
    request: SearchRequest,
    service: SearchService = Depends(get_service),
):
    """Answer a question from the top merged candidates.

    Synchronous endpoint: runs in the threadpool and blocks until the
    answer is generated. An empty merge returns the no-results sentence
    with ``sources: []``.
    """
    return service.search(request.query)


@router.post("/search/page", response_model=PageResponse)
def search_page(
    request: PageRequest,
    service: SearchService = Depends(get_service),
):
    """Answer from the next unseen candidate.

    Clients add ``currentId`` to ``excludeIds`` and call again while
    ``hasMore`` is true.
    """
    return service.search_page(request.query, request.exclude_ids)


@router.get("/health")
def health():
    return {"status": "ok"}

from meeting_search.schemas.search import (
    ErrorResponse,
    PageRequest,
    PageResponse,
    SearchRequest,
    SearchResponse,
)

__all__ = [
    "SearchRequest",
    "PageRequest",
    "SearchResponse",
    "PageResponse",
    "ErrorResponse",
]

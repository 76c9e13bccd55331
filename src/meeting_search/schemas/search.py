"""
Request/response contracts for the search API.

These Pydantic models are the wire format for both the HTTP layer and
the CLI's JSON output. Field aliases keep the camelCase names clients
already send (excludeIds, hasMore, currentId) while Python code uses
snake_case.
"""

from __future__ import annotations

from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

DocumentIdField = Union[int, str]


def _require_text(value: str) -> str:
    value = value.strip()
    if not value:
        raise ValueError("query must not be blank")
    return value


class SearchRequest(BaseModel):
    """Bulk-mode request: one answer over the top candidates."""

    query: str = Field(description="Natural-language question over the meeting archive")

    @field_validator("query")
    @classmethod
    def _strip_query(cls, value: str) -> str:
        return _require_text(value)


class PageRequest(BaseModel):
    """Paginated request: one candidate at a time, skipping ids already seen."""

    model_config = ConfigDict(populate_by_name=True)

    query: str = Field(description="Natural-language question over the meeting archive")
    exclude_ids: list[DocumentIdField] = Field(
        default_factory=list,
        alias="excludeIds",
        description="Ids returned by earlier pages of the same walk",
    )

    @field_validator("query")
    @classmethod
    def _strip_query(cls, value: str) -> str:
        return _require_text(value)

    @field_validator("exclude_ids", mode="before")
    @classmethod
    def _null_means_none_seen(cls, value: Optional[list]) -> list:
        return [] if value is None else value


class SearchResponse(BaseModel):
    """Bulk-mode answer. ``sources`` holds the metadata of every record used."""

    answer: str
    sources: list[dict[str, Any]] = Field(default_factory=list)


class PageResponse(BaseModel):
    """One page of a paginated walk."""

    model_config = ConfigDict(populate_by_name=True)

    answer: str
    sources: list[dict[str, Any]] = Field(default_factory=list)
    has_more: bool = Field(default=False, alias="hasMore")
    current_id: Optional[DocumentIdField] = Field(default=None, alias="currentId")


class ErrorResponse(BaseModel):
    error: str

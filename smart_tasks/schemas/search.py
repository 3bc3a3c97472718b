"""
Smart Search Schemas

Request/response bodies of the ``/smart-search`` endpoint.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, ValidationError

from smart_tasks.core.errors import InvalidQueryError
from smart_tasks.schemas.tasks import TaskMatch


class SearchRequest(BaseModel):
    """Request body for smart search. Blank queries are rejected by the service."""

    query: str = Field(..., description="Natural language search query")


class SearchResponse(BaseModel):
    """
    Successful search result.

    ``results`` holds the rows exactly as the similarity procedure
    returned them, ranked by similarity (highest first).
    """

    results: list[dict[str, Any]] = Field(default_factory=list)
    query: str = Field(description="The trimmed query that was searched")

    def matches(self) -> list[TaskMatch]:
        """Typed view of ``results``."""
        return [TaskMatch.model_validate(row) for row in self.results]


class ErrorResponse(BaseModel):
    """Uniform error body for every failed request."""

    error: str


def parse_search_request(body: bytes) -> SearchRequest:
    """
    Decode a raw request body into a ``SearchRequest``.

    Raises:
        InvalidQueryError: If the body is not a JSON object with a string
            ``query`` field.
    """
    try:
        return SearchRequest.model_validate_json(body or b"{}")
    except ValidationError as e:
        raise InvalidQueryError() from e

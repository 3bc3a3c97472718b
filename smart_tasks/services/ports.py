"""
Ports (interfaces) used by the search service.

The search service depends on Protocols instead of concrete implementations,
so the managed backend can be replaced by stand-ins in tests.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Protocol


@dataclass(frozen=True)
class AuthenticatedUser:
    """Identity resolved from a bearer token."""

    id: str
    email: str | None = None


class AuthResolver(Protocol):
    """Turns an access token into a user, or None when the token is not valid."""

    async def resolve_user(self, token: str) -> AuthenticatedUser | None: ...


class Embedder(Protocol):
    """Text to fixed-dimension, normalized vector."""

    async def embed_query(self, query: str) -> list[float]: ...


class SimilaritySearcher(Protocol):
    """
    Ranked task lookup by embedding.

    ``access_token`` is forwarded so that the backend restricts the ranking
    to the caller's own rows.
    """

    async def search_tasks(
        self,
        *,
        access_token: str,
        query_embedding: list[float],
        similarity_threshold: float,
        match_count: int,
    ) -> list[dict[str, Any]]: ...

"""
Smart Search Service

Turns a free-text query into the caller's most similar tasks.

Flow (each step may end the request with a ``ServiceError``):
    query check → backend configuration → bearer token →
    token resolution → query embedding → similarity procedure

Exactly one embedding and one similarity call happen per successful
request; nothing is cached or retried.
"""

from __future__ import annotations

import logging
from typing import Final

from smart_tasks.core.config import Settings
from smart_tasks.core.errors import (
    InvalidAuthorizationError,
    InvalidQueryError,
    MissingAuthorizationError,
)
from smart_tasks.schemas.search import SearchResponse
from smart_tasks.services.ports import AuthResolver, Embedder, SimilaritySearcher
from smart_tasks.services.supabase import SupabaseAuthResolver, SupabaseSimilaritySearcher
from smart_tasks.services.vector import VectorService

logger = logging.getLogger(__name__)

SIMILARITY_THRESHOLD: Final[float] = 0.7
MATCH_COUNT: Final[int] = 5

_BEARER_PREFIX: Final[str] = "bearer "


def normalize_query(query: str | None) -> str:
    """
    Trim a raw query.

    Raises:
        InvalidQueryError: If nothing is left after trimming.
    """
    text = (query or "").strip()
    if not text:
        raise InvalidQueryError()
    return text


def extract_bearer_token(authorization: str | None) -> str:
    """
    Pull the access token out of an ``Authorization`` header value.

    A value without the ``Bearer`` scheme is taken as the token itself.

    Raises:
        MissingAuthorizationError: If the header is absent.
        InvalidAuthorizationError: If the header carries no token.
    """
    if authorization is None or not authorization.strip():
        raise MissingAuthorizationError()

    value = authorization.strip()
    if value.lower().startswith(_BEARER_PREFIX):
        value = value[len(_BEARER_PREFIX):].strip()
    elif value.lower() == _BEARER_PREFIX.strip():
        value = ""

    if not value:
        raise InvalidAuthorizationError()
    return value


class SmartSearchService:
    """
    Orchestrates one smart search request.

    Collaborators default to the Supabase adapters and the local
    embedding model; the adapters are built per request from the
    settings, after the configuration check.

    Usage::

        service = SmartSearchService(get_settings())
        response = await service.search("buy milk", authorization="Bearer ...")
    """

    def __init__(
        self,
        settings: Settings,
        *,
        auth_resolver: AuthResolver | None = None,
        embedder: Embedder | None = None,
        searcher: SimilaritySearcher | None = None,
    ) -> None:
        self._settings = settings
        self._auth_resolver = auth_resolver
        self._embedder: Embedder = embedder or VectorService
        self._searcher = searcher

    async def search(self, query: str | None, *, authorization: str | None) -> SearchResponse:
        """
        Rank the caller's tasks against ``query``.

        Args:
            query: Raw query text from the request body.
            authorization: Raw ``Authorization`` header value (or None).

        Returns:
            SearchResponse with at most ``MATCH_COUNT`` rows, each at or
            above ``SIMILARITY_THRESHOLD``, and the trimmed query.
        """
        text = normalize_query(query)

        credentials = self._settings.service_credentials()
        token = extract_bearer_token(authorization)

        auth_resolver = self._auth_resolver or SupabaseAuthResolver(
            credentials,
            timeout=self._settings.HTTP_TIMEOUT,
        )
        user = await auth_resolver.resolve_user(token)
        if user is None:
            raise InvalidAuthorizationError()

        embedding = await self._embedder.embed_query(text)

        searcher = self._searcher or SupabaseSimilaritySearcher(
            credentials,
            timeout=self._settings.HTTP_TIMEOUT,
        )
        rows = await searcher.search_tasks(
            access_token=token,
            query_embedding=embedding,
            similarity_threshold=SIMILARITY_THRESHOLD,
            match_count=MATCH_COUNT,
        ) or []

        logger.info(
            "Smart search for user %s: query='%s', %d result(s)",
            user.id,
            text[:50],
            len(rows),
        )
        return SearchResponse(results=rows, query=text)

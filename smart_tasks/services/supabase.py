"""
Supabase Adapters

HTTP implementations of the ``AuthResolver`` and ``SimilaritySearcher``
ports against the managed backend (GoTrue auth + PostgREST RPC).

Design:
    - Async HTTP calls via httpx (non-blocking), one client per call.
    - The service-role key identifies the project (``apikey`` header);
      the caller's access token is the bearer, so row-level policies
      evaluate as that user.
    - An optional ``transport`` lets tests plug in ``httpx.MockTransport``.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from smart_tasks.core.config import SupabaseCredentials
from smart_tasks.core.errors import SearchFailedError
from smart_tasks.services.ports import AuthenticatedUser

logger = logging.getLogger(__name__)

SEARCH_PROCEDURE = "search_tasks_by_similarity"


def _headers(credentials: SupabaseCredentials, access_token: str) -> dict[str, str]:
    return {
        "apikey": credentials.key,
        "Authorization": f"Bearer {access_token}",
    }


class SupabaseAuthResolver:
    """
    Resolves access tokens through ``GET /auth/v1/user``.

    A 4xx answer means the token is not valid and yields ``None``.
    Server errors and transport failures propagate to the caller.
    """

    def __init__(
        self,
        credentials: SupabaseCredentials,
        *,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._credentials = credentials
        self._timeout = timeout
        self._transport = transport

    async def resolve_user(self, token: str) -> AuthenticatedUser | None:
        url = f"{self._credentials.url}/auth/v1/user"

        async with httpx.AsyncClient(
            timeout=self._timeout,
            transport=self._transport,
        ) as client:
            response = await client.get(url, headers=_headers(self._credentials, token))

        if 400 <= response.status_code < 500:
            logger.info("Token rejected by auth service (status=%d)", response.status_code)
            return None
        response.raise_for_status()

        data = response.json()
        user_id = data.get("id") if isinstance(data, dict) else None
        if not user_id:
            return None
        return AuthenticatedUser(id=str(user_id), email=data.get("email"))


class SupabaseSimilaritySearcher:
    """
    Runs ``search_tasks_by_similarity`` through ``POST /rest/v1/rpc/...``.

    Any HTTP error, transport failure or undecodable body is logged and
    reported as ``SearchFailedError``.
    """

    def __init__(
        self,
        credentials: SupabaseCredentials,
        *,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._credentials = credentials
        self._timeout = timeout
        self._transport = transport

    async def search_tasks(
        self,
        *,
        access_token: str,
        query_embedding: list[float],
        similarity_threshold: float,
        match_count: int,
    ) -> list[dict[str, Any]]:
        url = f"{self._credentials.url}/rest/v1/rpc/{SEARCH_PROCEDURE}"
        payload = {
            "query_embedding": query_embedding,
            "similarity_threshold": similarity_threshold,
            "match_count": match_count,
        }

        try:
            async with httpx.AsyncClient(
                timeout=self._timeout,
                transport=self._transport,
            ) as client:
                response = await client.post(
                    url,
                    json=payload,
                    headers=_headers(self._credentials, access_token),
                )
                response.raise_for_status()
                data = response.json()
        except httpx.HTTPStatusError as e:
            logger.exception("Search error: %s", e.response.text)
            raise SearchFailedError() from e
        except (httpx.HTTPError, ValueError) as e:
            logger.exception("Search error: %s", type(e).__name__)
            raise SearchFailedError() from e

        if data is None:
            return []
        if not isinstance(data, list):
            logger.error("Search error: unexpected payload type %s", type(data).__name__)
            raise SearchFailedError()
        return data

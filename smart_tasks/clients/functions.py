"""
Edge Function Client

Client-side calls to the backend's serverless functions, as the browser
makes them:

    generate-subtasks — ``{"taskTitle": ...}`` → ``{"subtasks": [...]}``
    smart-search      — ``{"query": ...}``     → ``{"results": [...], "query": ...}``

Failures arrive as ``{"error": ...}`` and are raised as ``FunctionCallError``
whose kind follows the HTTP status.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx
from pydantic import ValidationError

from smart_tasks.core.config import Settings, get_settings
from smart_tasks.core.errors import ErrorKind, FunctionCallError
from smart_tasks.schemas.functions import SubtaskSuggestionRequest, SubtaskSuggestionResponse
from smart_tasks.schemas.search import SearchResponse

logger = logging.getLogger(__name__)

SUBTASKS_FUNCTION = "generate-subtasks"
SEARCH_FUNCTION = "smart-search"


class EdgeFunctionClient:
    """
    Async client for the backend's edge functions.

    Construction needs SUPABASE_URL and SUPABASE_ANON_KEY; a missing value
    raises ``ConfigurationError`` right away. Calls authenticate with the
    user's access token when given, otherwise with the anon key.

    Usage::

        client = EdgeFunctionClient()
        steps = await client.suggest_subtasks("Plan trip", access_token=session_token)
    """

    def __init__(
        self,
        settings: Settings | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        settings = settings or get_settings()
        self._credentials = settings.client_credentials()
        self._timeout = settings.HTTP_TIMEOUT
        self._transport = transport

    async def suggest_subtasks(
        self,
        task_title: str,
        *,
        access_token: str | None = None,
    ) -> list[str]:
        """
        Ask the generator for subtasks of a task.

        Raises:
            FunctionCallError: ``validation`` for a blank title (no request
                is sent), otherwise per the upstream status.
        """
        try:
            request = SubtaskSuggestionRequest(task_title=task_title.strip())
        except ValidationError as e:
            raise FunctionCallError(
                "Task title is required",
                kind=ErrorKind.VALIDATION,
                status_code=400,
            ) from e

        data = await self._invoke(
            SUBTASKS_FUNCTION,
            request.model_dump(by_alias=True),
            access_token,
        )
        try:
            return SubtaskSuggestionResponse.model_validate(data).subtasks
        except ValidationError as e:
            raise FunctionCallError("Malformed subtask suggestions") from e

    async def smart_search(self, query: str, *, access_token: str) -> SearchResponse:
        """Run a smart search as the given user."""
        data = await self._invoke(SEARCH_FUNCTION, {"query": query}, access_token)
        try:
            return SearchResponse.model_validate(data)
        except ValidationError as e:
            raise FunctionCallError("Malformed search response") from e

    async def _invoke(
        self,
        name: str,
        payload: dict[str, Any],
        access_token: str | None,
    ) -> Any:
        """
        POST ``payload`` to a function and return the decoded JSON body.

        Raises:
            FunctionCallError: On transport failure, non-JSON body,
                non-2xx status or an ``error`` field in the body.
        """
        url = f"{self._credentials.url}/functions/v1/{name}"
        headers = {
            "apikey": self._credentials.key,
            "Authorization": f"Bearer {access_token or self._credentials.key}",
        }

        try:
            async with httpx.AsyncClient(
                timeout=self._timeout,
                transport=self._transport,
            ) as client:
                response = await client.post(url, json=payload, headers=headers)
        except httpx.HTTPError as e:
            logger.warning("Edge function '%s' unreachable: %s", name, e)
            raise FunctionCallError(f"Failed to reach {name}") from e

        try:
            data = response.json()
        except ValueError:
            data = None

        error = data.get("error") if isinstance(data, dict) else None
        if response.is_error or error:
            message = str(error) if error else f"{name} failed with status {response.status_code}"
            logger.warning("Edge function '%s' error (%d): %s", name, response.status_code, message)
            status_code = response.status_code if response.is_error else 502
            raise FunctionCallError.from_status(status_code, message)

        if data is None:
            raise FunctionCallError(f"{name} returned an invalid body")
        return data

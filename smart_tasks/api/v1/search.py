"""
Smart Search Router

Endpoints:
    OPTIONS /smart-search  — Cross-origin preflight (empty 200).
    POST    /smart-search  — Rank the caller's tasks by similarity to a query.

Every other method on the path answers 405. Failures are raised as
``ServiceError`` and rendered by ``service_error_handler``.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Request, Response
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from smart_tasks.api.cors import CORS_HEADERS
from smart_tasks.core.config import get_settings
from smart_tasks.core.errors import (
    InternalServerError,
    MethodNotAllowedError,
    ServiceError,
)
from smart_tasks.schemas.search import ErrorResponse, SearchResponse, parse_search_request
from smart_tasks.services.smart_search import SmartSearchService

logger = logging.getLogger(__name__)

router = APIRouter()

ROUTED_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


# ---------------------------------------------------------------------------
# Dependencies
# ---------------------------------------------------------------------------


def get_search_service() -> SmartSearchService:
    """
    FastAPI dependency — returns a SmartSearchService bound to the settings.

    Unreadable settings are reported as a ``ServiceError`` so that the
    response keeps the uniform body and CORS headers.
    """
    try:
        settings = get_settings()
    except ValidationError as e:
        logger.exception("Invalid application settings")
        raise InternalServerError() from e
    return SmartSearchService(settings)


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------


@router.api_route(
    "/smart-search",
    methods=ROUTED_METHODS,
    response_model=None,
    summary="Semantic search across the caller's tasks",
    responses={
        200: {"model": SearchResponse, "description": "Ranked matches (possibly empty)"},
        400: {"model": ErrorResponse, "description": "Query is required"},
        401: {"model": ErrorResponse, "description": "Missing or invalid authorization"},
        405: {"model": ErrorResponse, "description": "Method not allowed"},
        500: {"model": ErrorResponse, "description": "Configuration or upstream failure"},
    },
)
async def smart_search(
    request: Request,
    service: SmartSearchService = Depends(get_search_service),
) -> Response:
    """
    Search the caller's tasks by semantic similarity.

    Embeds the trimmed query with gte-small, then asks the backend's
    ``search_tasks_by_similarity`` procedure for up to 5 tasks scoring
    at least 0.7, forwarding the caller's bearer token so that only
    their own tasks are ranked.
    """
    if request.method == "OPTIONS":
        return Response(status_code=200, headers=CORS_HEADERS)

    if request.method != "POST":
        raise MethodNotAllowedError()

    try:
        body = await request.body()
        payload = parse_search_request(body)
        result = await service.search(
            payload.query,
            authorization=request.headers.get("Authorization"),
        )
    except ServiceError:
        raise
    except Exception as e:
        logger.exception("Smart search failed")
        raise InternalServerError() from e

    return JSONResponse(
        status_code=200,
        content=result.model_dump(mode="json"),
        headers=CORS_HEADERS,
    )

"""
Smart Tasks — Application Entry Point

FastAPI application serving the smart search endpoint of the task manager.
Persistence, auth and the similarity procedure live in the managed backend.

Start locally:
    uvicorn smart_tasks.main:app --host 0.0.0.0 --port 8000 --reload
"""

from __future__ import annotations

import asyncio
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from starlette.exceptions import HTTPException as StarletteHTTPException

from smart_tasks.api.errors import http_error_handler, service_error_handler
from smart_tasks.api.v1.search import router as search_router
from smart_tasks.core.config import get_settings
from smart_tasks.core.database import dispose_engine
from smart_tasks.core.errors import ServiceError
from smart_tasks.core.logging import setup_logging
from smart_tasks.services.vector import VectorService

# Initialize logging before any log statements
setup_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Startup:
        - Warns when backend configuration is missing (requests will 500).
        - Pre-loads the embedding model when PRELOAD_EMBEDDING_MODEL is set.

    Shutdown:
        - Releases the embedding model and any database engine.
    """
    settings = get_settings()
    logger.info("Starting Smart Tasks (environment=%s)...", settings.ENVIRONMENT)

    if not settings.SUPABASE_URL or not settings.SUPABASE_SERVICE_ROLE_KEY:
        logger.warning("Supabase configuration missing - search requests will fail")

    if settings.PRELOAD_EMBEDDING_MODEL:
        logger.info("Pre-loading embedding model...")
        await asyncio.to_thread(VectorService._get_model)
        logger.info("Embedding model ready")

    yield

    VectorService.reset()
    await dispose_engine()
    logger.info("Smart Tasks shutdown complete")


app = FastAPI(
    title="Smart Tasks",
    description="Semantic search over a user's tasks.",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_exception_handler(ServiceError, service_error_handler)
app.add_exception_handler(StarletteHTTPException, http_error_handler)
app.include_router(search_router, tags=["Search"])


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Health check for load balancers and orchestrators."""
    return {
        "status": "ok",
        "service": "smart-tasks",
        "environment": get_settings().ENVIRONMENT,
    }

"""
Pytest Configuration and Fixtures

Shared fixtures for the unit suite: a stub backend (auth, embedder,
similarity procedure) and a TestClient wired to it.
"""

import os

from dotenv import load_dotenv

# ---------------------------------------------------------------------------
# Test environment defaults — MUST be before any smart_tasks imports.
#
# 1. Load .env first so that local credentials are available.
# 2. setdefault fills in anything still missing (CI runners, fresh clones
#    without a .env file) so that the backend configuration check passes.
# ---------------------------------------------------------------------------
load_dotenv()  # .env → os.environ (no-op if file is missing)

_test_env = {
    "SUPABASE_URL": "https://project.supabase.test",
    "SUPABASE_SERVICE_ROLE_KEY": "service-role-key",
    "SUPABASE_ANON_KEY": "anon-key",
    "PRELOAD_EMBEDDING_MODEL": "false",
}
for _key, _value in _test_env.items():
    os.environ.setdefault(_key, _value)

# ---------------------------------------------------------------------------
# Imports (safe now that env vars are set)
# ---------------------------------------------------------------------------
from collections.abc import Generator  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from smart_tasks.api.v1.search import get_search_service  # noqa: E402
from smart_tasks.core.config import Settings  # noqa: E402
from smart_tasks.main import app  # noqa: E402
from smart_tasks.services.smart_search import SmartSearchService  # noqa: E402

from .fakes import (  # noqa: E402
    OTHER_TOKEN,
    OTHER_USER_ID,
    QUERY_VECTORS,
    USER_ID,
    USER_TOKEN,
    FakeAuthResolver,
    FakeEmbedder,
    FakeSimilaritySearcher,
    TaskBackend,
)


@pytest.fixture
def settings() -> Settings:
    """Settings with backend credentials, independent of the process env."""
    return Settings(
        _env_file=None,
        SUPABASE_URL="https://project.supabase.test",
        SUPABASE_SERVICE_ROLE_KEY="service-role-key",
        SUPABASE_ANON_KEY="anon-key",
    )


@pytest.fixture
def backend() -> TaskBackend:
    """Empty in-memory backend with two registered users."""
    backend = TaskBackend()
    backend.register(USER_TOKEN, USER_ID)
    backend.register(OTHER_TOKEN, OTHER_USER_ID)
    return backend


@pytest.fixture
def auth_resolver(backend: TaskBackend) -> FakeAuthResolver:
    return FakeAuthResolver(backend)


@pytest.fixture
def embedder() -> FakeEmbedder:
    return FakeEmbedder(QUERY_VECTORS)


@pytest.fixture
def searcher(backend: TaskBackend) -> FakeSimilaritySearcher:
    return FakeSimilaritySearcher(backend)


@pytest.fixture
def search_service(
    settings: Settings,
    auth_resolver: FakeAuthResolver,
    embedder: FakeEmbedder,
    searcher: FakeSimilaritySearcher,
) -> SmartSearchService:
    return SmartSearchService(
        settings,
        auth_resolver=auth_resolver,
        embedder=embedder,
        searcher=searcher,
    )


@pytest.fixture
def client(search_service: SmartSearchService) -> Generator[TestClient, None, None]:
    """
    TestClient with the search service replaced by the stub-backed one.

    Yields:
        TestClient: lifespan runs on enter/exit; overrides are cleared after.
    """
    app.dependency_overrides[get_search_service] = lambda: search_service
    try:
        with TestClient(app) as test_client:
            yield test_client
    finally:
        app.dependency_overrides.clear()

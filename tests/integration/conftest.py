"""
Live Integration Fixtures

Point SMART_SEARCH_LIVE_URL at a deployed smart-search endpoint (the
FastAPI service or the hosted function) to enable these tests.
SMART_SEARCH_LIVE_TOKEN, when set, is a user access token used for the
authenticated checks.
"""

import os
import time
from collections.abc import Generator

import httpx
import pytest

LIVE_URL = os.environ.get("SMART_SEARCH_LIVE_URL")
LIVE_TOKEN = os.environ.get("SMART_SEARCH_LIVE_TOKEN")


@pytest.fixture(scope="session")
def live_url() -> str:
    """Endpoint under test; skips the live suite when not configured."""
    if not LIVE_URL:
        pytest.skip("SMART_SEARCH_LIVE_URL not set")
    return LIVE_URL


@pytest.fixture(scope="session")
def live_token() -> str:
    """User access token for authenticated live checks."""
    if not LIVE_TOKEN:
        pytest.skip("SMART_SEARCH_LIVE_TOKEN not set")
    return LIVE_TOKEN


@pytest.fixture(scope="session")
def wait_for_endpoint(live_url: str) -> None:
    """
    Block until the endpoint answers a CORS preflight or timeout expires.

    Polls with 1s intervals for up to 30s.
    """
    timeout = 30
    start = time.time()

    while time.time() - start < timeout:
        try:
            res = httpx.options(live_url, timeout=1.0)
            if res.status_code == 200:
                return
        except httpx.RequestError:
            time.sleep(1)

    pytest.fail(f"Endpoint unreachable: {live_url}")


@pytest.fixture(scope="session")
def live_client(wait_for_endpoint) -> Generator[httpx.Client, None, None]:
    """
    Session-scoped HTTP client for the live endpoint.

    Yields:
        httpx.Client: automatically closed after tests.
    """
    with httpx.Client(timeout=30.0) as client:
        yield client

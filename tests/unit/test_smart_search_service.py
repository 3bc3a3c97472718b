"""
Smart Search Service Unit Tests

Covers the request helpers and the orchestration order of
``SmartSearchService`` without going through HTTP.
"""

from __future__ import annotations

import pytest

from smart_tasks.core.config import Settings
from smart_tasks.core.errors import (
    ConfigurationError,
    ErrorKind,
    InvalidAuthorizationError,
    InvalidQueryError,
    MissingAuthorizationError,
)
from smart_tasks.schemas.search import parse_search_request
from smart_tasks.services.smart_search import (
    SmartSearchService,
    extract_bearer_token,
    normalize_query,
)
from tests.fakes import (
    USER_ID,
    USER_TOKEN,
    FakeAuthResolver,
    FakeEmbedder,
    FakeSimilaritySearcher,
    TaskBackend,
    vector_with_similarity,
)

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


class TestNormalizeQuery:
    def test_trims_whitespace(self) -> None:
        assert normalize_query("  buy milk\t") == "buy milk"

    @pytest.mark.parametrize("raw", [None, "", "   ", "\n"])
    def test_blank_is_rejected(self, raw: str | None) -> None:
        with pytest.raises(InvalidQueryError) as exc_info:
            normalize_query(raw)
        assert exc_info.value.kind is ErrorKind.VALIDATION
        assert exc_info.value.status_code == 400


class TestExtractBearerToken:
    @pytest.mark.parametrize(
        ("header", "token"),
        [
            ("Bearer abc.def", "abc.def"),
            ("bearer abc.def", "abc.def"),
            ("Bearer   abc.def  ", "abc.def"),
            ("abc.def", "abc.def"),
        ],
    )
    def test_extracts_token(self, header: str, token: str) -> None:
        assert extract_bearer_token(header) == token

    @pytest.mark.parametrize("header", [None, "", "   "])
    def test_missing_header(self, header: str | None) -> None:
        with pytest.raises(MissingAuthorizationError):
            extract_bearer_token(header)

    @pytest.mark.parametrize("header", ["Bearer", "Bearer   "])
    def test_scheme_without_token(self, header: str) -> None:
        with pytest.raises(InvalidAuthorizationError):
            extract_bearer_token(header)


class TestParseSearchRequest:
    def test_reads_query(self) -> None:
        assert parse_search_request(b'{"query": "buy milk"}').query == "buy milk"

    def test_extra_fields_are_ignored(self) -> None:
        assert parse_search_request(b'{"query": "x", "k": 3}').query == "x"

    @pytest.mark.parametrize("body", [b"", b"{}", b"[]", b"{", b'{"query": 1}'])
    def test_invalid_bodies(self, body: bytes) -> None:
        with pytest.raises(InvalidQueryError):
            parse_search_request(body)


# ---------------------------------------------------------------------------
# Orchestration
# ---------------------------------------------------------------------------


class TestSmartSearchService:
    @pytest.mark.asyncio
    async def test_search_returns_trimmed_query_and_rows(
        self, search_service: SmartSearchService, backend: TaskBackend
    ) -> None:
        backend.add_task("Buy groceries", USER_ID, vector_with_similarity(0.81))

        response = await search_service.search(
            " buy milk ", authorization=f"Bearer {USER_TOKEN}"
        )

        assert response.query == "buy milk"
        matches = response.matches()
        assert [m.title for m in matches] == ["Buy groceries"]
        assert str(matches[0].user_id) == USER_ID

    @pytest.mark.asyncio
    async def test_configuration_is_checked_before_authorization(
        self,
        auth_resolver: FakeAuthResolver,
        embedder: FakeEmbedder,
        searcher: FakeSimilaritySearcher,
    ) -> None:
        service = SmartSearchService(
            Settings(_env_file=None, SUPABASE_URL="", SUPABASE_SERVICE_ROLE_KEY="key"),
            auth_resolver=auth_resolver,
            embedder=embedder,
            searcher=searcher,
        )

        with pytest.raises(ConfigurationError) as exc_info:
            await service.search("buy milk", authorization=None)

        assert exc_info.value.message == "Supabase configuration missing"
        assert exc_info.value.status_code == 500

    @pytest.mark.asyncio
    async def test_invalid_token_stops_before_embedding(
        self,
        search_service: SmartSearchService,
        embedder: FakeEmbedder,
        searcher: FakeSimilaritySearcher,
    ) -> None:
        with pytest.raises(InvalidAuthorizationError):
            await search_service.search("buy milk", authorization="Bearer unknown")

        assert embedder.calls == []
        assert searcher.calls == []

    @pytest.mark.asyncio
    async def test_null_rows_become_empty_list(
        self,
        settings: Settings,
        auth_resolver: FakeAuthResolver,
        embedder: FakeEmbedder,
    ) -> None:
        class NullSearcher:
            async def search_tasks(self, **kwargs):
                return None

        service = SmartSearchService(
            settings,
            auth_resolver=auth_resolver,
            embedder=embedder,
            searcher=NullSearcher(),
        )

        response = await service.search("buy milk", authorization=f"Bearer {USER_TOKEN}")

        assert response.results == []

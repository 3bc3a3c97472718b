"""
Task Embedding Indexer Unit Tests

Uses an in-memory repository and a deterministic vector service; the
session is an AsyncMock so commits can be counted.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from unittest.mock import AsyncMock

import pytest

from smart_tasks.services.indexing import TaskEmbeddingIndexer


@dataclass
class _Row:
    id: uuid.UUID
    title: str
    embedding: list[float] | None = None


@dataclass
class _InMemoryTaskRepository:
    rows: list[_Row] = field(default_factory=list)
    list_calls: list[int] = field(default_factory=list)

    async def list_missing_embeddings(self, session, limit: int = 100) -> list[_Row]:
        self.list_calls.append(limit)
        return [row for row in self.rows if row.embedding is None][:limit]

    async def update_embedding(self, session, task_id: uuid.UUID, embedding: list[float]) -> None:
        for row in self.rows:
            if row.id == task_id:
                row.embedding = embedding


class _LengthVectors:
    batches: list[list[str]] = []

    @classmethod
    async def embed_texts(cls, texts: list[str]) -> list[list[float]]:
        cls.batches.append(list(texts))
        return [[float(len(text))] for text in texts]


@pytest.fixture
def repository() -> _InMemoryTaskRepository:
    titles = ["Buy milk", "Write report", "Call mom", "Book dentist", "Pay rent"]
    return _InMemoryTaskRepository(rows=[_Row(uuid.uuid4(), t) for t in titles])


@pytest.fixture
def vectors() -> type[_LengthVectors]:
    _LengthVectors.batches = []
    return _LengthVectors


class TestTaskEmbeddingIndexer:
    @pytest.mark.asyncio
    async def test_indexes_every_pending_task(
        self, repository: _InMemoryTaskRepository, vectors: type[_LengthVectors]
    ) -> None:
        session = AsyncMock()
        indexer = TaskEmbeddingIndexer(repository, vectors)

        count = await indexer.index_pending(session, batch_size=2)

        assert count == 5
        assert all(row.embedding == [float(len(row.title))] for row in repository.rows)
        assert [len(batch) for batch in vectors.batches] == [2, 2, 1]
        assert session.commit.await_count == 3

    @pytest.mark.asyncio
    async def test_already_indexed_tasks_are_skipped(
        self, repository: _InMemoryTaskRepository, vectors: type[_LengthVectors]
    ) -> None:
        repository.rows[0].embedding = [0.0]
        indexer = TaskEmbeddingIndexer(repository, vectors)

        count = await indexer.index_pending(AsyncMock(), batch_size=10)

        assert count == 4
        assert "Buy milk" not in vectors.batches[0]
        assert repository.rows[0].embedding == [0.0]

    @pytest.mark.asyncio
    async def test_max_batches_stops_early(
        self, repository: _InMemoryTaskRepository, vectors: type[_LengthVectors]
    ) -> None:
        indexer = TaskEmbeddingIndexer(repository, vectors)

        count = await indexer.index_pending(AsyncMock(), batch_size=2, max_batches=1)

        assert count == 2
        assert sum(row.embedding is None for row in repository.rows) == 3

    @pytest.mark.asyncio
    async def test_nothing_pending(self, vectors: type[_LengthVectors]) -> None:
        session = AsyncMock()
        indexer = TaskEmbeddingIndexer(_InMemoryTaskRepository(), vectors)

        assert await indexer.index_pending(session) == 0
        assert vectors.batches == []
        session.commit.assert_not_awaited()

    @pytest.mark.asyncio
    @pytest.mark.parametrize("batch_size", [0, -3])
    async def test_invalid_batch_size(
        self, repository: _InMemoryTaskRepository, batch_size: int
    ) -> None:
        with pytest.raises(ValueError):
            await TaskEmbeddingIndexer(repository).index_pending(AsyncMock(), batch_size=batch_size)

"""
Task Embedding Indexer

Computes the title embeddings that ``search_tasks_by_similarity`` ranks
against. Tasks are picked up while ``embedding IS NULL``, embedded in
batches with the same model the search endpoint uses, and written back
one batch per transaction.
"""

from __future__ import annotations

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from smart_tasks.repositories.tasks import TaskRepository
from smart_tasks.services.vector import VectorService

logger = logging.getLogger(__name__)

DEFAULT_BATCH_SIZE = 64


class TaskEmbeddingIndexer:
    """
    Backfills missing task embeddings.

    Usage::

        indexer = TaskEmbeddingIndexer()
        async with session_factory() as session:
            count = await indexer.index_pending(session)
    """

    def __init__(
        self,
        repository: TaskRepository | None = None,
        vector_service: type[VectorService] = VectorService,
    ) -> None:
        self._repository = repository or TaskRepository()
        self._vectors = vector_service

    async def index_pending(
        self,
        session: AsyncSession,
        batch_size: int = DEFAULT_BATCH_SIZE,
        max_batches: int | None = None,
    ) -> int:
        """
        Embed every task that has no embedding yet.

        Args:
            session: Active async database session.
            batch_size: Tasks embedded and committed together.
            max_batches: Stop after this many batches (None = until done).

        Returns:
            Number of tasks indexed.
        """
        if batch_size < 1:
            raise ValueError("batch_size must be >= 1")

        indexed = 0
        batches = 0
        while max_batches is None or batches < max_batches:
            tasks = await self._repository.list_missing_embeddings(session, batch_size)
            if not tasks:
                break

            embeddings = await self._vectors.embed_texts([task.title for task in tasks])
            for task, embedding in zip(tasks, embeddings, strict=True):
                await self._repository.update_embedding(session, task.id, embedding)
            await session.commit()

            indexed += len(tasks)
            batches += 1
            logger.info("Indexed batch %d (%d tasks, %d total)", batches, len(tasks), indexed)

        return indexed

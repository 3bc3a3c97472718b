"""
Task Repository

Data access for the embedding backfill. Runs over a direct database
connection with the operator's credentials, outside row-level policies.
"""

from __future__ import annotations

import logging
import uuid
from collections.abc import Sequence

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from smart_tasks.models.orm import TaskRecord

logger = logging.getLogger(__name__)


class TaskRepository:
    """
    Repository for task embedding maintenance.

    All methods expect an externally managed ``AsyncSession``.
    """

    async def list_missing_embeddings(
        self,
        session: AsyncSession,
        limit: int = 100,
    ) -> Sequence[TaskRecord]:
        """Tasks whose embedding has not been computed yet, oldest first."""
        stmt = (
            select(TaskRecord)
            .where(TaskRecord.embedding.is_(None))
            .order_by(TaskRecord.created_at, TaskRecord.id)
            .limit(limit)
        )
        result = await session.execute(stmt)
        return result.scalars().all()

    async def update_embedding(
        self,
        session: AsyncSession,
        task_id: uuid.UUID,
        embedding: list[float],
    ) -> None:
        """
        Store the embedding of one task.

        Uses a targeted UPDATE so ``updated_at`` is left alone: an
        embedding refresh is not a user edit. The caller commits.
        """
        stmt = (
            update(TaskRecord)
            .where(TaskRecord.id == task_id)
            .values(embedding=embedding, updated_at=TaskRecord.updated_at)
        )
        await session.execute(stmt)

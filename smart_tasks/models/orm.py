"""
Task Database Models

SQLAlchemy 2.0 ORM models mirroring the tables of the managed backend.
Uses pgvector for the precomputed task embeddings ranked by
``search_tasks_by_similarity``.

Tables:
    tasks    — User tasks with a 384-dim title embedding (gte-small).
    subtasks — Steps of a task, same status lifecycle, no priority.
    profiles — One row per auth user (display name, avatar URL).

Every row carries the owning user id; row-level policies defined in the
migrations restrict reads and writes to that user.
"""

from __future__ import annotations

import uuid

from pgvector.sqlalchemy import Vector
from sqlalchemy import CheckConstraint, ForeignKey, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from smart_tasks.models.base import Base, TimestampMixin

# Embedding dimension for gte-small
EMBEDDING_DIMENSION: int = 384

PRIORITIES = ("low", "medium", "high")
STATUSES = ("pending", "in-progress", "done")


def _in_list(column: str, values: tuple[str, ...]) -> str:
    quoted = ", ".join(f"'{value}'" for value in values)
    return f"{column} IN ({quoted})"


class TaskRecord(Base, TimestampMixin):
    """
    A user task.

    Attributes:
        id: UUID primary key.
        title: Task title, also the text that gets embedded.
        priority: One of ``low``, ``medium``, ``high``.
        status: One of ``pending``, ``in-progress``, ``done``.
        user_id: Owning auth user.
        embedding: 384-dim vector (nullable until the indexer runs).
    """

    __tablename__ = "tasks"
    __table_args__ = (
        CheckConstraint(_in_list("priority", PRIORITIES), name="ck_tasks_priority"),
        CheckConstraint(_in_list("status", STATUSES), name="ck_tasks_status"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )
    title: Mapped[str] = mapped_column(Text, nullable=False)
    priority: Mapped[str] = mapped_column(String(16), nullable=False, default="medium")
    status: Mapped[str] = mapped_column(String(16), nullable=False, default="pending")
    user_id: Mapped[uuid.UUID] = mapped_column(Uuid, nullable=False, index=True)
    embedding: Mapped[list[float] | None] = mapped_column(
        Vector(EMBEDDING_DIMENSION),
        nullable=True,
    )

    def __repr__(self) -> str:
        return f"<TaskRecord(id={self.id!s:.8}, title='{self.title[:20]}')>"


class SubtaskRecord(Base, TimestampMixin):
    """
    A step of a parent task.

    Deleting the parent task does not remove its subtasks; ``task_id``
    is set to NULL instead.
    """

    __tablename__ = "subtasks"
    __table_args__ = (
        CheckConstraint(_in_list("status", STATUSES), name="ck_subtasks_status"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )
    title: Mapped[str] = mapped_column(Text, nullable=False)
    task_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid,
        ForeignKey("tasks.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    status: Mapped[str] = mapped_column(String(16), nullable=False, default="pending")
    user_id: Mapped[uuid.UUID] = mapped_column(Uuid, nullable=False, index=True)

    def __repr__(self) -> str:
        return f"<SubtaskRecord(id={self.id!s:.8}, task={self.task_id!s:.8})>"


class ProfileRecord(Base, TimestampMixin):
    """
    Public profile of an auth user, keyed by the auth user id.

    ``avatar_url`` points into the ``profile-pictures`` storage bucket
    (object key ``<user_id>/avatar.<ext>``).
    """

    __tablename__ = "profiles"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True)
    full_name: Mapped[str | None] = mapped_column(Text, nullable=True)
    avatar_url: Mapped[str | None] = mapped_column(Text, nullable=True)

    def __repr__(self) -> str:
        return f"<ProfileRecord(id={self.id!s:.8})>"

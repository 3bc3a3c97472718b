"""
Task Schemas

Pydantic models for task rows as the managed backend returns them.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class TaskPriority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class TaskStatus(str, Enum):
    PENDING = "pending"
    IN_PROGRESS = "in-progress"
    DONE = "done"


class Task(BaseModel):
    """Full task representation (embedding column excluded)."""

    id: UUID
    title: str
    priority: TaskPriority = TaskPriority.MEDIUM
    status: TaskStatus = TaskStatus.PENDING
    user_id: UUID
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)  # Enables ORM model conversion


class TaskMatch(Task):
    """
    A task row returned by ``search_tasks_by_similarity``.

    Unknown columns are kept so that schema additions on the backend
    reach callers untouched.
    """

    similarity: float = Field(description="Cosine similarity to the query (higher = closer)")

    model_config = ConfigDict(from_attributes=True, extra="allow")

"""Models package — SQLAlchemy ORM for the tables owned by the managed backend."""

from smart_tasks.models.base import Base, TimestampMixin
from smart_tasks.models.orm import (
    EMBEDDING_DIMENSION,
    ProfileRecord,
    SubtaskRecord,
    TaskRecord,
)

__all__ = [
    "Base",
    "TimestampMixin",
    "EMBEDDING_DIMENSION",
    "ProfileRecord",
    "SubtaskRecord",
    "TaskRecord",
]

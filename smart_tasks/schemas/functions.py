"""
Edge Function Schemas

Request/response contract of the subtask suggestion function.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class SubtaskSuggestionRequest(BaseModel):
    """Body sent to the subtask generator (``{"taskTitle": ...}``)."""

    task_title: str = Field(..., min_length=1, alias="taskTitle")

    model_config = ConfigDict(populate_by_name=True)


class SubtaskSuggestionResponse(BaseModel):
    """Successful generator response (``{"subtasks": [...]}``)."""

    subtasks: list[str] = Field(default_factory=list)

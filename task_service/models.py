"""Pydantic models for the Task Service API.

JSON field names are lower camelCase (``isCompleted``); Python code uses the
snake_case attribute names.
"""

from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


def _trim(value: str | None) -> str | None:
    return value.strip() if value is not None else None


class TaskCreate(BaseModel):
    """Request body for creating a new task.

    ``title`` is optional at the schema level so a missing title reaches the
    handler and is reported as a 400 with a readable message.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    title: str | None = Field(default=None, description="The task title (required)")
    description: str | None = Field(default=None, description="Optional longer description")

    @field_validator("title", "description")
    @classmethod
    def _strip(cls, value: str | None) -> str | None:
        return _trim(value)


class TaskUpdate(BaseModel):
    """Request body for a partial update of an existing task."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    title: str | None = Field(default=None, description="New title for the task")
    description: str | None = Field(default=None, description="New description")
    is_completed: bool | None = Field(default=None, description="New completion status")

    @field_validator("title", "description")
    @classmethod
    def _strip(cls, value: str | None) -> str | None:
        return _trim(value)

    def changes(self) -> dict[str, Any]:
        """Fields the client actually supplied; explicit nulls count as absent."""
        return {
            name: getattr(self, name)
            for name in self.model_fields_set
            if getattr(self, name) is not None
        }


class Task(BaseModel):
    """A task item in the task manager.

    Instances are frozen: the store replaces a record on update instead of
    mutating it, so a reader never sees a half-applied change.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    id: UUID = Field(..., description="Unique identifier for the task")
    title: str = Field(..., min_length=1, description="The task title")
    description: str = Field(default="", description="Optional longer description")
    is_completed: bool = Field(default=False, description="Whether the task has been completed")

    # Runs before the length constraint so "   " is rejected as blank.
    @field_validator("title", "description", mode="before")
    @classmethod
    def _strip(cls, value: Any) -> Any:
        return value.strip() if isinstance(value, str) else value


class HealthResponse(BaseModel):
    """Response from the health check endpoint."""

    status: str = "healthy"
    version: str

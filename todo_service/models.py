"""Pydantic models for the todo service wire format.

Python attributes are snake_case; JSON on the wire is camelCase.
"""

from pydantic import BaseModel, ConfigDict, Field, StrictStr, field_validator


class Task(BaseModel):
    """A single to-do item."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = Field(description="Unique task identifier")
    text: str = Field(description="Trimmed task text")
    created_at: int = Field(
        alias="createdAt", description="Creation time in seconds since the epoch"
    )


class AddTaskRequest(BaseModel):
    """Input for AddTask."""

    text: StrictStr = Field(default="", description="Task text")

    @field_validator("text", mode="before")
    @classmethod
    def null_as_empty(cls, value):
        """JSON null means the default, as an absent field does."""
        return "" if value is None else value


class AddTaskResponse(BaseModel):
    task: Task


class GetTasksRequest(BaseModel):
    """Input for GetTasks (no fields)."""


class GetTasksResponse(BaseModel):
    tasks: list[Task] = Field(default_factory=list)


class DeleteTaskRequest(BaseModel):
    """Input for DeleteTask."""

    id: StrictStr = Field(default="", description="Task ID to delete")

    @field_validator("id", mode="before")
    @classmethod
    def null_as_empty(cls, value):
        return "" if value is None else value


class DeleteTaskResponse(BaseModel):
    success: bool

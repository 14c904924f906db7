"""Task schemas for request/response serialization."""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import ConfigDict, field_validator

from models.task import TaskPriority, TaskStatus

from .base import BaseModelSchema, BaseSchema
from .project import ProjectSummary
from .user import UserSummary


def _check_title(v: str) -> str:
    v = v.strip()
    if len(v) < 2:
        raise ValueError("Task title must be at least 2 characters")
    if len(v) > 200:
        raise ValueError("Task title must be less than 200 characters")
    return v


def _check_description(v: str) -> str:
    if len(v) > 2000:
        raise ValueError("Description must be less than 2000 characters")
    return v


class TaskCreate(BaseSchema):
    """Schema for creating a new task."""

    model_config = ConfigDict(from_attributes=True, use_enum_values=True, validate_default=True)

    title: str
    description: str = ""
    project_id: UUID
    assigned_to: UUID | None = None
    priority: TaskPriority = TaskPriority.medium
    status: TaskStatus = TaskStatus.todo
    due_date: datetime | None = None

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str) -> str:
        return _check_title(v)

    @field_validator("description", mode="before")
    @classmethod
    def validate_description(cls, v):
        if v is None:
            return ""
        if isinstance(v, str):
            return _check_description(v)
        return v


class TaskUpdate(BaseSchema):
    """Schema for updating a task.

    ``project_id`` is not accepted; a task never moves between projects.
    Sending ``assigned_to`` or ``due_date`` as null clears them.
    """

    model_config = ConfigDict(from_attributes=True, use_enum_values=True)

    title: str | None = None
    description: str | None = None
    assigned_to: UUID | None = None
    priority: TaskPriority | None = None
    status: TaskStatus | None = None
    due_date: datetime | None = None

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str | None) -> str | None:
        if v is None:
            return v
        return _check_title(v)

    @field_validator("description")
    @classmethod
    def validate_description(cls, v: str | None) -> str | None:
        if v is None:
            return v
        return _check_description(v)


class TaskSummary(BaseSchema):
    """Minimal task projection embedded in activity entries."""

    id: UUID
    title: str


class TaskResponse(BaseModelSchema):
    """Schema for task response."""

    title: str
    description: str = ""
    project_id: UUID
    project: ProjectSummary | None = None
    assigned_to: UUID | None = None
    assignee: UserSummary | None = None
    priority: str
    status: str
    due_date: datetime | None = None
    created_by: UUID
    creator: UserSummary | None = None


class TaskFilter(BaseSchema):
    """Schema for filtering tasks."""

    model_config = ConfigDict(use_enum_values=True)

    project_id: UUID | None = None
    status: TaskStatus | None = None
    priority: TaskPriority | None = None
    assigned_to: UUID | None = None

"""Project schemas for request/response serialization."""

from __future__ import annotations

from uuid import UUID

from pydantic import Field, field_validator

from .base import BaseModelSchema, BaseSchema
from .user import UserSummary, check_email


def _check_name(v: str) -> str:
    v = v.strip()
    if len(v) < 2:
        raise ValueError("Project name must be at least 2 characters")
    if len(v) > 100:
        raise ValueError("Project name must be less than 100 characters")
    return v


def _check_description(v: str) -> str:
    if len(v) > 500:
        raise ValueError("Description must be less than 500 characters")
    return v


class ProjectCreate(BaseSchema):
    """Schema for creating a new project."""

    name: str
    description: str = ""

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        """Validate and clean the project name."""
        return _check_name(v)

    @field_validator("description", mode="before")
    @classmethod
    def validate_description(cls, v):
        if v is None:
            return ""
        if isinstance(v, str):
            return _check_description(v)
        return v


class ProjectUpdate(BaseSchema):
    """Schema for updating a project. Only the fields sent are changed."""

    name: str | None = None
    description: str | None = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str | None) -> str | None:
        if v is None:
            return v
        return _check_name(v)

    @field_validator("description")
    @classmethod
    def validate_description(cls, v: str | None) -> str | None:
        if v is None:
            return v
        return _check_description(v)


class MemberAddRequest(BaseSchema):
    """Schema for inviting a registered user by email."""

    email: str | None = Field(default=None, validate_default=True)

    @field_validator("email", mode="before")
    @classmethod
    def require_email(cls, v):
        if v is None or (isinstance(v, str) and not v.strip()):
            raise ValueError("Email is required")
        return v.strip() if isinstance(v, str) else v

    @field_validator("email")
    @classmethod
    def validate_email_address(cls, v: str | None) -> str | None:
        return check_email(v) if v else v


class ProjectSummary(BaseSchema):
    """Minimal project projection embedded in task payloads."""

    id: UUID
    name: str


class ProjectResponse(BaseModelSchema):
    """Schema for project response."""

    name: str
    description: str = ""
    owner_id: UUID
    owner: UserSummary
    members: list[UserSummary] = []


class TaskCounts(BaseSchema):
    """Per-status task counts of one project."""

    todo: int = 0
    in_progress: int = 0
    completed: int = 0


class ProjectDetail(ProjectResponse):
    """Project with computed task counts and the caller's ownership flag."""

    task_counts: TaskCounts
    is_owner: bool

"""Activity feed schemas."""

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import AliasChoices, Field

from app.core.config import settings

from .base import BaseSchema
from .project import ProjectSummary
from .task import TaskSummary
from .user import UserSummary


class ActivityResponse(BaseSchema):
    """One audit entry as returned by the feed.

    ``project`` and ``task`` are ``None`` once their subject has been deleted;
    the ids stay.
    """

    id: UUID
    user_id: UUID
    actor: UserSummary | None = None
    action: str
    project_id: UUID | None = None
    project: ProjectSummary | None = None
    task_id: UUID | None = None
    task: TaskSummary | None = None
    details: str
    metadata: dict[str, Any] | None = Field(
        default=None, validation_alias=AliasChoices("extra_data", "metadata")
    )
    created_at: datetime


class ActivityFilter(BaseSchema):
    """Feed query parameters."""

    project_id: UUID | None = None
    limit: int = Field(
        default_factory=lambda: settings.activity_feed_default_limit,
        ge=1,
    )

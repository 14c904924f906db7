"""
Activity model: the append-only audit log of mutations.

``project_id`` and ``task_id`` are plain indexed columns rather than foreign
keys. Activity rows outlive the projects and tasks they describe.
"""

import uuid
from enum import Enum

from sqlalchemy import JSON, Column, DateTime, ForeignKey, Index, String
from sqlalchemy.orm import relationship

from .base import UUID, Base, utcnow


class ActivityAction(str, Enum):
    project_created = "project_created"
    project_updated = "project_updated"
    project_deleted = "project_deleted"
    task_created = "task_created"
    task_updated = "task_updated"
    task_deleted = "task_deleted"
    task_status_changed = "task_status_changed"
    task_assigned = "task_assigned"
    member_added = "member_added"
    member_removed = "member_removed"


class Activity(Base):
    """
    A single immutable audit entry.

    :ivar user_id: Actor who performed the mutation.
    :ivar action: One of :class:`ActivityAction`.
    :ivar details: Human readable description, at most 500 characters.
    :ivar extra_data: Optional structured payload, stored in the ``metadata`` column.
    """

    __tablename__ = "activities"
    __table_args__ = (
        Index("ix_activities_user_created", "user_id", "created_at"),
        Index("ix_activities_project_created", "project_id", "created_at"),
    )

    id = Column(UUID(), primary_key=True, default=uuid.uuid4)
    user_id = Column(UUID(), ForeignKey("users.id"), nullable=False)
    action = Column(String(40), nullable=False)
    project_id = Column(UUID())
    task_id = Column(UUID())
    details = Column(String(500), nullable=False)
    extra_data = Column("metadata", JSON)
    created_at = Column(DateTime, default=utcnow, nullable=False)

    actor = relationship("User", lazy="selectin")
    project = relationship(
        "Project",
        primaryjoin="foreign(Activity.project_id) == Project.id",
        viewonly=True,
        lazy="selectin",
    )
    task = relationship(
        "Task",
        primaryjoin="foreign(Activity.task_id) == Task.id",
        viewonly=True,
        lazy="selectin",
    )

"""
A module defining the ``Task`` ORM model representing a unit of work.

Tasks always belong to a project, may be assigned to any user and move
freely between the statuses below. Priority and status are stored as their
string values.

Classes:
    TaskPriority: Allowed priority values.
    TaskStatus: Allowed status values.
    Task: A single task inside a project.
"""

from enum import Enum

from sqlalchemy import Column, DateTime, ForeignKey, String, Text
from sqlalchemy.orm import relationship

from .base import UUID, BaseModel


class TaskPriority(str, Enum):
    low = "low"
    medium = "medium"
    high = "high"


class TaskStatus(str, Enum):
    todo = "todo"
    in_progress = "in-progress"
    completed = "completed"


class Task(BaseModel):
    __tablename__ = "tasks"

    project_id = Column(UUID(), ForeignKey("projects.id"), nullable=False, index=True)
    assigned_to = Column(UUID(), ForeignKey("users.id"), index=True)
    created_by = Column(UUID(), ForeignKey("users.id"), nullable=False, index=True)

    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=False, default="")
    priority = Column(String(20), nullable=False, default=TaskPriority.medium.value, index=True)
    status = Column(String(20), nullable=False, default=TaskStatus.todo.value, index=True)
    due_date = Column(DateTime, index=True)

    # Relationships
    project = relationship("Project", lazy="selectin")
    assignee = relationship("User", foreign_keys=[assigned_to], lazy="selectin")
    creator = relationship("User", foreign_keys=[created_by], lazy="selectin")

"""
Models package initialization.
"""

from .activity import Activity, ActivityAction
from .base import Base, BaseModel
from .project import Project, project_members
from .task import Task, TaskPriority, TaskStatus
from .user import User

__all__ = [
    "Base",
    "BaseModel",
    "User",
    "Project",
    "project_members",
    "Task",
    "TaskPriority",
    "TaskStatus",
    "Activity",
    "ActivityAction",
]

"""Dashboard statistics schemas."""

from .base import BaseSchema


class PriorityCounts(BaseSchema):
    low: int = 0
    medium: int = 0
    high: int = 0


class StatsSummary(BaseSchema):
    """Aggregate counts over the caller's visible projects."""

    total_projects: int = 0
    total_tasks: int = 0
    completed_tasks: int = 0
    in_progress_tasks: int = 0
    todo_tasks: int = 0
    tasks_by_priority: PriorityCounts = PriorityCounts()
    upcoming_deadlines: int = 0
    overdue_tasks: int = 0

"""Dashboard statistics over the projects a user can see."""

import logging
from datetime import timedelta
from typing import Any
from uuid import UUID

from sqlalchemy import and_, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.domains.project.access import visible_project_ids
from models.base import utcnow
from models.project import Project
from models.task import Task, TaskPriority, TaskStatus

logger = logging.getLogger(__name__)


class StatsService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_summary(self, user_id: UUID) -> dict[str, Any]:
        """Counts of projects and tasks.

        ``upcoming_deadlines`` covers open tasks due between now and the
        configured horizon, both ends inclusive; ``overdue_tasks`` covers open
        tasks due strictly before now. Completed tasks count as neither.
        """
        visible = visible_project_ids(user_id)
        now = utcnow()
        horizon = now + timedelta(days=settings.upcoming_deadline_days)
        in_visible = Task.project_id.in_(visible)
        not_completed = Task.status != TaskStatus.completed.value

        total_projects = await self._count(
            select(func.count(Project.id)).where(Project.id.in_(visible))
        )

        by_status = await self._grouped(Task.status, in_visible)
        by_priority = await self._grouped(Task.priority, in_visible)

        upcoming = await self._count(
            select(func.count(Task.id)).where(
                and_(in_visible, not_completed, Task.due_date >= now, Task.due_date <= horizon)
            )
        )
        overdue = await self._count(
            select(func.count(Task.id)).where(and_(in_visible, not_completed, Task.due_date < now))
        )

        return {
            "total_projects": total_projects,
            "total_tasks": sum(by_status.values()),
            "completed_tasks": by_status.get(TaskStatus.completed.value, 0),
            "in_progress_tasks": by_status.get(TaskStatus.in_progress.value, 0),
            "todo_tasks": by_status.get(TaskStatus.todo.value, 0),
            "tasks_by_priority": {p.value: by_priority.get(p.value, 0) for p in TaskPriority},
            "upcoming_deadlines": upcoming,
            "overdue_tasks": overdue,
        }

    async def _count(self, stmt) -> int:
        result = await self.db.execute(stmt)
        return result.scalar() or 0

    async def _grouped(self, column, condition) -> dict[str, int]:
        stmt = select(column, func.count(Task.id)).where(condition).group_by(column)
        result = await self.db.execute(stmt)
        return {key: count for key, count in result.all()}

"""Task service layer with business logic."""

import logging
from uuid import UUID

from sqlalchemy import desc, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.domains.activity.service import ActivityService
from app.domains.project.access import get_project_or_404, require_access, visible_project_ids
from app.exceptions.base import NotFoundError, StoreError
from app.exceptions.task import TaskNotFoundError, TaskPermissionError
from app.schemas.task import TaskCreate, TaskFilter, TaskUpdate
from models.activity import ActivityAction
from models.base import to_naive_utc, utcnow
from models.task import Task
from models.user import User

logger = logging.getLogger(__name__)

# Columns that may be cleared by sending null
NULLABLE_FIELDS = {"assigned_to", "due_date"}


class TaskService:
    """Service class for task business logic."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.activity = ActivityService(db)

    async def create_task(self, task_data: TaskCreate, user_id: UUID) -> Task:
        """Create a task in a project the user owns or belongs to."""
        project = await get_project_or_404(self.db, task_data.project_id)
        require_access(project, user_id, TaskPermissionError)

        if task_data.assigned_to:
            await self._get_assignee(task_data.assigned_to)

        task = Task(
            project_id=project.id,
            assigned_to=task_data.assigned_to,
            created_by=user_id,
            title=task_data.title,
            description=task_data.description,
            priority=task_data.priority,
            status=task_data.status,
            due_date=to_naive_utc(task_data.due_date),
        )

        try:
            self.db.add(task)
            await self.db.commit()
            await self.db.refresh(task)
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error("Failed to create task: %s", str(e))
            raise StoreError()

        logger.info("Task %s created in project %s", task.id, project.id)
        await self.activity.log(
            user_id,
            ActivityAction.task_created,
            f'Created task "{task.title}"',
            project_id=project.id,
            task_id=task.id,
        )
        return task

    async def get_tasks_list(self, user_id: UUID, filters: TaskFilter | None = None) -> list[Task]:
        """Tasks of every visible project, newest first."""
        query = select(Task).where(Task.project_id.in_(visible_project_ids(user_id)))

        if filters:
            if filters.project_id:
                query = query.where(Task.project_id == filters.project_id)
            if filters.status:
                query = query.where(Task.status == filters.status)
            if filters.priority:
                query = query.where(Task.priority == filters.priority)
            if filters.assigned_to:
                query = query.where(Task.assigned_to == filters.assigned_to)

        query = query.order_by(desc(Task.created_at))

        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def get_task(self, task_id: UUID, user_id: UUID) -> Task:
        """Get a task whose project the user owns or belongs to."""
        task = await self._get_task_or_404(task_id)
        project = await get_project_or_404(self.db, task.project_id)
        require_access(project, user_id, TaskPermissionError)
        return task

    async def update_task(self, task_id: UUID, task_data: TaskUpdate, user_id: UUID) -> Task:
        """Update a task and record a single activity classifying the change.

        A status change wins over a reassignment, which wins over a generic update.
        """
        task = await self.get_task(task_id, user_id)

        update_data = task_data.model_dump(exclude_unset=True)
        old_status = task.status
        old_assignee = task.assigned_to

        assignee = None
        if update_data.get("assigned_to") is not None:
            assignee = await self._get_assignee(update_data["assigned_to"])

        for field, value in update_data.items():
            if value is None and field not in NULLABLE_FIELDS:
                continue
            if field == "due_date":
                value = to_naive_utc(value)
            setattr(task, field, value)
        task.updated_at = utcnow()

        try:
            await self.db.commit()
            await self.db.refresh(task)
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error("Failed to update task %s: %s", task_id, str(e))
            raise StoreError()

        new_status = update_data.get("status")
        if new_status is not None and new_status != old_status:
            await self.activity.log(
                user_id,
                ActivityAction.task_status_changed,
                f'Changed task "{task.title}" status from {old_status} to {new_status}',
                project_id=task.project_id,
                task_id=task.id,
                metadata={"old_status": old_status, "new_status": new_status},
            )
        elif assignee is not None and assignee.id != old_assignee:
            await self.activity.log(
                user_id,
                ActivityAction.task_assigned,
                f'Assigned task "{task.title}" to {assignee.name}',
                project_id=task.project_id,
                task_id=task.id,
            )
        else:
            await self.activity.log(
                user_id,
                ActivityAction.task_updated,
                f'Updated task "{task.title}"',
                project_id=task.project_id,
                task_id=task.id,
            )
        return task

    async def delete_task(self, task_id: UUID, user_id: UUID) -> None:
        """Delete a task. Allowed for the project owner and the task's creator."""
        task = await self._get_task_or_404(task_id)
        project = await get_project_or_404(self.db, task.project_id)

        if not (project.is_owner(user_id) or task.created_by == user_id):
            logger.info("User %s may not delete task %s", user_id, task_id)
            raise TaskPermissionError()

        title = task.title
        try:
            await self.db.delete(task)
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error("Failed to delete task %s: %s", task_id, str(e))
            raise StoreError()

        await self.activity.log(
            user_id,
            ActivityAction.task_deleted,
            f'Deleted task "{title}"',
            project_id=project.id,
            task_id=task_id,
        )

    # Private helper methods
    async def _get_task_or_404(self, task_id: UUID) -> Task:
        result = await self.db.execute(select(Task).where(Task.id == task_id))
        task = result.scalar_one_or_none()
        if not task:
            raise TaskNotFoundError()
        return task

    async def _get_assignee(self, user_id: UUID) -> User:
        result = await self.db.execute(select(User).where(User.id == user_id))
        user = result.scalar_one_or_none()
        if not user:
            raise NotFoundError("Assigned user not found")
        return user

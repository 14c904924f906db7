"""Project service layer with business logic."""

import logging
from typing import Any
from uuid import UUID

from sqlalchemy import delete, desc, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.domains.activity.service import ActivityService
from app.domains.project.access import (
    get_project_or_404,
    require_access,
    require_owner,
    visible_project_ids,
)
from app.exceptions.base import StoreError
from app.exceptions.project import MemberAlreadyExistsError
from app.exceptions.user import UserNotFoundError
from app.schemas.project import ProjectCreate, ProjectUpdate
from models.activity import ActivityAction
from models.base import utcnow
from models.project import Project
from models.task import Task, TaskStatus
from models.user import User

logger = logging.getLogger(__name__)


class ProjectService:
    """Service class for project business logic."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.activity = ActivityService(db)

    async def create_project(self, project_data: ProjectCreate, user_id: UUID) -> Project:
        """Create a new project owned by ``user_id``."""
        project = Project(
            owner_id=user_id,
            name=project_data.name,
            description=project_data.description,
        )

        try:
            self.db.add(project)
            await self.db.commit()
            await self.db.refresh(project)
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error("Failed to create project: %s", str(e))
            raise StoreError()

        logger.info("Project %s created by %s", project.id, user_id)
        await self.activity.log(
            user_id,
            ActivityAction.project_created,
            f'Created project "{project.name}"',
            project_id=project.id,
        )
        return project

    async def get_projects_list(self, user_id: UUID) -> list[Project]:
        """Projects the user owns or belongs to, most recently updated first."""
        stmt = (
            select(Project)
            .where(Project.id.in_(visible_project_ids(user_id)))
            .order_by(desc(Project.updated_at))
        )
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def get_project(self, project_id: UUID, user_id: UUID) -> Project:
        project = await get_project_or_404(self.db, project_id)
        require_access(project, user_id)
        return project

    async def get_project_detail(self, project_id: UUID, user_id: UUID) -> dict[str, Any]:
        """Get a project with its per-status task counts and the caller's ownership flag."""
        project = await self.get_project(project_id, user_id)

        stmt = (
            select(Task.status, func.count(Task.id))
            .where(Task.project_id == project.id)
            .group_by(Task.status)
        )
        result = await self.db.execute(stmt)
        counts = {status: count for status, count in result.all()}

        return {
            "project": project,
            "task_counts": {
                "todo": counts.get(TaskStatus.todo.value, 0),
                "in_progress": counts.get(TaskStatus.in_progress.value, 0),
                "completed": counts.get(TaskStatus.completed.value, 0),
            },
            "is_owner": project.is_owner(user_id),
        }

    async def update_project(
        self, project_id: UUID, project_data: ProjectUpdate, user_id: UUID
    ) -> Project:
        """Update name and/or description. Owner only."""
        project = await get_project_or_404(self.db, project_id)
        require_owner(project, user_id)

        update_data = project_data.model_dump(exclude_unset=True, exclude_none=True)
        for field, value in update_data.items():
            setattr(project, field, value)
        project.updated_at = utcnow()

        try:
            await self.db.commit()
            await self.db.refresh(project)
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error("Failed to update project %s: %s", project_id, str(e))
            raise StoreError()

        await self.activity.log(
            user_id,
            ActivityAction.project_updated,
            f'Updated project "{project.name}"',
            project_id=project.id,
        )
        return project

    async def delete_project(self, project_id: UUID, user_id: UUID) -> None:
        """Delete a project together with all of its tasks. Owner only."""
        project = await get_project_or_404(self.db, project_id)
        require_owner(project, user_id)

        name = project.name
        try:
            result = await self.db.execute(delete(Task).where(Task.project_id == project.id))
            await self.db.delete(project)
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error("Failed to delete project %s: %s", project_id, str(e))
            raise StoreError()

        logger.info("Project %s deleted with %d task(s)", project_id, result.rowcount)
        await self.activity.log(
            user_id,
            ActivityAction.project_deleted,
            f'Deleted project "{name}"',
            project_id=project_id,
        )

    async def add_member(self, project_id: UUID, email: str, user_id: UUID) -> Project:
        """Invite a registered user, looked up by email. Owner only."""
        project = await get_project_or_404(self.db, project_id)
        require_owner(project, user_id)

        result = await self.db.execute(select(User).where(User.email == email.lower()))
        new_member = result.scalar_one_or_none()
        if not new_member:
            raise UserNotFoundError()
        if project.is_owner(new_member.id):
            raise MemberAlreadyExistsError("Owner is already part of the project")
        if project.is_member(new_member.id):
            raise MemberAlreadyExistsError()

        project.members.append(new_member)
        project.updated_at = utcnow()

        try:
            await self.db.commit()
            await self.db.refresh(project)
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error("Failed to add member to project %s: %s", project_id, str(e))
            raise StoreError()

        await self.activity.log(
            user_id,
            ActivityAction.member_added,
            f'Added {new_member.name} ({new_member.email}) to project "{project.name}"',
            project_id=project.id,
        )
        return project

    async def remove_member(self, project_id: UUID, member_id: UUID, user_id: UUID) -> Project:
        """Remove a member by user id. Owner only.

        Removing someone who is not a member leaves the project untouched.
        """
        project = await get_project_or_404(self.db, project_id)
        require_owner(project, user_id)

        member = next((m for m in project.members if m.id == member_id), None)
        if not member:
            return project

        project.members.remove(member)
        project.updated_at = utcnow()

        try:
            await self.db.commit()
            await self.db.refresh(project)
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error("Failed to remove member from project %s: %s", project_id, str(e))
            raise StoreError()

        await self.activity.log(
            user_id,
            ActivityAction.member_removed,
            f'Removed {member.name} ({member.email}) from project "{project.name}"',
            project_id=project.id,
        )
        return project

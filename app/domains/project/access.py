"""Role resolution shared by the project, task and aggregation services."""

import logging
from uuid import UUID

from sqlalchemy import Select, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.exceptions.project import ProjectNotFoundError, ProjectPermissionError
from models.project import Project, project_members

logger = logging.getLogger(__name__)


def visible_project_ids(user_id: UUID) -> Select:
    """Ids of every project the user owns or is a member of."""
    member_of = select(project_members.c.project_id).where(project_members.c.user_id == user_id)
    return select(Project.id).where(or_(Project.owner_id == user_id, Project.id.in_(member_of)))


async def get_project_or_404(db: AsyncSession, project_id: UUID) -> Project:
    stmt = select(Project).where(Project.id == project_id).execution_options(populate_existing=True)
    result = await db.execute(stmt)
    project = result.scalar_one_or_none()
    if not project:
        raise ProjectNotFoundError()
    return project


def can_access(project: Project, user_id: UUID) -> bool:
    return project.is_owner(user_id) or project.is_member(user_id)


def require_access(project: Project, user_id: UUID, error_cls=ProjectPermissionError) -> None:
    """Owner or member, otherwise ``error_cls`` (403)."""
    if not can_access(project, user_id):
        logger.info("User %s denied access to project %s", user_id, project.id)
        raise error_cls()


def require_owner(project: Project, user_id: UUID) -> None:
    if not project.is_owner(user_id):
        logger.info("User %s is not the owner of project %s", user_id, project.id)
        raise ProjectPermissionError()

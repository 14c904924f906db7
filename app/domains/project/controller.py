"""Project API controller with FastAPI endpoints."""

import logging
from uuid import UUID

from fastapi import APIRouter, Body, Depends, Path
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.dependencies import get_current_user, get_db, validate_token
from app.domains.project.service import ProjectService
from app.schemas.base import ERROR_RESPONSES, ResponseSchema
from app.schemas.project import (
    MemberAddRequest,
    ProjectCreate,
    ProjectDetail,
    ProjectResponse,
    ProjectUpdate,
)
from models.user import User

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/projects",
    tags=["projects"],
    dependencies=[Depends(validate_token)],  # Global token validation for all routes
    responses=ERROR_RESPONSES,
)


@router.post("/", response_model=ResponseSchema, status_code=201)
async def create_project(
    project_data: ProjectCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Create a new project."""
    service = ProjectService(db)
    project = await service.create_project(project_data=project_data, user_id=current_user.id)

    return ResponseSchema(
        status="success",
        message="Project created successfully",
        data=ProjectResponse.model_validate(project).model_dump(),
    )


@router.get("/", response_model=ResponseSchema)
async def get_projects(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """List the projects the current user owns or is a member of."""
    service = ProjectService(db)
    projects = await service.get_projects_list(user_id=current_user.id)

    return ResponseSchema(
        status="success",
        message="Projects retrieved successfully",
        data={"projects": [ProjectResponse.model_validate(p).model_dump() for p in projects]},
    )


@router.get("/{project_id}", response_model=ResponseSchema)
async def get_project(
    project_id: UUID = Path(..., description="Project ID"),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Get a project with task counts."""
    service = ProjectService(db)
    detail = await service.get_project_detail(project_id, current_user.id)

    project_data = ProjectResponse.model_validate(detail["project"]).model_dump()
    project_data.update(task_counts=detail["task_counts"], is_owner=detail["is_owner"])

    return ResponseSchema(
        status="success",
        message="Project retrieved successfully",
        data=ProjectDetail.model_validate(project_data).model_dump(),
    )


@router.put("/{project_id}", response_model=ResponseSchema)
async def update_project(
    project_id: UUID = Path(..., description="Project ID"),
    project_data: ProjectUpdate = Body(...),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Update a project. Only the owner may do this."""
    service = ProjectService(db)
    project = await service.update_project(project_id, project_data, current_user.id)

    return ResponseSchema(
        status="success",
        message="Project updated successfully",
        data=ProjectResponse.model_validate(project).model_dump(),
    )


@router.delete("/{project_id}", response_model=ResponseSchema)
async def delete_project(
    project_id: UUID = Path(..., description="Project ID"),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Delete a project and all of its tasks."""
    service = ProjectService(db)
    await service.delete_project(project_id, current_user.id)

    return ResponseSchema(status="success", message="Project deleted successfully", data=None)


@router.post("/{project_id}/members", response_model=ResponseSchema)
async def add_member(
    project_id: UUID = Path(..., description="Project ID"),
    member_data: MemberAddRequest = Body(...),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Add a registered user to the project by email."""
    service = ProjectService(db)
    project = await service.add_member(project_id, member_data.email, current_user.id)

    return ResponseSchema(
        status="success",
        message="Member added successfully",
        data=ProjectResponse.model_validate(project).model_dump(),
    )


@router.delete("/{project_id}/members/{user_id}", response_model=ResponseSchema)
async def remove_member(
    project_id: UUID = Path(..., description="Project ID"),
    user_id: UUID = Path(..., description="Member's user ID"),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Remove a member from the project."""
    service = ProjectService(db)
    project = await service.remove_member(project_id, user_id, current_user.id)

    return ResponseSchema(
        status="success",
        message="Member removed successfully",
        data=ProjectResponse.model_validate(project).model_dump(),
    )

"""Task API controller with FastAPI endpoints."""

import logging
from uuid import UUID

from fastapi import APIRouter, Body, Depends, Path, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.dependencies import get_current_user, get_db, validate_token
from app.domains.task.service import TaskService
from app.schemas.base import ERROR_RESPONSES, ResponseSchema
from app.schemas.task import TaskCreate, TaskFilter, TaskResponse, TaskUpdate
from models.task import TaskPriority, TaskStatus
from models.user import User

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/tasks",
    tags=["tasks"],
    dependencies=[Depends(validate_token)],  # Global token validation for all routes
    responses=ERROR_RESPONSES,
)


@router.post("/", response_model=ResponseSchema, status_code=201)
async def create_task(
    task_data: TaskCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Create a new task."""
    service = TaskService(db)
    task = await service.create_task(task_data=task_data, user_id=current_user.id)

    return ResponseSchema(
        status="success",
        message="Task created successfully",
        data=TaskResponse.model_validate(task).model_dump(),
    )


@router.get("/", response_model=ResponseSchema)
async def get_tasks(
    project_id: UUID | None = Query(None),
    status: TaskStatus | None = Query(None),
    priority: TaskPriority | None = Query(None),
    assigned_to: UUID | None = Query(None),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """List tasks across the current user's projects with optional filters."""
    filters = TaskFilter(
        project_id=project_id,
        status=status,
        priority=priority,
        assigned_to=assigned_to,
    )

    service = TaskService(db)
    tasks = await service.get_tasks_list(user_id=current_user.id, filters=filters)

    return ResponseSchema(
        status="success",
        message="Tasks retrieved successfully",
        data={"tasks": [TaskResponse.model_validate(task).model_dump() for task in tasks]},
    )


@router.get("/{task_id}", response_model=ResponseSchema)
async def get_task(
    task_id: UUID = Path(..., description="Task ID"),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Get a specific task by ID."""
    service = TaskService(db)
    task = await service.get_task(task_id, current_user.id)

    return ResponseSchema(
        status="success",
        message="Task retrieved successfully",
        data=TaskResponse.model_validate(task).model_dump(),
    )


@router.put("/{task_id}", response_model=ResponseSchema)
async def update_task(
    task_id: UUID = Path(..., description="Task ID"),
    task_data: TaskUpdate = Body(...),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Update a specific task."""
    service = TaskService(db)
    task = await service.update_task(task_id, task_data, current_user.id)

    return ResponseSchema(
        status="success",
        message="Task updated successfully",
        data=TaskResponse.model_validate(task).model_dump(),
    )


@router.delete("/{task_id}", response_model=ResponseSchema)
async def delete_task(
    task_id: UUID = Path(..., description="Task ID"),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Delete a specific task."""
    service = TaskService(db)
    await service.delete_task(task_id, current_user.id)

    return ResponseSchema(status="success", message="Task deleted successfully", data=None)

"""Activity feed endpoint."""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.dependencies import get_current_user, get_db, validate_token
from app.domains.activity.service import ActivityService
from app.schemas.activity import ActivityFilter, ActivityResponse
from app.schemas.base import ERROR_RESPONSES, ResponseSchema
from models.user import User

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/activity",
    tags=["activity"],
    dependencies=[Depends(validate_token)],
    responses=ERROR_RESPONSES,
)


@router.get("/", response_model=ResponseSchema)
async def get_activity_feed(
    project_id: UUID | None = Query(None),
    limit: int = Query(
        settings.activity_feed_default_limit, ge=1, le=settings.activity_feed_max_limit
    ),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Get the most recent activity visible to the current user."""
    service = ActivityService(db)
    filters = ActivityFilter(project_id=project_id, limit=limit)
    activities = await service.get_feed(current_user.id, filters=filters)

    return ResponseSchema(
        status="success",
        message="Activity retrieved successfully",
        data={
            "activities": [
                ActivityResponse.model_validate(activity).model_dump() for activity in activities
            ]
        },
    )

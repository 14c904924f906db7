"""Statistics endpoint."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.dependencies import get_current_user, get_db, validate_token
from app.domains.stats.service import StatsService
from app.schemas.base import ERROR_RESPONSES, ResponseSchema
from app.schemas.stats import StatsSummary
from models.user import User

router = APIRouter(
    prefix="/api/stats",
    tags=["stats"],
    dependencies=[Depends(validate_token)],
    responses=ERROR_RESPONSES,
)


@router.get("/", response_model=ResponseSchema)
async def get_stats(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Get dashboard statistics for the current user."""
    service = StatsService(db)
    stats = await service.get_summary(current_user.id)

    return ResponseSchema(
        status="success",
        message="Statistics retrieved successfully",
        data=StatsSummary.model_validate(stats).model_dump(),
    )

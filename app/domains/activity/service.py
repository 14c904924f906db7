"""Activity service: appending audit entries and reading the feed."""

import logging
from typing import Any
from uuid import UUID

from sqlalchemy import desc, or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.domains.project.access import visible_project_ids
from app.exceptions.base import StoreError
from app.schemas.activity import ActivityFilter
from models.activity import Activity, ActivityAction

logger = logging.getLogger(__name__)

DETAILS_MAX_LENGTH = 500


class ActivityService:
    """Service class for the append-only activity log."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def log(
        self,
        user_id: UUID,
        action: ActivityAction,
        details: str,
        project_id: UUID | None = None,
        task_id: UUID | None = None,
        metadata: dict[str, Any] | None = None,
    ) -> Activity:
        """Append one entry.

        Runs after the mutation it describes has been committed. A failure here
        fails the request but leaves that mutation in place.
        """
        activity = Activity(
            user_id=user_id,
            action=ActivityAction(action).value,
            project_id=project_id,
            task_id=task_id,
            details=details[:DETAILS_MAX_LENGTH],
            extra_data=metadata,
        )

        try:
            self.db.add(activity)
            await self.db.commit()
            await self.db.refresh(activity)
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error("Failed to record %s activity: %s", action, str(e))
            raise StoreError()

        logger.debug("Recorded %s by %s", activity.action, user_id)
        return activity

    async def get_feed(self, user_id: UUID, filters: ActivityFilter | None = None) -> list[Activity]:
        """Newest-first entries the user may see.

        An entry is visible when its project is visible to the user or the user
        performed it. A project filter narrows the same set, so entries about a
        deleted project remain visible only to their actors.
        """
        filters = filters or ActivityFilter()
        limit = min(filters.limit, settings.activity_feed_max_limit)

        query = select(Activity).where(
            or_(
                Activity.project_id.in_(visible_project_ids(user_id)),
                Activity.user_id == user_id,
            )
        )
        if filters.project_id:
            query = query.where(Activity.project_id == filters.project_id)

        # Reload subjects so deleted projects and tasks come back as None
        query = (
            query.order_by(desc(Activity.created_at))
            .limit(limit)
            .execution_options(populate_existing=True)
        )

        result = await self.db.execute(query)
        return list(result.scalars().all())

"""
Unit tests for ActivityService: appending entries and the visibility of the feed.
"""

import uuid
from unittest.mock import AsyncMock, patch

import pytest
from sqlalchemy.exc import SQLAlchemyError

from app.domains.activity.service import ActivityService
from app.exceptions.base import StoreError
from app.schemas.activity import ActivityFilter
from models import ActivityAction
from tests.factories import ActivityFactory, persist


class TestLog:
    @pytest.mark.asyncio
    async def test_log_persists_entry(self, test_db, test_user, test_project):
        service = ActivityService(test_db)

        activity = await service.log(
            test_user.id,
            ActivityAction.task_status_changed,
            'Changed task "A" status from todo to completed',
            project_id=test_project.id,
            task_id=uuid.uuid4(),
            metadata={"old_status": "todo", "new_status": "completed"},
        )

        assert activity.id is not None
        assert activity.action == "task_status_changed"
        assert activity.extra_data == {"old_status": "todo", "new_status": "completed"}
        assert activity.actor.id == test_user.id
        assert activity.created_at is not None

    @pytest.mark.asyncio
    async def test_log_truncates_details(self, test_db, test_user):
        service = ActivityService(test_db)

        activity = await service.log(test_user.id, ActivityAction.project_created, "x" * 600)

        assert len(activity.details) == 500

    @pytest.mark.asyncio
    async def test_log_rejects_unknown_action(self, test_db, test_user):
        service = ActivityService(test_db)

        with pytest.raises(ValueError):
            await service.log(test_user.id, "project_archived", "Archived")

    @pytest.mark.asyncio
    async def test_log_database_error(self, test_db, test_user):
        service = ActivityService(test_db)

        with patch.object(test_db, "commit", AsyncMock(side_effect=SQLAlchemyError("boom"))):
            with pytest.raises(StoreError):
                await service.log(test_user.id, ActivityAction.project_created, "Created")


class TestFeed:
    @pytest.mark.asyncio
    async def test_feed_visibility(
        self, test_db, test_user, test_user_2, test_user_3, test_project, other_project
    ):
        """Entries of visible projects plus the caller's own entries, nothing else."""
        shared = await persist(
            test_db, ActivityFactory, user_id=test_user.id, project_id=test_project.id
        )
        foreign = await persist(
            test_db, ActivityFactory, user_id=test_user_3.id, project_id=other_project.id
        )
        # Bob's own entry about a project he cannot see
        own_elsewhere = await persist(
            test_db, ActivityFactory, user_id=test_user_2.id, project_id=other_project.id
        )
        service = ActivityService(test_db)

        bob_feed = {a.id for a in await service.get_feed(test_user_2.id)}
        alice_feed = {a.id for a in await service.get_feed(test_user.id)}
        carol_feed = {a.id for a in await service.get_feed(test_user_3.id)}

        assert bob_feed == {shared.id, own_elsewhere.id}
        assert alice_feed == {shared.id}
        assert carol_feed == {foreign.id, own_elsewhere.id}

    @pytest.mark.asyncio
    async def test_project_filter_keeps_visibility(
        self, test_db, test_user, test_user_3, other_project
    ):
        await persist(test_db, ActivityFactory, user_id=test_user_3.id, project_id=other_project.id)
        service = ActivityService(test_db)

        only_other = ActivityFilter(project_id=other_project.id)

        assert await service.get_feed(test_user.id, only_other) == []
        assert len(await service.get_feed(test_user_3.id, only_other)) == 1

    @pytest.mark.asyncio
    async def test_feed_for_deleted_project(self, test_db, test_user):
        """Entries about a project that no longer exists remain visible to their actor."""
        gone = uuid.uuid4()
        entry = await persist(test_db, ActivityFactory, user_id=test_user.id, project_id=gone)
        service = ActivityService(test_db)

        feed = await service.get_feed(test_user.id, ActivityFilter(project_id=gone))

        assert [a.id for a in feed] == [entry.id]

    @pytest.mark.asyncio
    async def test_feed_newest_first_and_limit(self, test_db, test_user, test_project):
        service = ActivityService(test_db)
        for n in range(5):
            await service.log(
                test_user.id, ActivityAction.project_updated, f"Update {n}", project_id=test_project.id
            )

        feed = await service.get_feed(test_user.id, ActivityFilter(limit=3))

        assert [a.details for a in feed] == ["Update 4", "Update 3", "Update 2"]

    @pytest.mark.asyncio
    async def test_feed_limit_capped(self, test_db, test_user):
        service = ActivityService(test_db)
        for n in range(3):
            await service.log(test_user.id, ActivityAction.project_created, f"Created {n}")

        with patch("app.domains.activity.service.settings") as mock_settings:
            mock_settings.activity_feed_default_limit = 20
            mock_settings.activity_feed_max_limit = 2
            feed = await service.get_feed(test_user.id, ActivityFilter(limit=50))

        assert len(feed) == 2

    @pytest.mark.asyncio
    async def test_feed_carries_subjects(self, test_db, test_user, test_project, test_task):
        service = ActivityService(test_db)
        await service.log(
            test_user.id,
            ActivityAction.task_updated,
            'Updated task "Test Task"',
            project_id=test_project.id,
            task_id=test_task.id,
        )

        [entry] = await service.get_feed(test_user.id)

        assert entry.project.name == "Test Project"
        assert entry.task.title == "Test Task"

    @pytest.mark.asyncio
    async def test_feed_subjects_none_after_delete(self, test_db, test_user, test_project, test_task):
        service = ActivityService(test_db)
        await service.log(
            test_user.id,
            ActivityAction.task_updated,
            'Updated task "Test Task"',
            project_id=test_project.id,
            task_id=test_task.id,
        )
        await test_db.delete(test_task)
        await test_db.commit()

        [entry] = await service.get_feed(test_user.id)

        assert entry.task is None
        assert entry.task_id == test_task.id
        assert entry.project.name == "Test Project"

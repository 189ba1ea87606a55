"""Unit tests for the follow use cases."""

import pytest

from forum.application.usecase.follow import (
    RecordFollowRequest,
    RecordFollowUseCase,
    RemoveFollowRequest,
    RemoveFollowUseCase,
)
from forum.domain.error import NotFoundError
from forum.domain.repository import TransactionManager
from forum.domain.value import FollowTargetType
from tests.conftest import Seeder, follows_on
from tests.harness import create_env_fixture

# Unit test fixture - everything mocked
unit_env = create_env_fixture()


class TestFollowUseCases:
    """Tests for RecordFollowUseCase and RemoveFollowUseCase."""

    @pytest.mark.asyncio
    async def test_follow_then_unfollow_community(self, unit_env):
        # Arrange
        tm = await unit_env.get(TransactionManager)
        record = await unit_env.get(RecordFollowUseCase)
        remove = await unit_env.get(RemoveFollowUseCase)
        seed = Seeder(tm)
        owner = await seed.user()
        member = await seed.user()
        community = await seed.community(owner)

        # Act
        followed = await record.execute(
            RecordFollowRequest(
                user_id=str(member.id),
                target_type=FollowTargetType.COMMUNITY,
                target_id=str(community.id),
            )
        )
        followers = await follows_on(tm, FollowTargetType.COMMUNITY, community.id)
        removed = await remove.execute(
            RemoveFollowRequest(
                user_id=str(member.id),
                target_type=FollowTargetType.COMMUNITY,
                target_id=str(community.id),
            )
        )

        # Assert
        assert [str(f.id) for f in followers] == [followed.follow_id]
        assert removed.success is True
        assert await follows_on(tm, FollowTargetType.COMMUNITY, community.id) == []

    @pytest.mark.asyncio
    async def test_follow_missing_user_target(self, unit_env):
        tm = await unit_env.get(TransactionManager)
        record = await unit_env.get(RecordFollowUseCase)
        seed = Seeder(tm)
        member = await seed.user()
        ghost = await seed.user()
        async with tm.begin() as uow:
            await uow.users.delete(ghost.id)

        with pytest.raises(NotFoundError, match="User not found"):
            await record.execute(
                RecordFollowRequest(
                    user_id=str(member.id),
                    target_type=FollowTargetType.USER,
                    target_id=str(ghost.id),
                )
            )

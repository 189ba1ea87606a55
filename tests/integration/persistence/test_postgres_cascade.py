"""Integration tests for cascades against PostgreSQL.

These run the cascade services over the real repositories, so every
foreign key is checked by the database itself.
"""

import asyncio

import pytest

from forum.domain.error import NotFoundError, TransactionConflictError
from forum.domain.repository import TransactionManager
from forum.domain.service import (
    CascadeService,
    CommentTreeResolver,
    FollowService,
    VoteService,
)
from forum.persistence.repository import base as repository_base
from forum.domain.value import FollowTargetType, VoteTargetType
from tests.conftest import Seeder, comment_exists, follows_on, votes_on
from tests.harness import create_env_fixture, requires_database

# Integration test fixture - real persistence
integration_env = create_env_fixture(unmock={"persistence"})

pytestmark = requires_database

# Long enough for the other session to reach its blocking lock
LOCK_SETTLE_SECONDS = 0.5


class PauseAfterTargetCheck(VoteService):
    """Holds a vote write open between the target check and the insert."""

    def __init__(self, transaction_manager: TransactionManager) -> None:
        super().__init__(transaction_manager)
        self.checked = asyncio.Event()
        self.proceed = asyncio.Event()

    async def target_exists(self, uow, target_type, target_id):
        found = await super().target_exists(uow, target_type, target_id)
        self.checked.set()
        await self.proceed.wait()
        return found


class PauseAfterVotesRemoved(VoteService):
    """Holds a cascade open once it has locked targets and removed their votes."""

    def __init__(self, transaction_manager: TransactionManager) -> None:
        super().__init__(transaction_manager)
        self.locked = asyncio.Event()
        self.proceed = asyncio.Event()

    async def remove_all_for_targets(self, uow, target_ids, target_type):
        removed = await super().remove_all_for_targets(uow, target_ids, target_type)
        self.locked.set()
        await self.proceed.wait()
        return removed


def cascade_with(tm: TransactionManager, vote_service: VoteService) -> CascadeService:
    return CascadeService(
        transaction_manager=tm,
        comment_tree=CommentTreeResolver(),
        vote_service=vote_service,
        follow_service=FollowService(tm),
        max_conflict_retries=2,
    )


class TestPostgresCascade:
    """Cascade deletion over PostgreSQL repositories."""

    @pytest.mark.asyncio
    async def test_delete_comment_subtree(self, integration_env):
        # Arrange
        tm = await integration_env.get(TransactionManager)
        cascade_service = await integration_env.get(CascadeService)
        seed = Seeder(tm)
        author = await seed.user()
        post = await seed.post(author)
        chain = await seed.thread(post, author, depth=4)
        sibling = await seed.comment(post, author, parent=chain[0])
        for comment in chain:
            await seed.vote(author, comment)

        # Act
        result = await cascade_service.delete_comment(chain[0].id)

        # Assert
        assert result.comments_deleted == 5
        assert result.votes_deleted == 4
        assert not await comment_exists(tm, sibling.id)
        for comment in chain:
            assert await votes_on(tm, VoteTargetType.COMMENT, comment.id) == []

        await cascade_service.delete_user(author.id)

    @pytest.mark.asyncio
    async def test_delete_user_leaves_no_references(self, integration_env):
        # Arrange
        tm = await integration_env.get(TransactionManager)
        cascade_service = await integration_env.get(CascadeService)
        seed = Seeder(tm)
        doomed = await seed.user()
        other = await seed.user()
        community = await seed.community(doomed)
        own_post = await seed.post(doomed, community)
        other_post = await seed.post(other, community)
        on_own = await seed.comment(own_post, other)
        elsewhere = await seed.comment(other_post, doomed)
        reply = await seed.comment(other_post, other, parent=elsewhere)
        await seed.vote(other, own_post)
        await seed.vote(other, elsewhere)
        await seed.vote(doomed, other_post)
        await seed.follow(other, doomed)
        await seed.follow(other, community)

        # Act
        result = await cascade_service.delete_user(doomed.id)

        # Assert
        assert result.users_deleted == 1
        assert result.communities_deleted == 1
        assert result.posts_deleted == 1
        assert result.posts_detached == 1
        assert result.comments_deleted == 3
        assert result.votes_deleted == 3
        assert result.follows_deleted == 2

        for comment in (on_own, elsewhere, reply):
            assert not await comment_exists(tm, comment.id)
        assert await votes_on(tm, VoteTargetType.POST, own_post.id) == []
        assert await follows_on(tm, FollowTargetType.USER, doomed.id) == []
        async with tm.begin() as uow:
            assert not await uow.users.exists(doomed.id)
            kept = await uow.posts.find_by_id(other_post.id)
        assert kept is not None
        assert kept.community_id is None

        await cascade_service.delete_user(other.id)

    @pytest.mark.asyncio
    async def test_foreign_keys_have_no_database_cascade(self, integration_env):
        """Deleting a parent row out of order is refused by the database."""
        tm = await integration_env.get(TransactionManager)
        cascade_service = await integration_env.get(CascadeService)
        seed = Seeder(tm)
        author = await seed.user()
        post = await seed.post(author)
        await seed.comment(post, author)

        with pytest.raises(TransactionConflictError):
            async with tm.begin() as uow:
                await uow.posts.delete_by_author(author.id)

        await cascade_service.delete_user(author.id)


class TestConcurrentVoteAndCascade:
    """A vote racing the deletion of its target never outlives the target."""

    @pytest.mark.asyncio
    async def test_vote_written_before_cascade_is_deleted(self, integration_env):
        # Arrange
        tm = await integration_env.get(TransactionManager)
        seed = Seeder(tm)
        author = await seed.user()
        voter = await seed.user()
        post = await seed.post(author)
        comment = await seed.comment(post, author)
        writer = PauseAfterTargetCheck(tm)
        cascade_service = cascade_with(tm, VoteService(tm))

        # Act: the writer holds its key-share lock while the cascade starts
        write = asyncio.create_task(
            writer.record(voter.id, comment.id, VoteTargetType.COMMENT)
        )
        await asyncio.wait_for(writer.checked.wait(), timeout=5)
        cascade = asyncio.create_task(cascade_service.delete_comment(comment.id))
        await asyncio.sleep(LOCK_SETTLE_SECONDS)
        writer.proceed.set()
        write_outcome, result = await asyncio.wait_for(
            asyncio.gather(write, cascade, return_exceptions=True), timeout=10
        )

        # Assert
        assert not isinstance(result, BaseException)
        assert result.comments_deleted == 1
        if isinstance(write_outcome, BaseException):
            assert isinstance(write_outcome, TransactionConflictError)
        assert not await comment_exists(tm, comment.id)
        assert await votes_on(tm, VoteTargetType.COMMENT, comment.id) == []

        await cascade_service.delete_user(voter.id)
        await cascade_service.delete_user(author.id)

    @pytest.mark.asyncio
    async def test_vote_written_during_cascade_is_rejected(self, integration_env):
        # Arrange
        tm = await integration_env.get(TransactionManager)
        seed = Seeder(tm)
        author = await seed.user()
        voter = await seed.user()
        post = await seed.post(author)
        comment = await seed.comment(post, author)
        pausing = PauseAfterVotesRemoved(tm)
        cascade_service = cascade_with(tm, pausing)

        # Act: the cascade holds its row lock while the writer arrives
        cascade = asyncio.create_task(cascade_service.delete_comment(comment.id))
        await asyncio.wait_for(pausing.locked.wait(), timeout=5)
        write = asyncio.create_task(
            VoteService(tm).record(voter.id, comment.id, VoteTargetType.COMMENT)
        )
        await asyncio.sleep(LOCK_SETTLE_SECONDS)
        assert not write.done()
        pausing.proceed.set()
        result, write_outcome = await asyncio.wait_for(
            asyncio.gather(cascade, write, return_exceptions=True), timeout=10
        )

        # Assert
        assert not isinstance(result, BaseException)
        assert isinstance(write_outcome, (TransactionConflictError, NotFoundError))
        assert not await comment_exists(tm, comment.id)
        assert await votes_on(tm, VoteTargetType.COMMENT, comment.id) == []

        cleanup = cascade_with(tm, VoteService(tm))
        await cleanup.delete_user(voter.id)
        await cleanup.delete_user(author.id)


class TestBindParameterChunking:
    """Bulk statements stay correct when id sets span several chunks."""

    @pytest.mark.asyncio
    async def test_user_cascade_across_chunks(self, integration_env, monkeypatch):
        # Arrange
        monkeypatch.setattr(repository_base, "MAX_BIND_PARAMS", 2)
        tm = await integration_env.get(TransactionManager)
        cascade_service = await integration_env.get(CascadeService)
        seed = Seeder(tm)
        doomed = await seed.user()
        other = await seed.user()
        communities = [await seed.community(doomed) for _ in range(3)]
        posts = [await seed.post(doomed) for _ in range(5)]
        for post in posts:
            parent = await seed.comment(post, other)
            await seed.comment(post, other, parent=parent)
            await seed.vote(other, post)
        guests = [await seed.post(other, community) for community in communities]

        # Act
        result = await cascade_service.delete_user(doomed.id)

        # Assert
        assert result.posts_deleted == 5
        assert result.comments_deleted == 10
        assert result.votes_deleted == 5
        assert result.communities_deleted == 3
        assert result.posts_detached == 3
        async with tm.begin() as uow:
            for guest in guests:
                kept = await uow.posts.find_by_id(guest.id)
                assert kept is not None
                assert kept.community_id is None

        await cascade_service.delete_user(other.id)

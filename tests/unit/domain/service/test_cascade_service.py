"""Unit tests for CascadeService."""

import asyncio
from dataclasses import replace
from uuid import uuid4

import pytest

from forum.domain.error import (
    CascadeTimeoutError,
    InternalError,
    NotFoundError,
    TransactionConflictError,
)
from forum.domain.model import Comment
from forum.domain.repository import TransactionManager, UnitOfWork
from forum.domain.service import (
    CascadeService,
    CommentTreeResolver,
    FollowService,
    VoteService,
)
from forum.domain.value import (
    CommentId,
    FollowTargetType,
    UserId,
    VoteTargetType,
)
from forum.persistence.repository.inmemory import (
    InMemoryCommentRepository,
    InMemoryCommunityRepository,
    InMemoryDatabase,
    InMemoryPostRepository,
    InMemoryTransactionManager,
    InMemoryUserRepository,
)
from tests.conftest import Seeder, comment_exists, follows_on, votes_on
from tests.harness import create_env_fixture

# Unit test fixture - everything mocked
unit_env = create_env_fixture()


def build_cascade_service(tm: TransactionManager, **kwargs) -> CascadeService:
    return CascadeService(
        transaction_manager=tm,
        comment_tree=CommentTreeResolver(),
        vote_service=VoteService(tm),
        follow_service=FollowService(tm),
        **kwargs,
    )


# ---------------------------------------------------------------------------
# Fault-injecting stores
# ---------------------------------------------------------------------------


class FailAfterCommentsOnPostsDeleted(InMemoryCommentRepository):
    """Deletes comments on posts, then fails as if the connection dropped."""

    async def delete_by_posts(self, post_ids):
        await super().delete_by_posts(post_ids)
        raise RuntimeError("connection lost")


class FailingTransactionManager(InMemoryTransactionManager):
    def _build_unit_of_work(self) -> UnitOfWork:
        uow = super()._build_unit_of_work()
        return replace(uow, comments=FailAfterCommentsOnPostsDeleted(self.database))


class ConflictingTransactionManager(InMemoryTransactionManager):
    """Raises a transaction conflict in the first ``conflicts`` transactions."""

    def __init__(self, database: InMemoryDatabase, conflicts: int) -> None:
        super().__init__(database)
        self.conflicts = conflicts
        self.attempts = 0

    def _build_unit_of_work(self) -> UnitOfWork:
        self.attempts += 1
        uow = super()._build_unit_of_work()
        if self.attempts > self.conflicts:
            return uow

        class Conflicting(InMemoryCommentRepository):
            async def delete_by_ids(self, comment_ids):
                await super().delete_by_ids(comment_ids)
                raise TransactionConflictError()

        return replace(uow, comments=Conflicting(self.database))


class SlowTransactionManager(InMemoryTransactionManager):
    def _build_unit_of_work(self) -> UnitOfWork:
        class Slow(InMemoryCommentRepository):
            async def find_ids_by_parents(self, parent_ids):
                await asyncio.sleep(5)
                return await super().find_ids_by_parents(parent_ids)

        return replace(super()._build_unit_of_work(), comments=Slow(self.database))


class ReplyRacingTransactionManager(InMemoryTransactionManager):
    """Adds a reply to ``root`` once the first traversal has finished.

    Simulates a reply committed by another transaction and visible under
    READ COMMITTED between the traversal and the deletes.
    """

    def __init__(self, database: InMemoryDatabase, root: Comment) -> None:
        super().__init__(database)
        self.root = root
        self.raced = False

    def _build_unit_of_work(self) -> UnitOfWork:
        manager = self

        class Racing(InMemoryCommentRepository):
            async def find_ids_by_parents(self, parent_ids):
                ids = await super().find_ids_by_parents(parent_ids)
                if not ids and not manager.raced:
                    manager.raced = True
                    late = manager.root.model_copy(
                        update={"id": CommentId(uuid4()), "parent_id": manager.root.id}
                    )
                    self._db.comments[late.id] = late
                return ids

        return replace(super()._build_unit_of_work(), comments=Racing(self.database))


class LockRecordingTransactionManager(InMemoryTransactionManager):
    """Collects every id the cascade locks for deletion, per table."""

    def __init__(self, database: InMemoryDatabase) -> None:
        super().__init__(database)
        self.locked: dict[str, set] = {
            "users": set(),
            "communities": set(),
            "posts": set(),
            "comments": set(),
        }

    def _build_unit_of_work(self) -> UnitOfWork:
        locked = self.locked

        class Users(InMemoryUserRepository):
            async def lock_for_delete(self, user_ids):
                locked["users"].update(user_ids)

        class Communities(InMemoryCommunityRepository):
            async def lock_for_delete(self, community_ids):
                locked["communities"].update(community_ids)

        class Posts(InMemoryPostRepository):
            async def lock_for_delete(self, post_ids):
                locked["posts"].update(post_ids)

        class Comments(InMemoryCommentRepository):
            async def lock_for_delete(self, comment_ids):
                locked["comments"].update(comment_ids)

        return replace(
            super()._build_unit_of_work(),
            users=Users(self.database),
            communities=Communities(self.database),
            posts=Posts(self.database),
            comments=Comments(self.database),
        )


# ---------------------------------------------------------------------------
# Comment cascade
# ---------------------------------------------------------------------------


class TestDeleteComment:
    """Tests for delete_comment."""

    @pytest.mark.asyncio
    async def test_deletes_subtree_and_votes(self, unit_env):
        """The comment, every nested reply and all their votes are removed."""
        # Arrange
        tm = await unit_env.get(TransactionManager)
        cascade_service = await unit_env.get(CascadeService)
        seed = Seeder(tm)
        author = await seed.user()
        voter = await seed.user()
        post = await seed.post(author)
        root = await seed.comment(post, author)
        reply = await seed.comment(post, voter, parent=root)
        nested = await seed.comment(post, author, parent=reply)
        sibling_reply = await seed.comment(post, voter, parent=root)
        unrelated = await seed.comment(post, voter)
        for target in (root, reply, nested, sibling_reply, unrelated):
            await seed.vote(voter, target)

        # Act
        result = await cascade_service.delete_comment(root.id)

        # Assert
        assert result.root_type == "comment"
        assert result.root_id == root.id
        assert result.comments_deleted == 4
        assert result.votes_deleted == 4
        assert result.attempts == 1
        for gone in (root, reply, nested, sibling_reply):
            assert not await comment_exists(tm, gone.id)
            assert await votes_on(tm, VoteTargetType.COMMENT, gone.id) == []

        assert await comment_exists(tm, unrelated.id)
        assert len(await votes_on(tm, VoteTargetType.COMMENT, unrelated.id)) == 1

    @pytest.mark.asyncio
    async def test_deleting_reply_keeps_parent(self, unit_env):
        """Deleting a reply leaves its parent and siblings untouched."""
        tm = await unit_env.get(TransactionManager)
        cascade_service = await unit_env.get(CascadeService)
        seed = Seeder(tm)
        author = await seed.user()
        post = await seed.post(author)
        root = await seed.comment(post, author)
        reply = await seed.comment(post, author, parent=root)
        sibling = await seed.comment(post, author, parent=root)

        result = await cascade_service.delete_comment(reply.id)

        assert result.comments_deleted == 1
        assert result.votes_deleted == 0
        assert await comment_exists(tm, root.id)
        assert await comment_exists(tm, sibling.id)

    @pytest.mark.asyncio
    async def test_keeps_votes_on_the_post(self, unit_env):
        """Only comment votes are removed, never post votes."""
        tm = await unit_env.get(TransactionManager)
        cascade_service = await unit_env.get(CascadeService)
        seed = Seeder(tm)
        author = await seed.user()
        post = await seed.post(author)
        root = await seed.comment(post, author)
        await seed.vote(author, post)

        await cascade_service.delete_comment(root.id)

        assert len(await votes_on(tm, VoteTargetType.POST, post.id)) == 1

    @pytest.mark.asyncio
    async def test_nonexistent_comment_raises_not_found(self, unit_env):
        """Deleting an unknown comment fails without touching anything."""
        tm = await unit_env.get(TransactionManager)
        cascade_service = await unit_env.get(CascadeService)
        seed = Seeder(tm)
        author = await seed.user()
        post = await seed.post(author)
        survivor = await seed.comment(post, author)

        with pytest.raises(NotFoundError, match="Comment not found"):
            await cascade_service.delete_comment(CommentId(uuid4()))

        assert await comment_exists(tm, survivor.id)

    @pytest.mark.asyncio
    async def test_second_delete_raises_not_found(self, unit_env):
        """A comment can only be deleted once."""
        tm = await unit_env.get(TransactionManager)
        cascade_service = await unit_env.get(CascadeService)
        seed = Seeder(tm)
        author = await seed.user()
        post = await seed.post(author)
        root = await seed.comment(post, author)

        await cascade_service.delete_comment(root.id)

        with pytest.raises(NotFoundError):
            await cascade_service.delete_comment(root.id)


# ---------------------------------------------------------------------------
# User cascade
# ---------------------------------------------------------------------------


class TestDeleteUser:
    """Tests for delete_user."""

    @pytest.mark.asyncio
    async def test_removes_everything_that_depends_on_user(self, unit_env):
        """Posts, comments, communities, votes and follows are all resolved."""
        # Arrange
        tm = await unit_env.get(TransactionManager)
        database = await unit_env.get(InMemoryDatabase)
        cascade_service = await unit_env.get(CascadeService)
        seed = Seeder(tm)
        doomed = await seed.user()
        alice = await seed.user()
        bob = await seed.user()

        community = await seed.community(doomed)
        own_post = await seed.post(doomed, community)
        alice_post = await seed.post(alice, community)

        # Thread under the doomed user's post
        on_own = await seed.comment(own_post, alice)
        on_own_reply = await seed.comment(own_post, bob, parent=on_own)

        # The doomed user's comment on someone else's post, with replies
        elsewhere = await seed.comment(alice_post, doomed)
        elsewhere_reply = await seed.comment(alice_post, alice, parent=elsewhere)
        elsewhere_nested = await seed.comment(alice_post, bob, parent=elsewhere_reply)
        keeper = await seed.comment(alice_post, alice)

        await seed.vote(doomed, alice_post)
        await seed.vote(doomed, keeper)
        await seed.vote(alice, own_post)
        await seed.vote(bob, on_own)
        await seed.vote(bob, elsewhere)
        await seed.vote(bob, elsewhere_reply)
        surviving_vote = await seed.vote(alice, keeper)

        await seed.follow(doomed, alice)
        await seed.follow(alice, doomed)
        await seed.follow(bob, community)
        surviving_follow = await seed.follow(alice, bob)

        # Act
        result = await cascade_service.delete_user(doomed.id)

        # Assert
        assert result.root_type == "user"
        assert result.users_deleted == 1
        assert result.communities_deleted == 1
        assert result.posts_deleted == 1
        assert result.posts_detached == 1
        assert result.comments_deleted == 5
        assert result.votes_deleted == 6
        assert result.follows_deleted == 3

        assert set(database.users) == {alice.id, bob.id}
        assert database.communities == {}
        assert set(database.posts) == {alice_post.id}
        assert database.posts[alice_post.id].community_id is None
        assert set(database.comments) == {keeper.id}
        assert list(database.votes) == [surviving_vote.id]
        assert list(database.follows) == [surviving_follow.id]

        removed = (on_own, on_own_reply, elsewhere, elsewhere_reply, elsewhere_nested)
        for gone in removed:
            assert gone.id not in database.comments

    @pytest.mark.asyncio
    async def test_user_without_content(self, unit_env):
        """A user with nothing attached is simply removed."""
        tm = await unit_env.get(TransactionManager)
        cascade_service = await unit_env.get(CascadeService)
        seed = Seeder(tm)
        user = await seed.user()

        result = await cascade_service.delete_user(user.id)

        assert result.users_deleted == 1
        assert result.posts_deleted == 0
        assert result.comments_deleted == 0
        assert result.votes_deleted == 0
        assert result.follows_deleted == 0
        async with tm.begin() as uow:
            assert not await uow.users.exists(user.id)

    @pytest.mark.asyncio
    async def test_removes_votes_and_follows_pointing_at_user_content(self, unit_env):
        """No vote or follow references a deleted entity afterwards."""
        tm = await unit_env.get(TransactionManager)
        cascade_service = await unit_env.get(CascadeService)
        seed = Seeder(tm)
        doomed = await seed.user()
        fan = await seed.user()
        community = await seed.community(doomed)
        post = await seed.post(doomed)
        await seed.vote(fan, post)
        await seed.follow(fan, doomed)
        await seed.follow(fan, community)

        await cascade_service.delete_user(doomed.id)

        assert await votes_on(tm, VoteTargetType.POST, post.id) == []
        assert await follows_on(tm, FollowTargetType.USER, doomed.id) == []
        assert await follows_on(tm, FollowTargetType.COMMUNITY, community.id) == []

    @pytest.mark.asyncio
    async def test_nonexistent_user_raises_not_found(self, unit_env):
        """Deleting an unknown user fails without touching anything."""
        tm = await unit_env.get(TransactionManager)
        cascade_service = await unit_env.get(CascadeService)
        seed = Seeder(tm)
        survivor = await seed.user()

        with pytest.raises(NotFoundError, match="User not found"):
            await cascade_service.delete_user(UserId(uuid4()))

        async with tm.begin() as uow:
            assert await uow.users.exists(survivor.id)


# ---------------------------------------------------------------------------
# Atomicity, retries and limits
# ---------------------------------------------------------------------------


class TestCascadeFailureHandling:
    """Tests for rollback, retry and timeout behaviour."""

    @pytest.mark.asyncio
    async def test_failure_midway_rolls_back_everything(self):
        """A failure after some deletes leaves the store exactly as it was."""
        # Arrange
        database = InMemoryDatabase()
        tm = FailingTransactionManager(database)
        seed = Seeder(tm)
        doomed = await seed.user()
        other = await seed.user()
        post = await seed.post(doomed)
        comment = await seed.comment(post, other)
        await seed.vote(other, post)
        await seed.vote(doomed, comment)
        await seed.follow(other, doomed)
        before = database.snapshot()

        cascade_service = build_cascade_service(tm)

        # Act
        with pytest.raises(InternalError) as exc_info:
            await cascade_service.delete_user(doomed.id)

        # Assert
        assert isinstance(exc_info.value.__cause__, RuntimeError)
        assert database.snapshot() == before

    @pytest.mark.asyncio
    async def test_conflict_is_retried_once(self):
        """A single conflict is retried and the retry commits."""
        database = InMemoryDatabase()
        tm = ConflictingTransactionManager(database, conflicts=0)
        seed = Seeder(tm)
        author = await seed.user()
        post = await seed.post(author)
        root = await seed.comment(post, author)
        reply = await seed.comment(post, author, parent=root)
        tm.attempts = 0
        tm.conflicts = 1

        cascade_service = build_cascade_service(tm, max_conflict_retries=1)

        result = await cascade_service.delete_comment(root.id)

        assert result.attempts == 2
        assert result.comments_deleted == 2
        assert root.id not in database.comments
        assert reply.id not in database.comments

    @pytest.mark.asyncio
    async def test_persistent_conflict_is_surfaced(self):
        """Conflicts beyond the allowed retries surface and change nothing."""
        database = InMemoryDatabase()
        tm = ConflictingTransactionManager(database, conflicts=0)
        seed = Seeder(tm)
        author = await seed.user()
        post = await seed.post(author)
        root = await seed.comment(post, author)
        tm.attempts = 0
        tm.conflicts = 5

        cascade_service = build_cascade_service(tm, max_conflict_retries=1)

        with pytest.raises(TransactionConflictError):
            await cascade_service.delete_comment(root.id)

        assert tm.attempts == 2
        assert root.id in database.comments

    @pytest.mark.asyncio
    async def test_timeout_rolls_back(self):
        """An attempt over the time limit is abandoned and rolled back."""
        database = InMemoryDatabase()
        tm = SlowTransactionManager(database)
        seed = Seeder(tm)
        author = await seed.user()
        post = await seed.post(author)
        root = await seed.comment(post, author)
        await seed.vote(author, root)
        before = database.snapshot()

        cascade_service = build_cascade_service(tm, timeout_seconds=0.05)

        with pytest.raises(CascadeTimeoutError):
            await cascade_service.delete_comment(root.id)

        assert database.snapshot() == before

    @pytest.mark.asyncio
    async def test_revalidation_detects_late_reply(self):
        """A reply appearing after traversal aborts the attempt."""
        database = InMemoryDatabase()
        seeding = InMemoryTransactionManager(database)
        seed = Seeder(seeding)
        author = await seed.user()
        post = await seed.post(author)
        root = await seed.comment(post, author)
        await seed.comment(post, author, parent=root)

        tm = ReplyRacingTransactionManager(database, root)
        cascade_service = build_cascade_service(
            tm, revalidate=True, max_conflict_retries=0
        )

        with pytest.raises(TransactionConflictError, match="comment subtree"):
            await cascade_service.delete_comment(root.id)

        assert root.id in database.comments

    @pytest.mark.asyncio
    async def test_revalidation_retry_succeeds(self):
        """After a detected race the retry resolves a fresh subtree."""
        database = InMemoryDatabase()
        seeding = InMemoryTransactionManager(database)
        seed = Seeder(seeding)
        author = await seed.user()
        post = await seed.post(author)
        root = await seed.comment(post, author)
        await seed.comment(post, author, parent=root)

        tm = ReplyRacingTransactionManager(database, root)
        cascade_service = build_cascade_service(
            tm, revalidate=True, max_conflict_retries=1
        )

        result = await cascade_service.delete_comment(root.id)

        assert result.attempts == 2
        assert result.comments_deleted == 2
        assert database.comments == {}


class TestCascadeLocking:
    """Every deleted vote or follow target is locked before its references go."""

    @pytest.mark.asyncio
    async def test_comment_cascade_locks_subtree(self):
        database = InMemoryDatabase()
        tm = LockRecordingTransactionManager(database)
        seed = Seeder(tm)
        author = await seed.user()
        post = await seed.post(author)
        root, child, grandchild = await seed.thread(post, author, depth=3)

        await build_cascade_service(tm).delete_comment(root.id)

        assert tm.locked["comments"] == {root.id, child.id, grandchild.id}
        assert tm.locked["posts"] == set()

    @pytest.mark.asyncio
    async def test_user_cascade_locks_everything_it_deletes(self):
        database = InMemoryDatabase()
        tm = LockRecordingTransactionManager(database)
        seed = Seeder(tm)
        doomed = await seed.user()
        other = await seed.user()
        community = await seed.community(doomed)
        own_post = await seed.post(doomed, community)
        other_post = await seed.post(other)
        on_own = await seed.comment(own_post, other)
        elsewhere = await seed.comment(other_post, doomed)
        reply = await seed.comment(other_post, other, parent=elsewhere)

        await build_cascade_service(tm).delete_user(doomed.id)

        assert tm.locked["users"] == {doomed.id}
        assert tm.locked["communities"] == {community.id}
        assert tm.locked["posts"] == {own_post.id}
        assert tm.locked["comments"] == {on_own.id, elsewhere.id, reply.id}

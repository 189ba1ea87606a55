"""Test configuration and fixtures."""

from dataclasses import dataclass
from typing import Optional
from uuid import UUID, uuid4

from forum.domain.model import Comment, Community, Follow, Post, User, Vote
from forum.domain.repository import TransactionManager
from forum.domain.value import (
    CommentId,
    CommunityId,
    FollowId,
    FollowTargetType,
    PostId,
    UserId,
    Username,
    VoteId,
    VoteTargetType,
    VoteValue,
)


@dataclass
class Seeder:
    """Writes test rows straight through the repositories.

    Each call commits its own transaction, so rows are visible to the
    services under test exactly as production rows would be.
    """

    transaction_manager: TransactionManager

    async def user(self, username: Optional[str] = None) -> User:
        user = User(
            id=UserId(uuid4()),
            username=Username(username or f"user_{uuid4().hex[:8]}"),
        )
        async with self.transaction_manager.begin() as uow:
            return await uow.users.save(user)

    async def community(self, creator: User, name: Optional[str] = None) -> Community:
        community = Community(
            id=CommunityId(uuid4()),
            creator_id=creator.id,
            name=name or f"community-{uuid4().hex[:8]}",
        )
        async with self.transaction_manager.begin() as uow:
            return await uow.communities.save(community)

    async def post(self, author: User, community: Optional[Community] = None) -> Post:
        post = Post(
            id=PostId(uuid4()),
            author_id=author.id,
            community_id=community.id if community else None,
            title="Test Post",
            content="Test content",
        )
        async with self.transaction_manager.begin() as uow:
            return await uow.posts.save(post)

    async def comment(
        self, post: Post, author: User, parent: Optional[Comment] = None
    ) -> Comment:
        comment = Comment(
            id=CommentId(uuid4()),
            post_id=post.id,
            author_id=author.id,
            content="Test comment",
            parent_id=parent.id if parent else None,
        )
        async with self.transaction_manager.begin() as uow:
            return await uow.comments.save(comment)

    async def vote(
        self,
        user: User,
        target: Post | Comment,
        value: VoteValue = VoteValue.UP,
    ) -> Vote:
        target_type = (
            VoteTargetType.POST if isinstance(target, Post) else VoteTargetType.COMMENT
        )
        vote = Vote(
            id=VoteId(uuid4()),
            user_id=user.id,
            target_type=target_type,
            target_id=target.id,
            value=value,
        )
        async with self.transaction_manager.begin() as uow:
            return await uow.votes.save(vote)

    async def follow(self, user: User, target: User | Community) -> Follow:
        target_type = (
            FollowTargetType.USER
            if isinstance(target, User)
            else FollowTargetType.COMMUNITY
        )
        follow = Follow(
            id=FollowId(uuid4()),
            user_id=user.id,
            target_type=target_type,
            target_id=target.id,
        )
        async with self.transaction_manager.begin() as uow:
            return await uow.follows.save(follow)

    async def thread(self, post: Post, author: User, depth: int) -> list[Comment]:
        """Create a single chain of ``depth`` comments, each replying to the last."""
        chain: list[Comment] = []
        parent = None
        for _ in range(depth):
            parent = await self.comment(post, author, parent=parent)
            chain.append(parent)
        return chain


async def comment_exists(transaction_manager: TransactionManager, id: UUID) -> bool:
    async with transaction_manager.begin() as uow:
        return await uow.comments.exists(CommentId(id))


async def votes_on(
    transaction_manager: TransactionManager, target_type: VoteTargetType, id: UUID
) -> list[Vote]:
    async with transaction_manager.begin() as uow:
        return await uow.votes.find_by_target(target_type, id)


async def follows_on(
    transaction_manager: TransactionManager, target_type: FollowTargetType, id: UUID
) -> list[Follow]:
    async with transaction_manager.begin() as uow:
        return await uow.follows.find_by_target(target_type, id)

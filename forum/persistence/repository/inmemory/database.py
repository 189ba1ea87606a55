"""Shared in-memory store for testing.

All in-memory repositories of one ``InMemoryDatabase`` see the same rows,
and foreign keys are checked the way PostgreSQL checks them (without any
ON DELETE action), so tests fail on a cascade that deletes out of order.
"""

from dataclasses import dataclass, field, fields
from typing import Any, Iterable
from uuid import UUID

from sqlalchemy.exc import IntegrityError

from forum.domain.model import Comment, Community, Follow, Post, User, Vote
from forum.domain.value import CommentId, CommunityId, FollowId, PostId, UserId, VoteId
from forum.persistence.errors import FOREIGN_KEY_VIOLATION, UNIQUE_VIOLATION


class StoreViolation(Exception):
    """Driver-level error of the store, carrying a PostgreSQL SQLSTATE."""

    def __init__(self, message: str, sqlstate: str) -> None:
        super().__init__(message)
        self.sqlstate = sqlstate


def foreign_key_violation(message: str) -> IntegrityError:
    """Build the error PostgreSQL would raise for a foreign key."""
    return IntegrityError(message, None, StoreViolation(message, FOREIGN_KEY_VIOLATION))


def unique_violation(message: str) -> IntegrityError:
    """Build the error PostgreSQL would raise for a unique constraint."""
    return IntegrityError(message, None, StoreViolation(message, UNIQUE_VIOLATION))


@dataclass
class InMemoryDatabase:
    """Tables of the in-memory store, keyed by primary key."""

    users: dict[UserId, User] = field(default_factory=dict)
    communities: dict[CommunityId, Community] = field(default_factory=dict)
    posts: dict[PostId, Post] = field(default_factory=dict)
    comments: dict[CommentId, Comment] = field(default_factory=dict)
    votes: dict[VoteId, Vote] = field(default_factory=dict)
    follows: dict[FollowId, Follow] = field(default_factory=dict)

    def snapshot(self) -> dict[str, dict[Any, Any]]:
        """Copy every table (rows are immutable, so shallow copies suffice)."""
        return {f.name: dict(getattr(self, f.name)) for f in fields(self)}

    def restore(self, snapshot: dict[str, dict[Any, Any]]) -> None:
        """Put every table back the way ``snapshot`` saw it."""
        for name, rows in snapshot.items():
            setattr(self, name, dict(rows))

    def check_user_unreferenced(self, user_ids: Iterable[UUID]) -> None:
        ids = set(user_ids)
        referencing = [
            ("communities", (c.creator_id for c in self.communities.values())),
            ("posts", (p.author_id for p in self.posts.values())),
            ("comments", (c.author_id for c in self.comments.values())),
            ("votes", (v.user_id for v in self.votes.values())),
            ("follows", (f.user_id for f in self.follows.values())),
        ]
        for table, column in referencing:
            if any(user_id in ids for user_id in column):
                raise foreign_key_violation(f"users still referenced from {table}")

    def check_communities_unreferenced(self, community_ids: Iterable[UUID]) -> None:
        ids = set(community_ids)
        if any(p.community_id in ids for p in self.posts.values()):
            raise foreign_key_violation("communities still referenced from posts")

    def check_posts_unreferenced(self, post_ids: Iterable[UUID]) -> None:
        ids = set(post_ids)
        if any(c.post_id in ids for c in self.comments.values()):
            raise foreign_key_violation("posts still referenced from comments")

    def check_comments_unreferenced(self, comment_ids: Iterable[UUID]) -> None:
        ids = set(comment_ids)
        if any(
            c.parent_id in ids
            for c in self.comments.values()
            if c.id not in ids
        ):
            raise foreign_key_violation("comments still referenced from replies")

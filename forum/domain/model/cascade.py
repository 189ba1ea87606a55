"""Outcome of a cascade deletion."""

from typing import Literal
from uuid import UUID

from forum.domain.model.common import DomainModel


class CascadeResult(DomainModel):
    """Counts of rows removed (or detached) by one committed cascade.

    ``attempts`` is greater than 1 when the cascade was retried after a
    transaction conflict.
    """

    root_type: Literal["comment", "user"]
    root_id: UUID
    users_deleted: int = 0
    communities_deleted: int = 0
    posts_deleted: int = 0
    posts_detached: int = 0
    comments_deleted: int = 0
    votes_deleted: int = 0
    follows_deleted: int = 0
    attempts: int = 1

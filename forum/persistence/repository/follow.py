"""PostgreSQL implementation of Follow repository."""

from forum.domain.model import Follow
from forum.domain.repository import FollowRepository
from forum.persistence.mappers import follow_to_dict, row_to_follow
from forum.persistence.repository.reference import PostgresReferenceRepository
from forum.persistence.tables import follows_table


class PostgresFollowRepository(PostgresReferenceRepository[Follow], FollowRepository):
    """PostgreSQL implementation of FollowRepository."""

    table = follows_table
    row_to_entity = staticmethod(row_to_follow)
    entity_to_dict = staticmethod(follow_to_dict)

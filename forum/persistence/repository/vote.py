"""PostgreSQL implementation of Vote repository."""

from forum.domain.model import Vote
from forum.domain.repository import VoteRepository
from forum.persistence.mappers import row_to_vote, vote_to_dict
from forum.persistence.repository.reference import PostgresReferenceRepository
from forum.persistence.tables import votes_table


class PostgresVoteRepository(PostgresReferenceRepository[Vote], VoteRepository):
    """PostgreSQL implementation of VoteRepository."""

    table = votes_table
    row_to_entity = staticmethod(row_to_vote)
    entity_to_dict = staticmethod(vote_to_dict)

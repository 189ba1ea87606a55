"""Domain services for the forum."""

from forum.domain.service.base import Service
from forum.domain.service.cascade_service import CascadeService
from forum.domain.service.comment_tree import CommentTreeResolver
from forum.domain.service.follow_service import FollowService
from forum.domain.service.reference_service import ReferenceService
from forum.domain.service.vote_service import VoteService

__all__ = [
    "Service",
    "CommentTreeResolver",
    "ReferenceService",
    "VoteService",
    "FollowService",
    "CascadeService",
]

"""Domain layer DI providers."""

from dishka import Scope, provide

from forum.config import CascadeSettings, Settings
from forum.domain.repository import TransactionManager
from forum.domain.service import (
    CascadeService,
    CommentTreeResolver,
    FollowService,
    VoteService,
)
from forum.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services hold no per-request state: every operation opens its
    own transaction through the APP-scoped TransactionManager.
    """

    scope = Scope.REQUEST

    @provide
    def get_comment_tree_resolver(
        self, cascade_settings: CascadeSettings
    ) -> CommentTreeResolver:
        """Provide comment tree resolver."""
        return CommentTreeResolver(batch_size=cascade_settings.resolver_batch_size)

    @provide
    def get_vote_service(self, transaction_manager: TransactionManager) -> VoteService:
        """Provide vote domain service."""
        return VoteService(transaction_manager=transaction_manager)

    @provide
    def get_follow_service(
        self, transaction_manager: TransactionManager
    ) -> FollowService:
        """Provide follow domain service."""
        return FollowService(transaction_manager=transaction_manager)

    @provide
    def get_cascade_service(
        self,
        transaction_manager: TransactionManager,
        comment_tree: CommentTreeResolver,
        vote_service: VoteService,
        follow_service: FollowService,
        settings: Settings,
    ) -> CascadeService:
        """Provide cascade deletion domain service.

        Re-validation is switched on whenever the configured isolation level
        lets reads change within a transaction.
        """
        return CascadeService(
            transaction_manager=transaction_manager,
            comment_tree=comment_tree,
            vote_service=vote_service,
            follow_service=follow_service,
            max_conflict_retries=settings.cascade.max_conflict_retries,
            timeout_seconds=settings.cascade.timeout_seconds,
            revalidate=not settings.database.guarantees_repeatable_read,
        )

"""Application layer DI providers."""

from dishka import Scope, provide

from forum.application.usecase.comment import DeleteCommentUseCase
from forum.application.usecase.follow import RecordFollowUseCase, RemoveFollowUseCase
from forum.application.usecase.user import DeleteUserUseCase
from forum.application.usecase.vote import RecordVoteUseCase, RemoveVoteUseCase
from forum.domain.service import CascadeService, FollowService, VoteService
from forum.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    # Cascade use cases
    @provide(scope=Scope.REQUEST)
    def get_delete_comment_use_case(
        self, cascade_service: CascadeService
    ) -> DeleteCommentUseCase:
        """Provide delete comment use case."""
        return DeleteCommentUseCase(cascade_service=cascade_service)

    @provide(scope=Scope.REQUEST)
    def get_delete_user_use_case(
        self, cascade_service: CascadeService
    ) -> DeleteUserUseCase:
        """Provide delete user use case."""
        return DeleteUserUseCase(cascade_service=cascade_service)

    # Vote use cases
    @provide(scope=Scope.REQUEST)
    def get_record_vote_use_case(self, vote_service: VoteService) -> RecordVoteUseCase:
        """Provide record vote use case."""
        return RecordVoteUseCase(vote_service=vote_service)

    @provide(scope=Scope.REQUEST)
    def get_remove_vote_use_case(self, vote_service: VoteService) -> RemoveVoteUseCase:
        """Provide remove vote use case."""
        return RemoveVoteUseCase(vote_service=vote_service)

    # Follow use cases
    @provide(scope=Scope.REQUEST)
    def get_record_follow_use_case(
        self, follow_service: FollowService
    ) -> RecordFollowUseCase:
        """Provide record follow use case."""
        return RecordFollowUseCase(follow_service=follow_service)

    @provide(scope=Scope.REQUEST)
    def get_remove_follow_use_case(
        self, follow_service: FollowService
    ) -> RemoveFollowUseCase:
        """Provide remove follow use case."""
        return RemoveFollowUseCase(follow_service=follow_service)

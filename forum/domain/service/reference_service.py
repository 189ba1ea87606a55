"""Polymorphic reference store shared by votes and follows."""

from enum import Enum
from typing import Any, ClassVar, Generic, Sequence, TypeVar
from uuid import UUID

import logfire
from sqlalchemy.exc import IntegrityError

from forum.domain.error import ConflictError, NotFoundError
from forum.domain.model.common import DomainModel
from forum.domain.repository import ReferenceRepository, TransactionManager, UnitOfWork
from forum.domain.value import UserId

from .base import Service

R = TypeVar("R", bound=DomainModel)
T = TypeVar("T", bound=Enum)


class ReferenceService(Service, Generic[R, T]):
    """Records and removes references keyed by (user, target_type, target_id).

    The target table depends on ``target_type``, so no foreign key can
    guarantee the target exists. Writes therefore check existence against
    the repository matching the target type, and cascades remove
    references to deleted targets explicitly through
    ``remove_all_for_targets`` / ``remove_all_for_subject``.

    Subclasses bind the reference kind: its repository on the unit of
    work, its target-type dispatch and its entity construction.
    """

    resource: ClassVar[str] = "Reference"

    def __init__(self, transaction_manager: TransactionManager) -> None:
        """Initialize reference service.

        Args:
            transaction_manager: Opens the transaction each write runs in
        """
        self.transaction_manager = transaction_manager

    def repository(self, uow: UnitOfWork) -> ReferenceRepository[R, T]:
        """Return this reference kind's repository on a unit of work."""
        raise NotImplementedError

    async def target_exists(
        self, uow: UnitOfWork, target_type: T, target_id: UUID
    ) -> bool:
        """Check the target exists, key-share locking it until commit.

        The lock makes a concurrent cascade that deletes the target wait
        for this write, or makes this write wait for the cascade and then
        see the target gone.
        """
        raise NotImplementedError

    async def lock_targets(
        self, uow: UnitOfWork, target_type: T, target_ids: Sequence[UUID]
    ) -> None:
        """Lock targets about to be deleted against concurrent reference writes."""
        raise NotImplementedError

    def build(
        self, user_id: UserId, target_id: UUID, target_type: T, value: Any = None
    ) -> R:
        """Build a new, validated reference entity.

        Raises:
            ValidationError: If the reference is malformed
        """
        raise NotImplementedError

    def _key(self, user_id: UserId, target_id: UUID, target_type: T) -> str:
        return f"{user_id}->{target_type.value}:{target_id}"

    async def record(
        self, user_id: UserId, target_id: UUID, target_type: T, value: Any = None
    ) -> R:
        """Record a reference from a user to a target.

        Args:
            user_id: Subject user
            target_id: Target entity
            target_type: Table the target lives in
            value: Kind-specific payload (the vote value for votes)

        Returns:
            The saved reference

        Raises:
            ValidationError: If the reference is malformed
            NotFoundError: If the user or the target does not exist
            ConflictError: If the user already holds this reference
            TransactionConflictError: If the user was deleted concurrently
        """
        key = self._key(user_id, target_id, target_type)
        with logfire.span(
            f"{self.resource.lower()}_service.record",
            user_id=str(user_id),
            target_type=target_type.value,
            target_id=str(target_id),
        ):
            reference = self.build(user_id, target_id, target_type, value)

            try:
                async with self.transaction_manager.begin() as uow:
                    if not await uow.users.exists(user_id):
                        logfire.warn("Reference from non-existent user", key=key)
                        raise NotFoundError("User", str(user_id))

                    if not await self.target_exists(uow, target_type, target_id):
                        logfire.warn("Reference to non-existent target", key=key)
                        raise NotFoundError(
                            target_type.value.capitalize(), str(target_id)
                        )

                    repository = self.repository(uow)
                    if await repository.find(user_id, target_type, target_id):
                        logfire.warn("Duplicate reference attempt", key=key)
                        raise ConflictError(self.resource, key)

                    saved = await repository.save(reference)
            except IntegrityError:
                # Lost a race with a concurrent identical write
                logfire.warn("Duplicate reference rejected by store", key=key)
                raise ConflictError(self.resource, key)

            logfire.info(f"{self.resource} recorded", key=key)
            return saved

    async def remove(self, user_id: UserId, target_id: UUID, target_type: T) -> None:
        """Remove the reference a user holds on a target.

        Raises:
            NotFoundError: If no such reference exists
        """
        key = self._key(user_id, target_id, target_type)
        with logfire.span(
            f"{self.resource.lower()}_service.remove",
            user_id=str(user_id),
            target_type=target_type.value,
            target_id=str(target_id),
        ):
            async with self.transaction_manager.begin() as uow:
                deleted = await self.repository(uow).delete(
                    user_id, target_type, target_id
                )
                if not deleted:
                    logfire.warn(f"No {self.resource.lower()} to remove", key=key)
                    raise NotFoundError(self.resource, key)

            logfire.info(f"{self.resource} removed", key=key)

    async def remove_all_for_targets(
        self, uow: UnitOfWork, target_ids: Sequence[UUID], target_type: T
    ) -> int:
        """Remove every reference pointing at the given targets.

        Runs inside the caller's transaction, which must go on to delete the
        targets. Idempotent: targets with no references (or an empty
        sequence) are not an error.

        Returns:
            Number of references removed
        """
        unique_ids = list(dict.fromkeys(target_ids))
        if not unique_ids:
            return 0
        # Waits for writers holding a target; later writers wait for us
        await self.lock_targets(uow, target_type, unique_ids)
        removed = await self.repository(uow).delete_by_targets(
            target_type, unique_ids
        )
        logfire.info(
            f"{self.resource}s removed for targets",
            target_type=target_type.value,
            targets=len(unique_ids),
            removed=removed,
        )
        return removed

    async def remove_all_for_subject(self, uow: UnitOfWork, user_id: UserId) -> int:
        """Remove every reference held by a user, inside the caller's transaction.

        Returns:
            Number of references removed
        """
        removed = await self.repository(uow).delete_by_user(user_id)
        logfire.info(
            f"{self.resource}s removed for subject",
            user_id=str(user_id),
            removed=removed,
        )
        return removed

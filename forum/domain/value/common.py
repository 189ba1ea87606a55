"""Base class for value objects."""

from typing import Generic, TypeVar

from pydantic import ConfigDict, RootModel

T = TypeVar("T")


class RootValueObject(RootModel[T], Generic[T]):
    """Immutable wrapper around one validated primitive.

    Subclasses add a ``field_validator("root")``. Being a RootModel,
    ``model_dump()`` of an entity holding one yields the bare primitive,
    which is what the table mappers store.
    """

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return str(self.root)

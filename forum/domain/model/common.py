"""Base model for all domain entities."""

from pydantic import BaseModel, ConfigDict


class DomainModel(BaseModel):
    """Base class for forum entities.

    Entities are frozen: an update is a ``model_copy(update=...)`` saved
    back through its repository, never an in-place mutation.
    """

    model_config = ConfigDict(frozen=True)

"""User use cases."""

from .delete_user import DeleteUserRequest, DeleteUserResponse, DeleteUserUseCase

__all__ = [
    "DeleteUserRequest",
    "DeleteUserResponse",
    "DeleteUserUseCase",
]

"""Errors raised by the persistence layer for user records."""


class UserStoreError(Exception):
    """Base class for failures reported by the user store."""


class UserConflictError(UserStoreError):
    """A record with the same identifier already exists."""

    def __init__(self, user_id: str) -> None:
        super().__init__(f"User with id {user_id} already exists")
        self.user_id = user_id


class UserNotFoundError(UserStoreError):
    """The identifier does not resolve to a live record."""

    def __init__(self, user_id: str) -> None:
        super().__init__(f"User with id {user_id} not found")
        self.user_id = user_id


class StoreUnavailableError(UserStoreError):
    """The underlying database could not complete the operation."""


__all__ = [
    "StoreUnavailableError",
    "UserConflictError",
    "UserNotFoundError",
    "UserStoreError",
]

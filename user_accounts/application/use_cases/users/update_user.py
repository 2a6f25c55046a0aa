"""Use case for updating user information."""

import logging

from sqlalchemy.orm import Session

from user_accounts.domain.entities import User
from user_accounts.domain.errors import StoreUnavailableError, UserNotFoundError
from user_accounts.infrastructure.repositories import UserRepository

from .results import UseCaseResult, UserErrorKind
from .validators import ensure_valid_username, normalize_email

logger = logging.getLogger(__name__)


def update_user(session: Session, *, user_id: str, username: str | None = None) -> UseCaseResult[User]:
    """Update the profile fields of ``user_id``.

    Credentials, role and lifecycle flags have dedicated use cases.
    """

    user_id = normalize_email(user_id)
    repository = UserRepository(session)
    try:
        current_user = repository.get(user_id)
        if current_user is None:
            return UseCaseResult.failure(UserErrorKind.NOT_FOUND, "User not found.")

        if username is None:
            return UseCaseResult.success(current_user)
        try:
            new_username = ensure_valid_username(username)
        except ValueError as exc:
            return UseCaseResult.failure(UserErrorKind.VALIDATION_ERROR, str(exc))

        updated = repository.update_username(user_id, new_username)
    except UserNotFoundError:
        return UseCaseResult.failure(UserErrorKind.NOT_FOUND, "User not found.")
    except StoreUnavailableError:
        return UseCaseResult.store_unavailable()

    logger.info("User updated: %s", user_id)
    return UseCaseResult.success(updated)

"""Use case for an administrator resetting a user's password."""

import logging

from sqlalchemy.orm import Session

from user_accounts.domain.entities import User
from user_accounts.domain.errors import StoreUnavailableError, UserNotFoundError
from user_accounts.infrastructure.repositories import UserRepository
from user_accounts.infrastructure.security import get_password_hash

from .results import UseCaseResult, UserErrorKind
from .validators import ensure_passwords_match, ensure_strong_password, normalize_email

logger = logging.getLogger(__name__)


def reset_password(
    session: Session,
    *,
    user_id: str,
    new_password: str,
    confirm_password: str,
) -> UseCaseResult[User]:
    """Store a new modern hash for ``user_id`` without the current password."""

    try:
        ensure_passwords_match(new_password, confirm_password)
        ensure_strong_password(new_password)
    except ValueError as exc:
        return UseCaseResult.failure(UserErrorKind.VALIDATION_ERROR, str(exc))

    user_id = normalize_email(user_id)
    repository = UserRepository(session)
    try:
        user = repository.get(user_id)
        if user is None:
            return UseCaseResult.failure(UserErrorKind.NOT_FOUND, "User not found.")
        updated = repository.set_password_hash(user_id, get_password_hash(new_password))
    except UserNotFoundError:
        return UseCaseResult.failure(UserErrorKind.NOT_FOUND, "User not found.")
    except StoreUnavailableError:
        return UseCaseResult.store_unavailable()

    logger.info("Password reset for %s", user_id)
    return UseCaseResult.success(updated)


__all__ = ["reset_password"]

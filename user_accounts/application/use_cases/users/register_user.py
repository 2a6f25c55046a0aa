"""Use case for registering users."""

import logging

from sqlalchemy.orm import Session

from user_accounts.domain.entities import RoleName, User
from user_accounts.domain.errors import StoreUnavailableError, UserConflictError
from user_accounts.infrastructure.repositories import UserRepository
from user_accounts.infrastructure.security import get_password_hash

from .results import UseCaseResult, UserErrorKind
from .validators import (
    ensure_passwords_match,
    ensure_strong_password,
    ensure_valid_email,
    ensure_valid_username,
)

logger = logging.getLogger(__name__)

_ALREADY_EXISTS_MESSAGE = "A user with this email address already exists."


def register_user(
    session: Session,
    *,
    user_id: str,
    username: str,
    password: str,
    confirm_password: str,
    role: RoleName = RoleName.USER,
) -> UseCaseResult[User]:
    """Create a new account hashed with the modern algorithm.

    Self-service registration always yields ``RoleName.USER``; other roles are
    only requested by administrative tooling.
    """

    try:
        normalized_id = ensure_valid_email(user_id)
        normalized_username = ensure_valid_username(username)
        ensure_passwords_match(password, confirm_password)
        ensure_strong_password(password)
    except ValueError as exc:
        logger.warning("Registration rejected for %s: %s", user_id, exc)
        return UseCaseResult.failure(UserErrorKind.VALIDATION_ERROR, str(exc))

    repository = UserRepository(session)
    try:
        if repository.exists(normalized_id):
            logger.warning("Registration rejected: %s already exists", normalized_id)
            return UseCaseResult.failure(UserErrorKind.ALREADY_EXISTS, _ALREADY_EXISTS_MESSAGE)

        user = repository.create(
            User(
                user_id=normalized_id,
                username=normalized_username,
                password_hash=get_password_hash(password),
                role=role,
                password_migrated=True,
            )
        )
    except UserConflictError:
        # Either a soft-deleted account still owns the id or a concurrent registration won.
        logger.warning("Registration conflict for %s", normalized_id)
        return UseCaseResult.failure(UserErrorKind.ALREADY_EXISTS, _ALREADY_EXISTS_MESSAGE)
    except StoreUnavailableError:
        return UseCaseResult.store_unavailable()

    return UseCaseResult.success(user)

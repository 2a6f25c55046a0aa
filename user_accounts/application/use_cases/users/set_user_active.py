"""Use case for activating and deactivating users."""

import logging

from sqlalchemy.orm import Session

from user_accounts.domain.entities import User
from user_accounts.domain.errors import StoreUnavailableError, UserNotFoundError
from user_accounts.infrastructure.repositories import UserRepository

from .results import UseCaseResult, UserErrorKind
from .validators import normalize_email

logger = logging.getLogger(__name__)


def set_user_active(session: Session, user_id: str, *, is_active: bool) -> UseCaseResult[User]:
    """Toggle whether ``user_id`` may authenticate. Administrators stay active."""

    user_id = normalize_email(user_id)
    repository = UserRepository(session)
    try:
        user = repository.get(user_id)
        if user is None:
            return UseCaseResult.failure(UserErrorKind.NOT_FOUND, "User not found.")
        if user.is_active == is_active:
            return UseCaseResult.success(user)
        if not is_active and user.is_admin():
            logger.warning("Refused to deactivate administrator %s", user_id)
            return UseCaseResult.failure(UserErrorKind.FORBIDDEN, "Cannot deactivate admin users.")

        updated = repository.set_active(user_id, is_active)
    except UserNotFoundError:
        return UseCaseResult.failure(UserErrorKind.NOT_FOUND, "User not found.")
    except StoreUnavailableError:
        return UseCaseResult.store_unavailable()

    logger.info("User %s %s", user_id, "activated" if is_active else "deactivated")
    return UseCaseResult.success(updated)

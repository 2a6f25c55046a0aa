"""Use case for changing the password of the authenticated user."""

import logging

from sqlalchemy.orm import Session

from user_accounts.domain.entities import User
from user_accounts.domain.errors import StoreUnavailableError
from user_accounts.infrastructure.repositories import UserRepository
from user_accounts.infrastructure.security import get_password_hash, verify_legacy_password, verify_password

from .results import UseCaseResult, UserErrorKind
from .validators import ensure_passwords_match, ensure_strong_password, normalize_email

logger = logging.getLogger(__name__)


def change_password(
    session: Session,
    *,
    user_id: str,
    current_password: str,
    new_password: str,
    confirm_password: str,
) -> UseCaseResult[User]:
    """Replace the password after proving knowledge of the current one."""

    user_id = normalize_email(user_id)
    repository = UserRepository(session)
    try:
        user = repository.get(user_id)
        if user is None:
            return UseCaseResult.failure(UserErrorKind.NOT_FOUND, "User not found.")

        if user.password_migrated:
            current_ok = verify_password(current_password, user.password_hash)
        else:
            current_ok = verify_legacy_password(current_password, user.password_hash)
        if not current_ok:
            logger.warning("Password change rejected for %s: wrong current password", user_id)
            return UseCaseResult.failure(
                UserErrorKind.INVALID_CREDENTIALS, "Current password is incorrect."
            )

        try:
            ensure_passwords_match(new_password, confirm_password)
            ensure_strong_password(new_password)
        except ValueError as exc:
            return UseCaseResult.failure(UserErrorKind.VALIDATION_ERROR, str(exc))

        swapped = repository.replace_password_hash(
            user_id,
            current_hash=user.password_hash,
            new_hash=get_password_hash(new_password),
        )
        if not swapped:
            logger.warning("Password change for %s lost a race with another update", user_id)
            return UseCaseResult.failure(
                UserErrorKind.CONFLICT,
                "The password was changed by another request. Please try again.",
            )
        updated = repository.get(user_id)
        if updated is None:
            return UseCaseResult.failure(UserErrorKind.NOT_FOUND, "User not found.")
    except StoreUnavailableError:
        return UseCaseResult.store_unavailable()

    logger.info("Password changed for %s", user_id)
    return UseCaseResult.success(updated)

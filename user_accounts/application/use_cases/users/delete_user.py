"""Use case for deleting a user."""

import logging

from sqlalchemy.orm import Session

from user_accounts.domain.errors import StoreUnavailableError
from user_accounts.infrastructure.repositories import UserRepository

from .results import UseCaseResult, UserErrorKind
from .validators import normalize_email

logger = logging.getLogger(__name__)


def delete_user(session: Session, user_id: str, *, hard: bool = False) -> UseCaseResult[None]:
    """Soft delete ``user_id``, or remove it permanently when ``hard`` is set.

    Administrator accounts are never deleted. A hard delete also applies to
    records that are already soft deleted.
    """

    user_id = normalize_email(user_id)
    repository = UserRepository(session)
    try:
        user = repository.get_including_deleted(user_id) if hard else repository.get(user_id)
        if user is None:
            return UseCaseResult.failure(UserErrorKind.NOT_FOUND, "User not found.")
        if user.is_admin():
            logger.warning("Refused to delete administrator %s", user_id)
            return UseCaseResult.failure(UserErrorKind.FORBIDDEN, "Cannot delete admin users.")

        deleted = repository.hard_delete(user_id) if hard else repository.soft_delete(user_id)
    except StoreUnavailableError:
        return UseCaseResult.store_unavailable()

    if not deleted:
        return UseCaseResult.failure(UserErrorKind.NOT_FOUND, "User not found.")
    return UseCaseResult.success()

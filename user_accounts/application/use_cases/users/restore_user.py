"""Use case for restoring a soft-deleted user."""

from sqlalchemy.orm import Session

from user_accounts.domain.entities import User
from user_accounts.domain.errors import StoreUnavailableError
from user_accounts.infrastructure.repositories import UserRepository

from .results import UseCaseResult, UserErrorKind
from .validators import normalize_email


def restore_user(session: Session, user_id: str) -> UseCaseResult[User]:
    """Clear the delete marker of ``user_id`` and return the live record."""

    user_id = normalize_email(user_id)
    repository = UserRepository(session)
    try:
        if not repository.restore(user_id):
            return UseCaseResult.failure(
                UserErrorKind.NOT_FOUND, "User not found or not deleted."
            )
        user = repository.get(user_id)
    except StoreUnavailableError:
        return UseCaseResult.store_unavailable()

    if user is None:
        return UseCaseResult.failure(UserErrorKind.NOT_FOUND, "User not found or not deleted.")
    return UseCaseResult.success(user)

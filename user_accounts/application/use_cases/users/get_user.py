"""Use case for retrieving a single user."""

from sqlalchemy.orm import Session

from user_accounts.domain.entities import User
from user_accounts.domain.errors import StoreUnavailableError
from user_accounts.infrastructure.repositories import UserRepository

from .results import UseCaseResult, UserErrorKind
from .validators import normalize_email


def get_user(session: Session, user_id: str, *, include_deleted: bool = False) -> UseCaseResult[User]:
    """Return the requested user or ``NOT_FOUND``."""

    repository = UserRepository(session)
    normalized_id = normalize_email(user_id)
    try:
        if include_deleted:
            user = repository.get_including_deleted(normalized_id)
        else:
            user = repository.get(normalized_id)
    except StoreUnavailableError:
        return UseCaseResult.store_unavailable()

    if user is None:
        return UseCaseResult.failure(UserErrorKind.NOT_FOUND, "User not found.")
    return UseCaseResult.success(user)

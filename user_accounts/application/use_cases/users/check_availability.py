"""Use cases telling whether an email or username can still be used."""

from sqlalchemy.orm import Session

from user_accounts.domain.errors import StoreUnavailableError
from user_accounts.infrastructure.repositories import UserRepository

from .results import UseCaseResult
from .validators import normalize_email


def is_email_available(session: Session, email: str) -> UseCaseResult[bool]:
    """Soft-deleted accounts keep their email, so they count as taken."""

    normalized = normalize_email(email)
    if not normalized:
        return UseCaseResult.success(False)
    try:
        taken = UserRepository(session).get_including_deleted(normalized) is not None
    except StoreUnavailableError:
        return UseCaseResult.store_unavailable()
    return UseCaseResult.success(not taken)


def is_username_available(
    session: Session, username: str, *, exclude_user_id: str | None = None
) -> UseCaseResult[bool]:
    if not (username or "").strip():
        return UseCaseResult.success(False)
    excluded = normalize_email(exclude_user_id) if exclude_user_id else None
    try:
        taken = UserRepository(session).username_taken(username, exclude_user_id=excluded)
    except StoreUnavailableError:
        return UseCaseResult.store_unavailable()
    return UseCaseResult.success(not taken)


__all__ = ["is_email_available", "is_username_available"]

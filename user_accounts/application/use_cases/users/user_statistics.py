"""Use case computing the figures shown on the administration dashboard."""

from collections.abc import Sequence
from dataclasses import dataclass

from sqlalchemy.orm import Session

from user_accounts.domain.entities import User
from user_accounts.domain.errors import StoreUnavailableError
from user_accounts.infrastructure.repositories import UserRepository

from .results import UseCaseResult


@dataclass(frozen=True)
class UserStatistics:
    counts: dict[str, int]
    recent_users: Sequence[User]


def user_statistics(session: Session, *, recent: int = 5) -> UseCaseResult[UserStatistics]:
    repository = UserRepository(session)
    try:
        counts = repository.statistics()
        recent_users = repository.list_recent(recent)
    except StoreUnavailableError:
        return UseCaseResult.store_unavailable()
    return UseCaseResult.success(UserStatistics(counts=counts, recent_users=recent_users))

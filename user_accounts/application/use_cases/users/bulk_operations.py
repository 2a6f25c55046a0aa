"""Use cases applying one user operation to a selection of users."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass
import logging

from sqlalchemy.orm import Session

from .delete_user import delete_user
from .results import UseCaseResult, UserErrorKind
from .set_user_active import set_user_active
from .validators import normalize_email

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BulkItemOutcome:
    """Result of the operation for one selected user."""

    user_id: str
    error: UserErrorKind | None = None
    message: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def _selected_ids(user_ids: Iterable[str]) -> list[str]:
    selected: list[str] = []
    for user_id in user_ids:
        normalized = normalize_email(user_id)
        if normalized and normalized not in selected:
            selected.append(normalized)
    return selected


def _run_bulk(
    user_ids: Iterable[str],
    action: str,
    operation: Callable[[str], UseCaseResult],
) -> UseCaseResult[list[BulkItemOutcome]]:
    selected = _selected_ids(user_ids)
    if not selected:
        return UseCaseResult.failure(UserErrorKind.VALIDATION_ERROR, "No users selected.")

    logger.info("Bulk %s of %d users", action, len(selected))
    outcomes: list[BulkItemOutcome] = []
    for user_id in selected:
        result = operation(user_id)
        if result.error is UserErrorKind.STORE_UNAVAILABLE:
            # Users processed so far keep their new state.
            logger.error("Bulk %s stopped at %s: store unavailable", action, user_id)
            return UseCaseResult.store_unavailable()
        outcomes.append(
            BulkItemOutcome(user_id=user_id, error=result.error, message=result.message)
        )

    failed = sum(1 for outcome in outcomes if not outcome.ok)
    logger.info("Bulk %s finished: %d succeeded, %d failed", action, len(outcomes) - failed, failed)
    return UseCaseResult.success(outcomes)


def bulk_set_user_active(
    session: Session, user_ids: Iterable[str], *, is_active: bool
) -> UseCaseResult[list[BulkItemOutcome]]:
    """Activate or deactivate every selected user; administrators stay active."""

    return _run_bulk(
        user_ids,
        "activation" if is_active else "deactivation",
        lambda user_id: set_user_active(session, user_id, is_active=is_active),
    )


def bulk_delete_users(
    session: Session, user_ids: Iterable[str], *, hard: bool = False
) -> UseCaseResult[list[BulkItemOutcome]]:
    """Delete every selected user except administrators."""

    return _run_bulk(
        user_ids,
        "hard delete" if hard else "delete",
        lambda user_id: delete_user(session, user_id, hard=hard),
    )


__all__ = ["BulkItemOutcome", "bulk_delete_users", "bulk_set_user_active"]

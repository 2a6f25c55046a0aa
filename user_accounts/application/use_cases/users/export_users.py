"""Use case for downloading the user list as a file."""

from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from user_accounts.domain.entities import RoleName, User
from user_accounts.domain.errors import StoreUnavailableError
from user_accounts.infrastructure.repositories import MAX_PAGE_SIZE, UserRepository
from user_accounts.infrastructure.user_export import EXPORT_FORMATS, ExportFile, build_export

from .results import UseCaseResult, UserErrorKind

logger = logging.getLogger(__name__)


def export_users(
    session: Session,
    *,
    file_format: str = "csv",
    role: RoleName | None = None,
    is_active: bool | None = None,
    search_term: str | None = None,
) -> UseCaseResult[ExportFile]:
    """Export every live user matching the filters, newest first."""

    file_format = (file_format or "").strip().lower()
    if file_format not in EXPORT_FORMATS:
        return UseCaseResult.failure(
            UserErrorKind.VALIDATION_ERROR,
            f"Export format must be one of: {', '.join(EXPORT_FORMATS)}.",
        )

    repository = UserRepository(session)
    users: list[User] = []
    page = 1
    try:
        while True:
            items, total_count = repository.list_filtered(
                search_term=search_term,
                is_active=is_active,
                role=role,
                page=page,
                page_size=MAX_PAGE_SIZE,
                sort_by="created_at",
                sort_order="desc",
            )
            users.extend(items)
            if not items or len(users) >= total_count:
                break
            page += 1
    except StoreUnavailableError:
        return UseCaseResult.store_unavailable()

    export = build_export(users, file_format)
    logger.info("Exported %d users as %s", export.row_count, file_format)
    return UseCaseResult.success(export)


__all__ = ["export_users"]

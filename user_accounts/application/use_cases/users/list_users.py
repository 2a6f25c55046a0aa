"""Use case for listing users one page at a time."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
import math

from sqlalchemy.orm import Session

from user_accounts.config import get_settings
from user_accounts.domain.entities import RoleName, User
from user_accounts.domain.errors import StoreUnavailableError
from user_accounts.infrastructure.repositories import UserRepository

from .results import UseCaseResult


@dataclass(frozen=True)
class UserListPage:
    """One page of a user listing."""

    items: Sequence[User]
    total_count: int
    current_page: int
    page_size: int

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total_count / self.page_size) if self.page_size else 0


def clamp_page(page: int | None, page_size: int | None) -> tuple[int, int]:
    """Return ``page`` and ``page_size`` inside the allowed ranges."""

    settings = get_settings()
    page = max(page or 1, 1)
    if page_size is None:
        page_size = settings.default_page_size
    page_size = min(max(page_size, 1), settings.max_page_size)
    return page, page_size


def list_users(
    session: Session,
    *,
    search_term: str | None = None,
    is_active: bool | None = None,
    role: RoleName | None = None,
    include_deleted: bool = False,
    sort_by: str | None = "created_at",
    sort_order: str = "desc",
    page: int | None = 1,
    page_size: int | None = None,
) -> UseCaseResult[UserListPage]:
    """Return the requested page of users respecting filters and sorting."""

    page, page_size = clamp_page(page, page_size)
    repository = UserRepository(session)
    try:
        items, total_count = repository.list_filtered(
            search_term=search_term,
            is_active=is_active,
            role=role,
            include_deleted=include_deleted,
            page=page,
            page_size=page_size,
            sort_by=sort_by,
            sort_order=sort_order,
        )
    except StoreUnavailableError:
        return UseCaseResult.store_unavailable()

    return UseCaseResult.success(
        UserListPage(
            items=items,
            total_count=total_count,
            current_page=page,
            page_size=page_size,
        )
    )

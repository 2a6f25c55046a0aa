"""Use case for listing the available roles."""

from sqlalchemy.orm import Session

from user_accounts.application.use_cases.users.results import UseCaseResult
from user_accounts.domain.entities import Role
from user_accounts.domain.errors import StoreUnavailableError
from user_accounts.infrastructure.repositories import RoleRepository


def list_roles(session: Session) -> UseCaseResult[list[Role]]:
    try:
        roles = RoleRepository(session).list()
    except StoreUnavailableError:
        return UseCaseResult.store_unavailable()
    return UseCaseResult.success(roles)


__all__ = ["list_roles"]

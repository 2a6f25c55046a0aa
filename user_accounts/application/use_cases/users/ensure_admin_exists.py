"""Use case that guarantees the bootstrap administrator account exists."""

import logging

from sqlalchemy.orm import Session

from user_accounts.config import get_settings
from user_accounts.domain.entities import RoleName, User
from user_accounts.domain.errors import StoreUnavailableError, UserConflictError
from user_accounts.infrastructure.repositories import UserRepository
from user_accounts.infrastructure.security import get_password_hash

from .results import UseCaseResult
from .validators import normalize_email

logger = logging.getLogger(__name__)


def ensure_admin_exists(session: Session) -> UseCaseResult[bool]:
    """Create the administrator unless it already exists.

    Safe to call on every login request and from several processes at once:
    the primary key on the user id decides the race and the loser treats the
    conflict as success. The result value tells whether this call created it.
    """

    settings = get_settings()
    admin_id = normalize_email(settings.admin_email)
    repository = UserRepository(session)

    try:
        if repository.exists(admin_id):
            return UseCaseResult.success(False)

        repository.create(
            User(
                user_id=admin_id,
                username=settings.admin_username,
                password_hash=get_password_hash(settings.admin_password),
                role=RoleName.ADMIN,
                password_migrated=True,
            )
        )
    except UserConflictError:
        logger.info("Administrator %s was created concurrently", admin_id)
        return UseCaseResult.success(False)
    except StoreUnavailableError:
        return UseCaseResult.store_unavailable()

    logger.info("Bootstrap administrator created: %s", admin_id)
    return UseCaseResult.success(True)

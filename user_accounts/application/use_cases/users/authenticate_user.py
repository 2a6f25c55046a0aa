"""Use case for authenticating a user."""

from dataclasses import dataclass
import logging

from sqlalchemy.orm import Session

from user_accounts.domain.entities import SessionPrincipal, User
from user_accounts.domain.errors import StoreUnavailableError
from user_accounts.infrastructure.repositories import UserRepository
from user_accounts.infrastructure.security import (
    get_password_hash,
    hash_legacy_password,
    needs_rehash,
    verify_dummy_password,
    verify_legacy_password,
    verify_password,
)

from .results import INVALID_CREDENTIALS_MESSAGE, UseCaseResult, UserErrorKind
from .validators import normalize_email

logger = logging.getLogger(__name__)

INACTIVE_ACCOUNT_MESSAGE = "Your account has been deactivated. Please contact support."


@dataclass(frozen=True)
class AuthenticatedUser:
    """Principal for the session plus the stored record it was built from."""

    principal: SessionPrincipal
    user: User


def password_matches(repository: UserRepository, user: User, password: str) -> bool:
    """Check ``password`` against the algorithm that produced the stored hash."""

    if user.password_migrated:
        return verify_password(password, user.password_hash)
    if user.is_active:
        return repository.authenticate(user.user_id, hash_legacy_password(password)) is not None
    # The store never authenticates inactive accounts; compare locally to report the state.
    return verify_legacy_password(password, user.password_hash)


def authenticate_user(session: Session, user_id: str, password: str) -> UseCaseResult[AuthenticatedUser]:
    """Verify the credentials and return the session principal on success.

    Unknown users and wrong passwords produce the same failure and cost
    the same hashing work. Legacy digests are upgraded to the modern
    algorithm once the password is proven; the upgrade only touches the
    password columns and is skipped when the stored hash changed meanwhile.
    """

    normalized_id = normalize_email(user_id)
    repository = UserRepository(session)
    invalid = UseCaseResult.failure(
        UserErrorKind.INVALID_CREDENTIALS, INVALID_CREDENTIALS_MESSAGE
    )
    inactive = UseCaseResult.failure(UserErrorKind.ACCOUNT_INACTIVE, INACTIVE_ACCOUNT_MESSAGE)

    try:
        user = repository.get(normalized_id)
        if user is None:
            verify_dummy_password(password)
            logger.warning("Authentication failed for %s", normalized_id)
            return invalid
        if not password_matches(repository, user, password):
            logger.warning("Authentication failed for %s", normalized_id)
            return invalid

        if not user.is_active:
            logger.warning("Authentication refused for inactive user %s", normalized_id)
            return inactive

        if not user.password_migrated or needs_rehash(user.password_hash):
            upgraded = repository.replace_password_hash(
                user.user_id,
                current_hash=user.password_hash,
                new_hash=get_password_hash(password),
            )
            if upgraded:
                logger.info("Password hash upgraded for %s", normalized_id)
            else:
                logger.info("Password of %s changed during login; upgrade skipped", normalized_id)

            # Another request may have changed the record since it was read.
            user = repository.get(normalized_id)
            if user is None:
                logger.warning("Authentication failed for %s: record disappeared", normalized_id)
                return invalid
            if not user.is_active:
                logger.warning("Authentication refused for inactive user %s", normalized_id)
                return inactive
            if not upgraded and not password_matches(repository, user, password):
                logger.warning("Authentication failed for %s: password changed", normalized_id)
                return invalid

        repository.update_last_login(user.user_id)
    except StoreUnavailableError:
        return UseCaseResult.store_unavailable()

    logger.info("User authenticated: %s", normalized_id)
    return UseCaseResult.success(
        AuthenticatedUser(principal=SessionPrincipal.from_user(user), user=user)
    )

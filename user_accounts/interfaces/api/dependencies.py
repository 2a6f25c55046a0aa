"""FastAPI dependency utilities."""

import logging

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from user_accounts.application.use_cases.users import ensure_admin_exists
from user_accounts.domain.entities import SessionPrincipal, User
from user_accounts.domain.errors import StoreUnavailableError
from user_accounts.infrastructure.database import get_db
from user_accounts.infrastructure.repositories import UserRepository
from user_accounts.infrastructure.security import (
    decode_access_token,
    password_signature,
    principal_from_claims,
)
from user_accounts.interfaces.api.routes_helpers import raise_for_result

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="auth/token")
logger = logging.getLogger(__name__)


def _unauthorized() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Invalid credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )


def resolve_current_user(token: str, db: Session) -> User:
    """Resolve the live user for the provided token."""

    try:
        claims = decode_access_token(token)
        principal = principal_from_claims(claims)
    except ValueError as exc:
        raise _unauthorized() from exc

    signature_claim = claims.get("pwd_sig")
    if not isinstance(signature_claim, str):
        raise _unauthorized()

    try:
        user = UserRepository(db).get(principal.user_id)
    except StoreUnavailableError as exc:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=str(exc),
        ) from exc

    # Deleted users, deactivated users and changed passwords all invalidate the token.
    if user is None or not user.is_active or signature_claim != password_signature(user):
        raise _unauthorized()
    return user


def get_current_user(
    token: str = Depends(oauth2_scheme),
    db: Session = Depends(get_db),
) -> User:
    """Return the authenticated user from the provided token."""

    return resolve_current_user(token, db)


def get_current_principal(current_user: User = Depends(get_current_user)) -> SessionPrincipal:
    """Return the session principal of the authenticated user."""

    return SessionPrincipal.from_user(current_user)


def require_admin(
    principal: SessionPrincipal = Depends(get_current_principal),
) -> SessionPrincipal:
    """Ensure the authenticated user has administrator privileges."""

    if not principal.is_admin():
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Not authorized",
        )
    return principal


def ensure_bootstrap_admin(db: Session = Depends(get_db)) -> None:
    """Seed the administrator before the login flow runs."""

    result = ensure_admin_exists(db)
    if not result.ok:
        logger.error("Could not ensure the bootstrap administrator: %s", result.message)
    raise_for_result(result)

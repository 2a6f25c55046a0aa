"""Endpoints for registration, login and password management."""

import logging
from datetime import timedelta

from fastapi import APIRouter, Depends, Query, Response, status
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.orm import Session

from user_accounts.application.use_cases.users import (
    authenticate_user,
    change_password as change_password_uc,
    is_email_available,
    is_username_available,
    register_user as register_user_uc,
)
from user_accounts.config import get_settings
from user_accounts.domain.entities import SessionPrincipal, User
from user_accounts.infrastructure.database import get_db
from user_accounts.infrastructure.security import create_access_token, password_signature
from user_accounts.interfaces.api.dependencies import (
    ensure_bootstrap_admin,
    get_current_principal,
    get_current_user,
)
from user_accounts.interfaces.api.routes_helpers import raise_for_result
from user_accounts.interfaces.api.schemas import (
    AvailabilityRead,
    ChangePasswordRequest,
    PrincipalRead,
    RegisterRequest,
    Token,
    UserRead,
)

router = APIRouter(prefix="/auth", tags=["auth"])
settings = get_settings()
logger = logging.getLogger(__name__)


@router.post("/register", response_model=UserRead, status_code=status.HTTP_201_CREATED)
def register(payload: RegisterRequest, db: Session = Depends(get_db)):
    """Create a regular account identified by its email address."""

    result = register_user_uc(
        db,
        user_id=payload.email,
        username=payload.username,
        password=payload.password,
        confirm_password=payload.confirm_password,
    )
    raise_for_result(result)
    return UserRead.model_validate(result.value)


@router.get("/availability", response_model=AvailabilityRead)
def check_availability(
    email: str | None = Query(None),
    username: str | None = Query(None),
    db: Session = Depends(get_db),
):
    """Tell whether ``email`` and ``username`` are still free for registration."""

    availability = AvailabilityRead()
    if email is not None:
        result = is_email_available(db, email)
        raise_for_result(result)
        availability.email = email
        availability.email_available = result.value
    if username is not None:
        result = is_username_available(db, username)
        raise_for_result(result)
        availability.username = username
        availability.username_available = result.value
    return availability


# The admin seed runs before the credentials are checked so that the
# bootstrap account can log in on a fresh database.
@router.post("/token", response_model=Token, dependencies=[Depends(ensure_bootstrap_admin)])
def login_for_access_token(
    form_data: OAuth2PasswordRequestForm = Depends(),
    db: Session = Depends(get_db),
):
    """Authenticate by email and password and return a JWT."""

    result = authenticate_user(db, form_data.username, form_data.password)
    raise_for_result(result)

    authenticated = result.value
    access_token = create_access_token(
        authenticated.principal,
        signature=password_signature(authenticated.user),
        expires_delta=timedelta(minutes=settings.access_token_expire_minutes),
    )
    return {
        "access_token": access_token,
        "token_type": "bearer",
        "user_id": authenticated.principal.user_id,
        "username": authenticated.principal.username,
        "role": authenticated.principal.role,
    }


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
def logout(principal: SessionPrincipal = Depends(get_current_principal)) -> Response:
    """End the session; the client discards its token."""

    logger.info("User %s logged out", principal.user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/me", response_model=PrincipalRead)
def read_current_principal(principal: SessionPrincipal = Depends(get_current_principal)):
    return PrincipalRead.model_validate(principal)


@router.post("/change-password", status_code=status.HTTP_204_NO_CONTENT)
def change_password(
    payload: ChangePasswordRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> Response:
    """Replace the password of the authenticated user."""

    result = change_password_uc(
        db,
        user_id=current_user.user_id,
        current_password=payload.current_password,
        new_password=payload.new_password,
        confirm_password=payload.confirm_password,
    )
    raise_for_result(result)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

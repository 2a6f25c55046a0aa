"""Routes for administering user accounts."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.orm import Session

from user_accounts.application.use_cases.users import (
    BulkItemOutcome,
    bulk_delete_users,
    bulk_set_user_active,
    delete_user as delete_user_uc,
    export_users as export_users_uc,
    get_user as get_user_uc,
    list_users as list_users_uc,
    reset_password as reset_password_uc,
    restore_user as restore_user_uc,
    set_user_active,
    update_user as update_user_uc,
    user_statistics,
)
from user_accounts.application.use_cases.users.validators import normalize_email
from user_accounts.domain.entities import RoleName, SessionPrincipal, User
from user_accounts.infrastructure.database import get_db
from user_accounts.interfaces.api.dependencies import get_current_principal, require_admin
from user_accounts.interfaces.api.routes_helpers import raise_for_result
from user_accounts.interfaces.api.schemas import (
    BulkFailureRead,
    BulkOperationRead,
    BulkUserIds,
    PasswordResetRequest,
    UserListRead,
    UserRead,
    UserStatisticsRead,
    UserUpdate,
)

router = APIRouter(prefix="/users", tags=["users"])
logger = logging.getLogger(__name__)


def _to_read_model(user: User) -> UserRead:
    return UserRead.model_validate(user)


@router.get("/", response_model=UserListRead)
def list_users(
    search: str | None = Query(None, description="Matches email or username"),
    is_active: bool | None = None,
    role: RoleName | None = None,
    include_deleted: bool = False,
    sort_by: str = "created_at",
    sort_order: str = "desc",
    page: int = 1,
    page_size: int | None = None,
    db: Session = Depends(get_db),
    principal: SessionPrincipal = Depends(get_current_principal),
):
    """Return a filtered, sorted page of users."""

    if include_deleted and not principal.is_admin():
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Not authorized")

    result = list_users_uc(
        db,
        search_term=search,
        is_active=is_active,
        role=role,
        include_deleted=include_deleted,
        sort_by=sort_by,
        sort_order=sort_order,
        page=page,
        page_size=page_size,
    )
    raise_for_result(result)
    listing = result.value
    return UserListRead(
        items=[_to_read_model(user) for user in listing.items],
        total_count=listing.total_count,
        current_page=listing.current_page,
        page_size=listing.page_size,
        total_pages=listing.total_pages,
    )


@router.get("/statistics", response_model=UserStatisticsRead)
def read_statistics(
    db: Session = Depends(get_db),
    _: SessionPrincipal = Depends(require_admin),
):
    result = user_statistics(db)
    raise_for_result(result)
    return UserStatisticsRead(
        counts=result.value.counts,
        recent_users=[_to_read_model(user) for user in result.value.recent_users],
    )


def _to_bulk_read(outcomes: list[BulkItemOutcome]) -> BulkOperationRead:
    return BulkOperationRead(
        succeeded=[outcome.user_id for outcome in outcomes if outcome.ok],
        failed=[
            BulkFailureRead(
                user_id=outcome.user_id,
                error=outcome.error.name.lower(),
                message=outcome.message,
            )
            for outcome in outcomes
            if not outcome.ok
        ],
    )


@router.get("/export")
def export_users(
    file_format: str = Query("csv", description="csv or xlsx"),
    role: RoleName | None = None,
    is_active: bool | None = None,
    search: str | None = Query(None, description="Matches email or username"),
    db: Session = Depends(get_db),
    principal: SessionPrincipal = Depends(require_admin),
) -> Response:
    """Download the live users matching the filters as CSV or Excel."""

    result = export_users_uc(
        db,
        file_format=file_format,
        role=role,
        is_active=is_active,
        search_term=search,
    )
    raise_for_result(result)
    export = result.value
    logger.info("User %s exported %d users", principal.user_id, export.row_count)
    return Response(
        content=export.content,
        media_type=export.content_type,
        headers={"Content-Disposition": f'attachment; filename="{export.filename}"'},
    )


@router.post("/bulk/activate", response_model=BulkOperationRead)
def bulk_activate(
    payload: BulkUserIds,
    db: Session = Depends(get_db),
    _: SessionPrincipal = Depends(require_admin),
):
    result = bulk_set_user_active(db, payload.user_ids, is_active=True)
    raise_for_result(result)
    return _to_bulk_read(result.value)


@router.post("/bulk/deactivate", response_model=BulkOperationRead)
def bulk_deactivate(
    payload: BulkUserIds,
    db: Session = Depends(get_db),
    _: SessionPrincipal = Depends(require_admin),
):
    result = bulk_set_user_active(db, payload.user_ids, is_active=False)
    raise_for_result(result)
    return _to_bulk_read(result.value)


@router.post("/bulk/delete", response_model=BulkOperationRead)
def bulk_delete(
    payload: BulkUserIds,
    hard: bool = Query(False, description="Remove the rows instead of marking them deleted"),
    db: Session = Depends(get_db),
    principal: SessionPrincipal = Depends(require_admin),
):
    result = bulk_delete_users(db, payload.user_ids, hard=hard)
    raise_for_result(result)
    logger.info(
        "User %s bulk deleted %d users (hard=%s)", principal.user_id, len(payload.user_ids), hard
    )
    return _to_bulk_read(result.value)


@router.get("/{user_id}", response_model=UserRead)
def read_user(
    user_id: str,
    include_deleted: bool = False,
    db: Session = Depends(get_db),
    principal: SessionPrincipal = Depends(get_current_principal),
):
    """Return the user identified by ``user_id``."""

    if include_deleted and not principal.is_admin():
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Not authorized")

    result = get_user_uc(db, user_id, include_deleted=include_deleted)
    raise_for_result(result)
    return _to_read_model(result.value)


@router.put("/{user_id}", response_model=UserRead)
def update_user(
    user_id: str,
    user_in: UserUpdate,
    db: Session = Depends(get_db),
    principal: SessionPrincipal = Depends(get_current_principal),
):
    """Update the profile of a user; only admins may edit other accounts."""

    if not principal.is_admin() and principal.user_id != normalize_email(user_id):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Not authorized")

    result = update_user_uc(db, user_id=user_id, username=user_in.username)
    raise_for_result(result)
    return _to_read_model(result.value)


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_user(
    user_id: str,
    hard: bool = Query(False, description="Remove the row instead of marking it deleted"),
    db: Session = Depends(get_db),
    principal: SessionPrincipal = Depends(require_admin),
) -> Response:
    result = delete_user_uc(db, user_id, hard=hard)
    raise_for_result(result)
    logger.info("User %s deleted %s (hard=%s)", principal.user_id, user_id, hard)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{user_id}/restore", response_model=UserRead)
def restore_user(
    user_id: str,
    db: Session = Depends(get_db),
    _: SessionPrincipal = Depends(require_admin),
):
    result = restore_user_uc(db, user_id)
    raise_for_result(result)
    return _to_read_model(result.value)


@router.post("/{user_id}/activate", response_model=UserRead)
def activate_user(
    user_id: str,
    db: Session = Depends(get_db),
    _: SessionPrincipal = Depends(require_admin),
):
    result = set_user_active(db, user_id, is_active=True)
    raise_for_result(result)
    return _to_read_model(result.value)


@router.post("/{user_id}/deactivate", response_model=UserRead)
def deactivate_user(
    user_id: str,
    db: Session = Depends(get_db),
    _: SessionPrincipal = Depends(require_admin),
):
    result = set_user_active(db, user_id, is_active=False)
    raise_for_result(result)
    return _to_read_model(result.value)


@router.post("/{user_id}/reset-password", response_model=UserRead)
def reset_password(
    user_id: str,
    payload: PasswordResetRequest,
    db: Session = Depends(get_db),
    principal: SessionPrincipal = Depends(require_admin),
):
    """Set a new password for ``user_id`` without knowing the current one."""

    result = reset_password_uc(
        db,
        user_id=user_id,
        new_password=payload.new_password,
        confirm_password=payload.confirm_password,
    )
    raise_for_result(result)
    logger.info("Password of %s reset by %s", user_id, principal.user_id)
    return _to_read_model(result.value)

"""Helper utilities shared across API route handlers."""

from fastapi import HTTPException, status

from user_accounts.application.use_cases.users import UseCaseResult, UserErrorKind

_STATUS_BY_ERROR: dict[UserErrorKind, int] = {
    UserErrorKind.VALIDATION_ERROR: status.HTTP_400_BAD_REQUEST,
    UserErrorKind.ALREADY_EXISTS: status.HTTP_409_CONFLICT,
    UserErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    UserErrorKind.INVALID_CREDENTIALS: status.HTTP_401_UNAUTHORIZED,
    UserErrorKind.ACCOUNT_INACTIVE: status.HTTP_403_FORBIDDEN,
    UserErrorKind.FORBIDDEN: status.HTTP_403_FORBIDDEN,
    UserErrorKind.CONFLICT: status.HTTP_409_CONFLICT,
    UserErrorKind.STORE_UNAVAILABLE: status.HTTP_503_SERVICE_UNAVAILABLE,
}


def raise_for_result(result: UseCaseResult) -> None:
    """Raise the ``HTTPException`` matching a failed use case result."""

    if result.ok:
        return

    headers = None
    if result.error is UserErrorKind.INVALID_CREDENTIALS:
        headers = {"WWW-Authenticate": "Bearer"}
    raise HTTPException(
        status_code=_STATUS_BY_ERROR[result.error],
        detail=result.message,
        headers=headers,
    )

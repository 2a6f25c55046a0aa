from .auth import (
    AvailabilityRead,
    ChangePasswordRequest,
    PasswordResetRequest,
    PrincipalRead,
    RegisterRequest,
    Token,
)
from .user import (
    BulkFailureRead,
    BulkOperationRead,
    BulkUserIds,
    RoleRead,
    UserListRead,
    UserRead,
    UserStatisticsRead,
    UserUpdate,
)

__all__ = [
    "AvailabilityRead",
    "BulkFailureRead",
    "BulkOperationRead",
    "BulkUserIds",
    "ChangePasswordRequest",
    "PasswordResetRequest",
    "PrincipalRead",
    "RegisterRequest",
    "RoleRead",
    "Token",
    "UserListRead",
    "UserRead",
    "UserStatisticsRead",
    "UserUpdate",
]

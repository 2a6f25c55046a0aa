"""Use cases for managing users."""

from .authenticate_user import AuthenticatedUser, authenticate_user
from .bulk_operations import BulkItemOutcome, bulk_delete_users, bulk_set_user_active
from .change_password import change_password
from .check_availability import is_email_available, is_username_available
from .delete_user import delete_user
from .ensure_admin_exists import ensure_admin_exists
from .export_users import export_users
from .get_user import get_user
from .list_users import UserListPage, list_users
from .register_user import register_user
from .reset_password import reset_password
from .restore_user import restore_user
from .results import UseCaseResult, UserErrorKind
from .set_user_active import set_user_active
from .update_user import update_user
from .user_statistics import UserStatistics, user_statistics

__all__ = [
    "AuthenticatedUser",
    "BulkItemOutcome",
    "UseCaseResult",
    "UserErrorKind",
    "UserListPage",
    "UserStatistics",
    "authenticate_user",
    "bulk_delete_users",
    "bulk_set_user_active",
    "change_password",
    "delete_user",
    "ensure_admin_exists",
    "export_users",
    "get_user",
    "is_email_available",
    "is_username_available",
    "list_users",
    "register_user",
    "reset_password",
    "restore_user",
    "set_user_active",
    "update_user",
    "user_statistics",
]

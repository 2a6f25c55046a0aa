"""ORM models used by the application infrastructure."""

from .role import RoleModel
from .user import UserModel

__all__ = ["RoleModel", "UserModel"]

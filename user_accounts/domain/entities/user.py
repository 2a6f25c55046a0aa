"""Domain entity representing a user."""

from dataclasses import dataclass
from datetime import datetime

from .role import RoleName


@dataclass
class User:
    """Core attributes describing an application user."""

    user_id: str
    username: str
    password_hash: str
    role: RoleName
    password_migrated: bool = True
    legacy_password_hash: str | None = None
    is_active: bool = True
    is_deleted: bool = False
    created_at: datetime | None = None
    updated_at: datetime | None = None
    deleted_at: datetime | None = None
    last_login_at: datetime | None = None

    def has_role(self, role: RoleName) -> bool:
        """Return ``True`` when the user holds ``role``."""

        return self.role is role

    def is_admin(self) -> bool:
        """Return ``True`` when the user is an administrator."""

        return self.has_role(RoleName.ADMIN)

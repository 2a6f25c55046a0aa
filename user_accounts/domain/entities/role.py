"""Domain entity representing a user role."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class RoleName(str, Enum):
    """Closed set of roles a user can hold."""

    ADMIN = "Admin"
    USER = "User"

    @classmethod
    def parse(cls, value: str) -> "RoleName":
        """Return the role whose name matches ``value`` ignoring case."""

        for role in cls:
            if role.value.lower() == value.strip().lower():
                return role
        raise ValueError(f"Unknown role: {value}")


SYSTEM_ROLE_DESCRIPTIONS: dict[RoleName, str] = {
    RoleName.ADMIN: "System administrator with full access",
    RoleName.USER: "Standard user with limited access",
}


@dataclass
class Role:
    """Core attributes describing a role that can be assigned to a user."""

    name: RoleName
    description: str | None
    is_system_role: bool
    created_at: datetime | None = None
    updated_at: datetime | None = None


__all__ = ["Role", "RoleName", "SYSTEM_ROLE_DESCRIPTIONS"]

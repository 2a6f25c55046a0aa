"""Domain entities exposed by the application."""

from .principal import SessionPrincipal
from .role import SYSTEM_ROLE_DESCRIPTIONS, Role, RoleName
from .user import User

__all__ = [
    "Role",
    "RoleName",
    "SYSTEM_ROLE_DESCRIPTIONS",
    "SessionPrincipal",
    "User",
]

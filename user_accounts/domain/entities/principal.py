"""Authenticated identity handed to the transport layer."""

from dataclasses import dataclass

from .role import RoleName
from .user import User


@dataclass(frozen=True)
class SessionPrincipal:
    """Minimal identity of an authenticated user."""

    user_id: str
    username: str
    role: RoleName

    @classmethod
    def from_user(cls, user: User) -> "SessionPrincipal":
        return cls(user_id=user.user_id, username=user.username, role=user.role)

    def is_admin(self) -> bool:
        return self.role is RoleName.ADMIN


__all__ = ["SessionPrincipal"]

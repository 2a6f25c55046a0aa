"""Repository implementations for infrastructure layer."""

from .role_repository import RoleRepository
from .user_repository import MAX_PAGE_SIZE, UserRepository

__all__ = ["MAX_PAGE_SIZE", "RoleRepository", "UserRepository"]

"""Use cases for reading roles."""

from .list_roles import list_roles

__all__ = ["list_roles"]

"""Aggregate application use cases."""

from .users import authenticate_user, ensure_admin_exists, register_user

__all__ = [
    "authenticate_user",
    "ensure_admin_exists",
    "register_user",
]

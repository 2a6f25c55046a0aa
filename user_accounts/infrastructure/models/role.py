"""SQLAlchemy model for user roles."""

from sqlalchemy import Boolean, Column, DateTime, String, func

from user_accounts.infrastructure.database import Base


class RoleModel(Base):
    """Database representation of the system roles."""

    __tablename__ = "role"

    role_name = Column(String(50), primary_key=True)
    description = Column(String(200), nullable=True)
    is_system_role = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, nullable=False, server_default=func.now())
    updated_at = Column(DateTime, nullable=False, server_default=func.now())


__all__ = ["RoleModel"]

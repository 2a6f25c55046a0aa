"""SQLAlchemy model for the user table."""

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Index, String, func
from sqlalchemy.sql import expression

from user_accounts.infrastructure.database import Base


class UserModel(Base):
    """Database representation of the system user."""

    __tablename__ = "user"
    __table_args__ = (
        Index("ix_user_is_active_is_deleted", "is_active", "is_deleted"),
        Index("ix_user_created_at", "created_at"),
        Index("ix_user_last_login_at", "last_login_at"),
    )

    user_id = Column(String(128), primary_key=True)
    username = Column(String(100), nullable=False)
    password_hash = Column(String(500), nullable=False)
    legacy_password_hash = Column(String(500), nullable=True)
    password_migrated = Column(
        Boolean,
        nullable=False,
        default=False,
        server_default=expression.false(),
    )
    role = Column(String(50), ForeignKey("role.role_name"), nullable=False, index=True)
    is_active = Column(Boolean, nullable=False, default=True)
    is_deleted = Column(
        Boolean,
        nullable=False,
        default=False,
        server_default=expression.false(),
    )
    created_at = Column(DateTime, nullable=False, server_default=func.now())
    updated_at = Column(DateTime, nullable=False, server_default=func.now())
    deleted_at = Column(DateTime, nullable=True)
    last_login_at = Column(DateTime, nullable=True)


__all__ = ["UserModel"]

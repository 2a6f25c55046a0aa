"""User schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from user_accounts.domain.entities import RoleName


class RoleRead(BaseModel):
    name: RoleName
    description: str | None
    is_system_role: bool

    model_config = ConfigDict(from_attributes=True)


class UserUpdate(BaseModel):
    username: str | None = Field(default=None, min_length=3, max_length=100)

    model_config = ConfigDict(extra="forbid")


class UserRead(BaseModel):
    user_id: str
    username: str
    role: RoleName
    is_active: bool
    is_deleted: bool
    password_migrated: bool
    created_at: datetime | None
    updated_at: datetime | None
    deleted_at: datetime | None
    last_login_at: datetime | None

    model_config = ConfigDict(from_attributes=True)


class UserListRead(BaseModel):
    items: list[UserRead]
    total_count: int
    current_page: int
    page_size: int
    total_pages: int

    model_config = ConfigDict(from_attributes=True)


class UserStatisticsRead(BaseModel):
    counts: dict[str, int]
    recent_users: list[UserRead]

    model_config = ConfigDict(from_attributes=True)


class BulkUserIds(BaseModel):
    user_ids: list[str] = Field(..., min_length=1)


class BulkFailureRead(BaseModel):
    user_id: str
    error: str
    message: str | None


class BulkOperationRead(BaseModel):
    succeeded: list[str]
    failed: list[BulkFailureRead]

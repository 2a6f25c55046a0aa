"""Authentication related schemas."""

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from user_accounts.domain.entities import RoleName


class RegisterRequest(BaseModel):
    email: EmailStr = Field(..., description="Email address used as the account identifier")
    username: str = Field(..., min_length=3, max_length=100)
    password: str = Field(..., min_length=8, max_length=500)
    confirm_password: str


class Token(BaseModel):
    access_token: str
    token_type: str
    user_id: str
    username: str
    role: RoleName


class PrincipalRead(BaseModel):
    user_id: str
    username: str
    role: RoleName

    model_config = ConfigDict(from_attributes=True)


class ChangePasswordRequest(BaseModel):
    current_password: str
    new_password: str = Field(..., min_length=8, max_length=500)
    confirm_password: str


class PasswordResetRequest(BaseModel):
    new_password: str = Field(..., min_length=8, max_length=500)
    confirm_password: str


class AvailabilityRead(BaseModel):
    email: str | None = None
    email_available: bool | None = None
    username: str | None = None
    username_available: bool | None = None

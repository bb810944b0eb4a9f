"""
Shared Pydantic schemas used across the application.
"""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field, EmailStr, field_validator

from shared.config.constants import Limits, MIN_PASSWORD_LENGTH, MAX_PASSWORD_BYTES


# =============================================================================
# Common Types
# =============================================================================

Role = Literal["BUSINESS", "CUSTOMER"]
Provider = Literal["NAVER", "KAKAO"]


def _within_bcrypt_limit(password: str) -> str:
    if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
        raise ValueError(f"password must be at most {MAX_PASSWORD_BYTES} bytes in UTF-8")
    return password


# =============================================================================
# Authentication Schemas
# =============================================================================


class LoginRequest(BaseModel):
    """Login request body."""

    email: EmailStr
    password: str


class IssuedToken(BaseModel):
    """Signed bearer token handed back after a successful login."""

    access_token: str
    token_type: str = "Bearer"
    expires_in: int  # seconds


class LoginResponse(IssuedToken):
    """Login response with the token and the authenticated member."""

    member: "MemberOutput"


# =============================================================================
# Member Schemas
# =============================================================================


class SignupRequest(BaseModel):
    """Local signup request body."""

    email: EmailStr
    password: str = Field(min_length=MIN_PASSWORD_LENGTH)
    name: str = Field(min_length=1, max_length=Limits.MAX_NAME_LENGTH)
    phone_number: str = Field(min_length=1, max_length=Limits.MAX_PHONE_LENGTH)
    # Free text on purpose: parsed into MemberRole by the service
    role: str

    @field_validator("password")
    @classmethod
    def check_password_bytes(cls, v: str) -> str:
        return _within_bcrypt_limit(v)


class UpdateMemberRequest(BaseModel):
    """
    Partial profile update. Omitted (or null) fields are left untouched.
    """

    name: str | None = Field(default=None, min_length=1, max_length=Limits.MAX_NAME_LENGTH)
    phone_number: str | None = Field(default=None, min_length=1, max_length=Limits.MAX_PHONE_LENGTH)
    password: str | None = Field(default=None, min_length=MIN_PASSWORD_LENGTH)

    @field_validator("password")
    @classmethod
    def check_password_bytes(cls, v: str | None) -> str | None:
        if v is None:
            return v
        return _within_bcrypt_limit(v)


class PasswordCheckRequest(BaseModel):
    """Step-up confirmation of the current password."""

    password: str


class MemberOutput(BaseModel):
    """Public view of a member. Never exposes credentials."""

    id: int
    email: str
    name: str
    phone_number: str | None = None
    role: Role
    provider: Provider | None = None
    created_at: datetime | None = None

    class Config:
        from_attributes = True


# =============================================================================
# OAuth Schemas
# =============================================================================


class OAuthUserInfo(BaseModel):
    """Normalized profile returned by an OAuth provider."""

    provider: Provider
    external_id: str = Field(min_length=1)
    email: EmailStr
    name: str = Field(min_length=1)


# =============================================================================
# Product Schemas
# =============================================================================


class ProductInput(BaseModel):
    """Create/replace body for a product."""

    name: str = Field(min_length=1, max_length=Limits.MAX_NAME_LENGTH)
    description: str | None = Field(default=None, max_length=Limits.MAX_DESCRIPTION_LENGTH)
    price: int = Field(ge=Limits.MIN_PRICE, le=Limits.MAX_PRICE)


class ProductOutput(BaseModel):
    """Product as returned by the API."""

    id: int
    member_id: int
    name: str
    description: str | None = None
    price: int
    created_at: datetime | None = None
    updated_at: datetime | None = None

    class Config:
        from_attributes = True


# Update forward references
LoginResponse.model_rebuild()

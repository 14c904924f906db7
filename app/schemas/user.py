"""User-related Pydantic schemas for request/response validation."""

from datetime import datetime
from uuid import UUID

from email_validator import EmailNotValidError, validate_email
from pydantic import Field, field_validator

from .base import BaseSchema


def check_email(v: str) -> str:
    """Validate syntax only and return the address lowercased."""
    v = v.strip()
    try:
        validate_email(v, check_deliverability=False)
    except EmailNotValidError:
        raise ValueError("Please enter a valid email") from None
    return v.lower()


class UserRegisterRequest(BaseSchema):
    """Schema for user registration request."""

    name: str = Field(..., description="Display name")
    email: str = Field(..., description="User's email address")
    password: str = Field(..., description="Plain text password")

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        v = v.strip()
        if len(v) < 2:
            raise ValueError("Name must be at least 2 characters")
        if len(v) > 50:
            raise ValueError("Name must be less than 50 characters")
        return v

    @field_validator("email")
    @classmethod
    def validate_email_address(cls, v: str) -> str:
        return check_email(v)

    @field_validator("password")
    @classmethod
    def validate_password(cls, v: str) -> str:
        if len(v) < 6:
            raise ValueError("Password must be at least 6 characters")
        if len(v) > 100:
            raise ValueError("Password must be less than 100 characters")
        return v


class UserLoginRequest(BaseSchema):
    """Schema for user login request."""

    email: str = Field(..., description="User's email address")
    password: str = Field(..., description="Plain text password")

    @field_validator("email")
    @classmethod
    def validate_email_address(cls, v: str) -> str:
        return check_email(v)

    @field_validator("password")
    @classmethod
    def validate_password(cls, v: str) -> str:
        if not v:
            raise ValueError("Password is required")
        return v


class UserSummary(BaseSchema):
    """Public projection of a user embedded in other payloads."""

    id: UUID
    name: str
    email: str


class UserResponse(UserSummary):
    """Schema for the current user's profile."""

    created_at: datetime


class AuthResponse(BaseSchema):
    """Schema for authentication response."""

    user: UserResponse
    message: str = "Authentication successful"


class LogoutResponse(BaseSchema):
    """Schema for logout response."""

    message: str = "Logout successful"

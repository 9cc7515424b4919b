"""Pydantic v2 request schemas for authentication endpoints."""

from pydantic import BaseModel, EmailStr, Field, field_validator

from app.models.user import Role


class RegisterRequest(BaseModel):
    """Schema for user registration. Role defaults to USER when omitted."""

    email: EmailStr
    name: str = Field(..., min_length=1, max_length=255)
    phone_number: str | None = Field(None, max_length=50)
    password: str = Field(..., min_length=8, max_length=72)
    role: Role | None = None

    @field_validator("password")
    @classmethod
    def password_fits_bcrypt(cls, value: str) -> str:
        # bcrypt rejects inputs longer than 72 bytes, not characters
        if len(value.encode("utf-8")) > 72:
            raise ValueError("password must be at most 72 bytes when UTF-8 encoded")
        return value


class LoginRequest(BaseModel):
    """Schema for email/password login."""

    email: EmailStr
    password: str = Field(..., min_length=1)

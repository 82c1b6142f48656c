import re
from typing import Optional
from pydantic import BaseModel, EmailStr, field_validator

from storefront.core.constants import Limits, Messages, Patterns


def _check_email_length(value):
    """Runs before EmailStr parses the address."""
    if not isinstance(value, str):
        return value
    value = value.strip()
    if not value:
        raise ValueError(Messages.REQUIRED)
    if len(value) > Limits.EMAIL_MAX_LENGTH:
        raise ValueError(f"Email cannot exceed {Limits.EMAIL_MAX_LENGTH} characters")
    return value


def _check_password_length(value: str) -> str:
    if not value:
        raise ValueError(Messages.REQUIRED)
    if len(value) < Limits.PASSWORD_MIN_LENGTH:
        raise ValueError(Messages.INVALID_PASSWORD)
    if len(value.encode("utf-8")) > Limits.PASSWORD_MAX_BYTES:
        raise ValueError(f"Password cannot exceed {Limits.PASSWORD_MAX_BYTES} bytes")
    return value


def _check_person_name(value: str, label: str, max_length: int) -> str:
    value = (value or "").strip()
    if not value:
        raise ValueError(f"{label} is required")
    if len(value) > max_length:
        raise ValueError(f"{label} cannot exceed {max_length} characters")
    if not re.match(Patterns.PERSON_NAME, value):
        raise ValueError(f"{label} may only contain letters and spaces")
    return value


class LoginRequest(BaseModel):
    email: EmailStr
    password: str

    @field_validator("email", mode="before")
    @classmethod
    def check_email_length(cls, v):
        return _check_email_length(v)

    @field_validator("email")
    @classmethod
    def lowercase_email(cls, v: str) -> str:
        return v.lower()

    @field_validator("password")
    @classmethod
    def validate_password(cls, v: str) -> str:
        return _check_password_length(v)


class RegisterRequest(BaseModel):
    email: EmailStr
    password: str
    first_name: str
    last_name: str
    phone_number: Optional[str] = None

    @field_validator("email", mode="before")
    @classmethod
    def check_email_length(cls, v):
        return _check_email_length(v)

    @field_validator("email")
    @classmethod
    def lowercase_email(cls, v: str) -> str:
        return v.lower()

    @field_validator("password")
    @classmethod
    def validate_password(cls, v: str) -> str:
        v = _check_password_length(v)
        if not re.match(Patterns.PASSWORD_STRENGTH, v):
            raise ValueError(Messages.WEAK_PASSWORD)
        return v

    @field_validator("first_name")
    @classmethod
    def validate_first_name(cls, v: str) -> str:
        return _check_person_name(v, "First name", Limits.FIRST_NAME_MAX_LENGTH)

    @field_validator("last_name")
    @classmethod
    def validate_last_name(cls, v: str) -> str:
        return _check_person_name(v, "Last name", Limits.LAST_NAME_MAX_LENGTH)


class UserResponse(BaseModel):
    id: str
    email: str
    first_name: str
    last_name: str
    full_name: str
    phone_number: Optional[str] = None
    role: str
    state: str


class AuthData(BaseModel):
    user: UserResponse
    token: str


class AuthResponse(BaseModel):
    message: str
    data: AuthData


class TokenValidationResponse(BaseModel):
    message: str
    valid: bool

"""
Pydantic models for registration and login.
"""

import re

from pydantic import BaseModel, Field, field_validator


_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


class RegisterRequest(BaseModel):
    name: str = Field(..., min_length=1, examples=["John Doe"])
    email: str = Field(..., examples=["john@example.com"])
    password: str = Field(..., min_length=6, examples=["Password@123"])

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Name is required")
        return v

    @field_validator("email")
    @classmethod
    def email_shape(cls, v: str) -> str:
        # Stored as given: email equality is case-sensitive.
        v = v.strip()
        if not _EMAIL_RE.match(v):
            raise ValueError("Email should be valid")
        return v


class LoginRequest(BaseModel):
    email: str = Field(..., examples=["john@example.com"])
    password: str = Field(..., examples=["Password@123"])

    @field_validator("email")
    @classmethod
    def strip_email(cls, v: str) -> str:
        # Same normalisation as registration.
        return v.strip()


class AuthResponse(BaseModel):
    token: str
    message: str

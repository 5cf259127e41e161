# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261019v1
# ---------------------------------------------------------------------------
"""Pydantic request / response models for the register and login endpoints."""

from typing import Optional

from pydantic import BaseModel, EmailStr, Field, field_validator

from users.entity import Role

_EMAIL_MAX_LENGTH = 60


# -- Requests --------------------------------------------------------------


class RegisterRequest(BaseModel):
    role: Role  # anything but ADMIN / READER is rejected here, before the usecase
    email: EmailStr
    password: str = Field(min_length=6, max_length=20)
    name: str = Field(min_length=3, max_length=60)
    profile_image: str = ""

    @field_validator("email")
    @classmethod
    def _email_fits_column(cls, value: str) -> str:
        if len(value) > _EMAIL_MAX_LENGTH:
            raise ValueError(f"email must be at most {_EMAIL_MAX_LENGTH} characters")
        return value


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(min_length=1)


# -- Responses -------------------------------------------------------------


class TokenResponse(BaseModel):
    access_token: Optional[str] = None
    message: str
    code: int

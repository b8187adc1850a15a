from __future__ import annotations

from pydantic import BaseModel, Field, field_validator
from pydantic.networks import validate_email


def _checked_email(value: str) -> str:
    # EmailStr devolveria o domínio em minúsculo; o e-mail fica como foi enviado
    value = value.strip()
    validate_email(value)
    return value


class LoginPayload(BaseModel):
    email: str
    password: str = Field(..., min_length=1)

    @field_validator("email")
    @classmethod
    def _email_format(cls, value: str) -> str:
        return _checked_email(value)


class SignupPayload(BaseModel):
    email: str
    username: str = Field(..., min_length=1, max_length=80)
    password: str = Field(..., min_length=6)

    @field_validator("email")
    @classmethod
    def _email_format(cls, value: str) -> str:
        return _checked_email(value)


class AuthResponse(BaseModel):
    message: str
    access_token: str
    token_type: str = "bearer"


class MessageResponse(BaseModel):
    message: str

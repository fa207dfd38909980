"""Authentication related schemas."""

from pydantic import EmailStr, Field

from app.domain.entities import ROLE_PARTICIPANT

from .base import APIModel


class Token(APIModel):
    access_token: str
    token_type: str = "bearer"
    role: str


class RegisterRequest(APIModel):
    name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    password: str = Field(..., min_length=1)
    role: str = ROLE_PARTICIPANT


class RegisterResponse(APIModel):
    id: int
    name: str
    email: EmailStr
    role: str
    token: str


class DeleteAccountRequest(APIModel):
    password: str

"""User schemas."""

from datetime import datetime

from pydantic import EmailStr

from .base import APIModel


class UserRead(APIModel):
    id: int
    name: str
    email: EmailStr
    role: str
    created_at: datetime | None = None


class RoleUpdateRequest(APIModel):
    role: str

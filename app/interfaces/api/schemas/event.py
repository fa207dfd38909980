"""Event schemas."""

from __future__ import annotations

from datetime import datetime

from pydantic import Field, field_validator

from .base import APIModel


class EventCreate(APIModel):
    title: str = Field(..., max_length=200)
    description: str
    date: datetime
    category: str = Field(..., max_length=80)
    location: str = Field(default="", max_length=200)
    is_paid: bool = False
    price: float | None = None

    @field_validator("title", "description", "category")
    @classmethod
    def _require_text(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be empty")
        return value.strip()


class EventRead(APIModel):
    id: int
    title: str
    description: str
    location: str
    date: datetime
    category: str
    organizer_id: int
    is_paid: bool
    price: float
    is_approved: bool
    is_cancelled: bool
    cancel_reason: str
    created_at: datetime | None = None
    updated_at: datetime | None = None


class EventCancelRequest(APIModel):
    reason: str = ""


class EventApprovalRequest(APIModel):
    is_approved: bool

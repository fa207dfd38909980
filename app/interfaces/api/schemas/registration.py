"""Registration schemas."""

from datetime import datetime

from .base import APIModel


class RegistrationCreate(APIModel):
    event_id: int


class RegistrationRead(APIModel):
    id: int
    user_id: int
    event_id: int
    check_in: bool
    qr_code: str
    last_scanned_at: datetime | None = None
    created_at: datetime | None = None

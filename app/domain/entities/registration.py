"""Domain entity representing a participant registration."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class Registration:
    """Link between a participant and an event, scanned at the door."""

    id: int | None
    user_id: int
    event_id: int
    qr_code: str
    check_in: bool = False
    last_scanned_at: datetime | None = None
    created_at: datetime | None = None


__all__ = ["Registration"]

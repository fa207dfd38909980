"""Domain entity representing an organized event."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class Event:
    """An event published by an organizer and moderated by administrators."""

    id: int | None
    title: str
    description: str
    date: datetime
    category: str
    organizer_id: int
    location: str = ""
    is_paid: bool = False
    price: float = 0.0
    is_approved: bool = False
    is_cancelled: bool = False
    cancel_reason: str = ""
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def is_open_for_registration(self) -> bool:
        return self.is_approved and not self.is_cancelled


__all__ = ["Event"]

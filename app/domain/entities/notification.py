"""Domain entities describing user notifications and feed pages."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import datetime


@dataclass
class Notification:
    """Information message delivered to a specific user."""

    id: int | None
    recipient_id: int
    title: str
    message: str
    read: bool = False
    link_type: str = ""
    link_id: str = ""
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass(frozen=True)
class NotificationDraft:
    """Content of a notification that has not been persisted yet."""

    recipient_id: int
    title: str
    message: str
    link_type: str = ""
    link_id: str = ""


@dataclass(frozen=True)
class NotificationCreateResult:
    """Outcome of persisting a single :class:`NotificationDraft`."""

    draft: NotificationDraft
    notification: Notification | None = None
    error: Exception | None = None

    @property
    def created(self) -> bool:
        return self.notification is not None


@dataclass
class NotificationPage:
    """One page of a user's notification feed plus pagination metadata."""

    notifications: list[Notification] = field(default_factory=list)
    page: int = 1
    limit: int = 20
    total: int = 0

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total / self.limit) if self.limit else 0

    @property
    def has_more(self) -> bool:
        return (self.page - 1) * self.limit + len(self.notifications) < self.total


__all__ = [
    "Notification",
    "NotificationCreateResult",
    "NotificationDraft",
    "NotificationPage",
]

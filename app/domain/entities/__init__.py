"""Domain entities exposed by the application."""

from .event import Event
from .notification import (
    Notification,
    NotificationCreateResult,
    NotificationDraft,
    NotificationPage,
)
from .registration import Registration
from .user import (
    ROLE_ADMIN,
    ROLE_ORGANIZER,
    ROLE_PARTICIPANT,
    USER_ROLES,
    User,
)

__all__ = [
    "Event",
    "Notification",
    "NotificationCreateResult",
    "NotificationDraft",
    "NotificationPage",
    "Registration",
    "ROLE_ADMIN",
    "ROLE_ORGANIZER",
    "ROLE_PARTICIPANT",
    "USER_ROLES",
    "User",
]

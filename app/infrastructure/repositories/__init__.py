"""Repository implementations for infrastructure layer."""

from .event_repository import EventRepository
from .notification_repository import NotificationRepository, validate_draft
from .registration_repository import RegistrationRepository
from .user_repository import UserRepository

__all__ = [
    "EventRepository",
    "NotificationRepository",
    "RegistrationRepository",
    "UserRepository",
    "validate_draft",
]

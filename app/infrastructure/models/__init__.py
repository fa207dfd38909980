"""ORM models used by the application infrastructure."""

from .event import EventModel
from .notification import NotificationModel
from .registration import RegistrationModel
from .user import UserModel

__all__ = [
    "EventModel",
    "NotificationModel",
    "RegistrationModel",
    "UserModel",
]

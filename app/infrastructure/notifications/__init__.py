"""Realtime notification helpers for the infrastructure layer."""

from .dispatcher import NotificationDispatcher
from .manager import CONNECTED_EVENT, RealtimeConnection, SessionRegistry
from .publisher import (
    NOTIFICATION_EVENT,
    NotificationPublisher,
    build_notification_message,
    serialize_notification,
)

__all__ = [
    "CONNECTED_EVENT",
    "NOTIFICATION_EVENT",
    "NotificationDispatcher",
    "NotificationPublisher",
    "RealtimeConnection",
    "SessionRegistry",
    "build_notification_message",
    "serialize_notification",
]

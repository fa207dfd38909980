"""Utility helpers to push notifications to websocket subscribers."""

from __future__ import annotations

import asyncio
from collections.abc import Iterable
from datetime import datetime
from typing import Any

from anyio import from_thread

from app.domain.entities import Notification

from .manager import SessionRegistry

NOTIFICATION_EVENT = "notification:new"


class NotificationPublisher:
    """Serialize notifications and schedule their delivery."""

    def __init__(self, registry: SessionRegistry) -> None:
        self._registry = registry
        self._pending: set[asyncio.Task] = set()

    def publish(self, notifications: Iterable[Notification]) -> None:
        """Push every notification to the live channel of its recipient."""

        deliveries = [
            (notification.recipient_id, build_notification_message(notification))
            for notification in notifications
        ]
        if not deliveries:
            return

        try:
            asyncio.get_running_loop()
        except RuntimeError:
            # Synchronous route handlers run in an anyio worker thread; queue
            # the delivery on the event loop that owns the websockets.
            from_thread.run_sync(self._schedule, deliveries)
        else:
            self._schedule(deliveries)

    def _schedule(self, deliveries: list[tuple[int, dict[str, Any]]]) -> None:
        loop = asyncio.get_running_loop()
        task = loop.create_task(self._registry.send_to_many(deliveries))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)


def build_notification_message(notification: Notification) -> dict[str, Any]:
    """Return the realtime envelope announcing ``notification``."""

    return {"type": NOTIFICATION_EVENT, "data": serialize_notification(notification)}


def serialize_notification(notification: Notification) -> dict[str, Any]:
    """Return the JSON representation shared by websocket and HTTP clients."""

    return {
        "id": notification.id,
        "user": notification.recipient_id,
        "title": notification.title,
        "message": notification.message,
        "read": notification.read,
        "linkType": notification.link_type,
        "linkId": notification.link_id,
        "createdAt": _isoformat(notification.created_at),
        "updatedAt": _isoformat(notification.updated_at),
    }


def _isoformat(value: datetime | None) -> str | None:
    if value is None:
        return None
    return value.isoformat().replace("+00:00", "Z")


__all__ = [
    "NOTIFICATION_EVENT",
    "NotificationPublisher",
    "build_notification_message",
    "serialize_notification",
]

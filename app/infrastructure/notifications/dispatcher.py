"""Persist notifications and push them to online recipients."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable

from sqlalchemy.orm import Session

from app.domain.entities import Notification, NotificationDraft
from app.infrastructure.database import SessionLocal
from app.infrastructure.repositories import NotificationRepository

from .manager import SessionRegistry
from .publisher import NotificationPublisher

logger = logging.getLogger(__name__)


class NotificationDispatcher:
    """Create notifications for users and announce them in real time.

    Storage always happens first, in a session owned by the dispatcher, so the
    caller's own transaction is never affected. Neither a storage failure nor
    a push failure is raised to the caller: the triggering operation (event
    approval, registration...) must succeed regardless of delivery.
    """

    def __init__(
        self,
        registry: SessionRegistry,
        *,
        session_factory: Callable[[], Session] = SessionLocal,
        publisher: NotificationPublisher | None = None,
    ) -> None:
        self.registry = registry
        self._session_factory = session_factory
        self._publisher = publisher or NotificationPublisher(registry)

    def notify_one(
        self,
        user_id: int,
        title: str,
        message: str,
        link_type: str = "",
        link_id: str = "",
    ) -> Notification | None:
        """Store one notification for ``user_id`` and push it if they are online."""

        draft = NotificationDraft(
            recipient_id=user_id,
            title=title,
            message=message,
            link_type=link_type,
            link_id=link_id,
        )
        try:
            with self._session_factory() as session:
                notification = NotificationRepository(session).create(draft)
        except Exception as exc:
            logger.warning("Notification for user %s was not stored: %s", user_id, exc)
            return None

        self._push([notification])
        return notification

    def notify_many(
        self,
        user_ids: Iterable[int],
        title: str,
        message: str,
        link_type: str = "",
        link_id: str = "",
    ) -> list[Notification]:
        """Store one independent notification per recipient and push them."""

        recipients = _unique_recipients(user_ids)
        if not recipients:
            return []

        drafts = [
            NotificationDraft(
                recipient_id=user_id,
                title=title,
                message=message,
                link_type=link_type,
                link_id=link_id,
            )
            for user_id in recipients
        ]
        try:
            with self._session_factory() as session:
                results = NotificationRepository(session).create_many(drafts)
        except Exception as exc:
            logger.warning(
                "Notifications for %d users were not stored: %s", len(recipients), exc
            )
            return []

        created: list[Notification] = []
        for result in results:
            if result.notification is not None:
                created.append(result.notification)
            else:
                logger.warning(
                    "Notification for user %s was not stored: %s",
                    result.draft.recipient_id,
                    result.error,
                )

        self._push(created)
        return created

    def _push(self, notifications: list[Notification]) -> None:
        if not notifications:
            return
        try:
            self._publisher.publish(notifications)
        except Exception as exc:
            logger.debug("Realtime push of %d notifications skipped: %r", len(notifications), exc)


def _unique_recipients(user_ids: Iterable[int]) -> list[int]:
    seen: set[int] = set()
    recipients: list[int] = []
    for user_id in user_ids:
        if not user_id or user_id in seen:
            continue
        seen.add(user_id)
        recipients.append(user_id)
    return recipients


__all__ = ["NotificationDispatcher"]

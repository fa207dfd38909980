"""Read-side use cases over a user's notification feed."""

from __future__ import annotations

from typing import Any

from sqlalchemy.orm import Session

from app.config import get_settings
from app.domain.entities import Notification, NotificationPage
from app.domain.exceptions import InvalidInputError, NotFoundError
from app.infrastructure.repositories import NotificationRepository

_INVALID_IDS_MESSAGE = "Invalid notification IDs"


def list_notifications(
    session: Session,
    *,
    user_id: int,
    page: int | None = None,
    limit: int | None = None,
    read: bool | None = None,
    link_type: str | None = None,
) -> list[Notification] | NotificationPage:
    """Return the feed of ``user_id`` newest first.

    Without ``page`` and ``limit`` the legacy flat list (capped) is returned.
    As soon as either is given the result is a :class:`NotificationPage`.
    """

    settings = get_settings()
    repository = NotificationRepository(session)

    if page is None and limit is None:
        notifications, _ = repository.query(
            user_id,
            read=read,
            link_type=link_type,
            limit=settings.feed_legacy_limit,
        )
        return notifications

    page = 1 if page is None else page
    limit = settings.feed_default_page_size if limit is None else limit
    if page < 1:
        raise InvalidInputError("page must be a positive integer")
    if limit < 1 or limit > settings.feed_max_page_size:
        raise InvalidInputError(
            f"limit must be between 1 and {settings.feed_max_page_size}"
        )

    notifications, total = repository.query(
        user_id,
        read=read,
        link_type=link_type,
        offset=(page - 1) * limit,
        limit=limit,
    )
    return NotificationPage(
        notifications=notifications, page=page, limit=limit, total=total
    )


def count_unread_notifications(session: Session, *, user_id: int) -> int:
    return NotificationRepository(session).count_unread(user_id)


def mark_notification_read(
    session: Session, *, user_id: int, notification_id: int
) -> Notification:
    """Mark one owned notification as read or raise :class:`NotFoundError`."""

    notification = NotificationRepository(session).mark_read(
        notification_id, user_id=user_id
    )
    if notification is None:
        raise NotFoundError("Notification not found")
    return notification


def mark_all_notifications_read(session: Session, *, user_id: int) -> int:
    return NotificationRepository(session).mark_all_read(user_id)


def delete_notification(session: Session, *, user_id: int, notification_id: int) -> None:
    if not NotificationRepository(session).delete_one(notification_id, user_id=user_id):
        raise NotFoundError("Notification not found")


def delete_selected_notifications(session: Session, *, user_id: int, ids: Any) -> int:
    """Delete the listed notifications owned by ``user_id``.

    Identifiers that do not exist or belong to someone else are ignored.
    """

    notification_ids = parse_notification_ids(ids)
    return NotificationRepository(session).delete_many(notification_ids, user_id=user_id)


def clear_notifications(session: Session, *, user_id: int, read_only: bool = False) -> int:
    return NotificationRepository(session).delete_by_filter(user_id, read_only=read_only)


def acknowledge_notifications(session: Session, *, user_id: int, ids: Any) -> int:
    """Mark the notifications a realtime client acknowledged as read."""

    try:
        notification_ids = parse_notification_ids(ids)
    except InvalidInputError:
        return 0
    return NotificationRepository(session).mark_many_read(notification_ids, user_id=user_id)


def parse_notification_ids(ids: Any) -> list[int]:
    """Return ``ids`` as a list of integers or raise :class:`InvalidInputError`."""

    if not isinstance(ids, list) or not ids:
        raise InvalidInputError(_INVALID_IDS_MESSAGE)

    parsed: list[int] = []
    for value in ids:
        if isinstance(value, bool):
            raise InvalidInputError(_INVALID_IDS_MESSAGE)
        if isinstance(value, int):
            parsed.append(value)
        elif isinstance(value, str) and value.strip().isdigit():
            parsed.append(int(value.strip()))
        else:
            raise InvalidInputError(_INVALID_IDS_MESSAGE)
    return parsed


__all__ = [
    "acknowledge_notifications",
    "clear_notifications",
    "count_unread_notifications",
    "delete_notification",
    "delete_selected_notifications",
    "list_notifications",
    "mark_all_notifications_read",
    "mark_notification_read",
    "parse_notification_ids",
]

"""Tests for the notification dispatcher and publisher."""

from __future__ import annotations

import asyncio

from app.domain.entities import Notification
from app.infrastructure.notifications import (
    NOTIFICATION_EVENT,
    NotificationDispatcher,
    NotificationPublisher,
    SessionRegistry,
    build_notification_message,
    serialize_notification,
)
from app.infrastructure.repositories import NotificationRepository
from app.infrastructure.security import user_id_from_token
from app.utils import utc_now


class RecordingPublisher:
    def __init__(self) -> None:
        self.published: list[list[Notification]] = []

    def publish(self, notifications) -> None:
        self.published.append(list(notifications))


class ExplodingPublisher:
    def publish(self, notifications) -> None:
        raise RuntimeError("no event loop")


class FakeConnection:
    def __init__(self) -> None:
        self.sent: list[dict] = []

    async def send_json(self, data) -> None:
        self.sent.append(data)


def _broken_session_factory():
    raise RuntimeError("database offline")


def _registry() -> SessionRegistry:
    return SessionRegistry(token_decoder=user_id_from_token)


def test_notify_one_persists_then_publishes(db_session, participant):
    publisher = RecordingPublisher()
    dispatcher = NotificationDispatcher(_registry(), publisher=publisher)

    notification = dispatcher.notify_one(
        participant.id, "Role Updated", "Your role changed", "user", str(participant.id)
    )

    assert notification is not None
    assert publisher.published == [[notification]]
    stored, total = NotificationRepository(db_session).query(participant.id)
    assert total == 1
    assert stored[0].id == notification.id


def test_notify_one_swallows_storage_failures():
    publisher = RecordingPublisher()
    dispatcher = NotificationDispatcher(
        _registry(), session_factory=_broken_session_factory, publisher=publisher
    )

    assert dispatcher.notify_one(1, "Title", "Message") is None
    assert publisher.published == []


def test_notify_one_swallows_invalid_drafts(participant):
    dispatcher = NotificationDispatcher(_registry(), publisher=RecordingPublisher())

    assert dispatcher.notify_one(participant.id, "", "Message") is None


def test_notify_many_deduplicates_recipients(db_session, participant, other_participant):
    publisher = RecordingPublisher()
    dispatcher = NotificationDispatcher(_registry(), publisher=publisher)

    created = dispatcher.notify_many(
        [participant.id, other_participant.id, participant.id, None],
        "New Event Published",
        "Something happens",
        "event",
        "1",
    )

    assert sorted(n.recipient_id for n in created) == sorted(
        [participant.id, other_participant.id]
    )
    assert len(publisher.published) == 1
    repository = NotificationRepository(db_session)
    assert repository.count_unread(participant.id) == 1
    assert repository.count_unread(other_participant.id) == 1


def test_notify_many_with_no_recipients_does_nothing():
    publisher = RecordingPublisher()
    dispatcher = NotificationDispatcher(
        _registry(), session_factory=_broken_session_factory, publisher=publisher
    )

    assert dispatcher.notify_many([], "Title", "Message") == []
    assert publisher.published == []


def test_notify_many_swallows_storage_failures():
    dispatcher = NotificationDispatcher(
        _registry(), session_factory=_broken_session_factory, publisher=RecordingPublisher()
    )

    assert dispatcher.notify_many([1, 2], "Title", "Message") == []


def test_push_failures_do_not_reach_the_caller(participant):
    dispatcher = NotificationDispatcher(_registry(), publisher=ExplodingPublisher())

    notification = dispatcher.notify_one(participant.id, "Title", "Message")

    assert notification is not None


def test_default_publisher_outside_the_server_keeps_the_record(db_session, participant):
    dispatcher = NotificationDispatcher(_registry())

    notification = dispatcher.notify_one(participant.id, "Title", "Message")

    assert notification is not None
    assert NotificationRepository(db_session).count_unread(participant.id) == 1


def test_publisher_schedules_delivery_on_the_running_loop():
    registry = _registry()
    connection = FakeConnection()
    registry.bind(4, connection)
    publisher = NotificationPublisher(registry)
    now = utc_now()
    notification = Notification(
        id=10,
        recipient_id=4,
        title="Title",
        message="Message",
        created_at=now,
        updated_at=now,
    )

    async def scenario() -> None:
        publisher.publish([notification])
        for _ in range(5):
            await asyncio.sleep(0)

    asyncio.run(scenario())

    assert connection.sent == [build_notification_message(notification)]


def test_serialize_notification_shape():
    now = utc_now()
    notification = Notification(
        id=1,
        recipient_id=2,
        title="Event Approved",
        message='Your event "Gala" is now approved.',
        link_type="event",
        link_id="9",
        created_at=now,
        updated_at=now,
    )

    message = build_notification_message(notification)
    payload = serialize_notification(notification)

    assert message == {"type": NOTIFICATION_EVENT, "data": payload}
    assert set(payload) == {
        "id",
        "user",
        "title",
        "message",
        "read",
        "linkType",
        "linkId",
        "createdAt",
        "updatedAt",
    }
    assert payload["user"] == 2
    assert payload["read"] is False
    assert payload["createdAt"].endswith("Z")

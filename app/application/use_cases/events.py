"""Use cases for publishing, moderating and withdrawing events."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime

from sqlalchemy.orm import Session

from app.application.use_cases.notifications import (
    notify_event_cancelled,
    notify_event_deleted,
    notify_event_moderated,
    notify_event_submitted,
)
from app.domain.entities import ROLE_ADMIN, ROLE_ORGANIZER, ROLE_PARTICIPANT, Event, User
from app.domain.exceptions import InvalidInputError, NotFoundError, PermissionDeniedError
from app.infrastructure.notifications import NotificationDispatcher
from app.infrastructure.repositories import (
    EventRepository,
    RegistrationRepository,
    UserRepository,
)


def create_event(
    session: Session,
    dispatcher: NotificationDispatcher,
    *,
    organizer: User,
    title: str,
    description: str,
    date: datetime,
    category: str,
    location: str = "",
    is_paid: bool = False,
    price: float | None = None,
) -> Event:
    """Create an event; submissions by organizers are announced to admins."""

    if is_paid:
        if price is None:
            raise InvalidInputError("Price is required when event is paid")
        if price < 0:
            raise InvalidInputError("Price cannot be negative")

    event = EventRepository(session).create(
        Event(
            id=None,
            title=title.strip(),
            description=description.strip(),
            date=date,
            category=category.strip(),
            organizer_id=organizer.id,
            location=(location or "").strip(),
            is_paid=is_paid,
            price=float(price or 0) if is_paid else 0.0,
        )
    )

    if organizer.has_role(ROLE_ORGANIZER):
        notify_event_submitted(
            dispatcher,
            event=event,
            organizer=organizer,
            admin_ids=UserRepository(session).list_ids_by_role(ROLE_ADMIN),
        )
    return event


def get_event(session: Session, event_id: int) -> Event:
    event = EventRepository(session).get(event_id)
    if event is None:
        raise NotFoundError("Event not found")
    return event


def list_published_events(session: Session) -> Sequence[Event]:
    return EventRepository(session).list_approved()


def list_all_events(session: Session) -> Sequence[Event]:
    return EventRepository(session).list_all()


def list_organizer_events(session: Session, *, organizer: User) -> Sequence[Event]:
    return EventRepository(session).list_by_organizer(organizer.id)


def cancel_event(
    session: Session,
    dispatcher: NotificationDispatcher,
    *,
    event_id: int,
    user: User,
    reason: str = "",
) -> Event:
    event = _get_owned_event(session, event_id, user)
    event.is_cancelled = True
    event.cancel_reason = (reason or "").strip()
    event = EventRepository(session).update(event)

    notify_event_cancelled(
        dispatcher,
        event=event,
        participant_ids=RegistrationRepository(session).list_participant_ids(event.id),
    )
    return event


def delete_event(
    session: Session,
    dispatcher: NotificationDispatcher,
    *,
    event_id: int,
    user: User,
) -> None:
    event = _get_owned_event(session, event_id, user)
    registrations = RegistrationRepository(session)

    notify_event_deleted(
        dispatcher,
        event=event,
        participant_ids=registrations.list_participant_ids(event.id),
    )
    registrations.delete_for_events([event.id])
    EventRepository(session).delete_many([event.id])


def set_event_approval(
    session: Session,
    dispatcher: NotificationDispatcher,
    *,
    event_id: int,
    is_approved: bool,
) -> Event:
    """Approve or unlist an event; approvals are broadcast to participants."""

    event = get_event(session, event_id)
    event.is_approved = bool(is_approved)
    event = EventRepository(session).update(event)

    participant_ids: list[int] = []
    if event.is_approved:
        participant_ids = UserRepository(session).list_ids_by_role(ROLE_PARTICIPANT)
    notify_event_moderated(dispatcher, event=event, participant_ids=participant_ids)
    return event


def _get_owned_event(session: Session, event_id: int, user: User) -> Event:
    event = get_event(session, event_id)
    if event.organizer_id != user.id:
        raise PermissionDeniedError("Not allowed")
    return event


__all__ = [
    "cancel_event",
    "create_event",
    "delete_event",
    "get_event",
    "list_all_events",
    "list_organizer_events",
    "list_published_events",
    "set_event_approval",
]

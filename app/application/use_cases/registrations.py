"""Use cases for event registrations and QR check-in."""

from __future__ import annotations

import json
from collections.abc import Sequence
from datetime import datetime, timedelta

from sqlalchemy.orm import Session

from app.application.use_cases.events import get_event
from app.application.use_cases.notifications import (
    notify_checked_in,
    notify_registration_created,
)
from app.config import get_settings
from app.domain.entities import Registration, User
from app.domain.exceptions import (
    InvalidInputError,
    NotFoundError,
    PermissionDeniedError,
    RateLimitedError,
)
from app.infrastructure.notifications import NotificationDispatcher
from app.infrastructure.repositories import RegistrationRepository, UserRepository
from app.utils import utc_now


def register_for_event(
    session: Session,
    dispatcher: NotificationDispatcher,
    *,
    user: User,
    event_id: int,
) -> Registration:
    """Register ``user`` for an approved, running event and issue its QR payload."""

    event = get_event(session, event_id)
    if not event.is_approved:
        raise InvalidInputError("Event not approved")
    if event.is_cancelled:
        raise InvalidInputError("Event cancelled, registration closed")

    repository = RegistrationRepository(session)
    if repository.get_by_user_and_event(user_id=user.id, event_id=event.id):
        raise InvalidInputError("Already registered")

    registration = repository.create(
        Registration(id=None, user_id=user.id, event_id=event.id, qr_code="")
    )
    registration.qr_code = json.dumps(
        {
            "regId": registration.id,
            "eventId": event.id,
            "userId": user.id,
            "name": user.name,
            "email": user.email,
        }
    )
    registration = repository.update(registration)

    notify_registration_created(dispatcher, event=event, participant=user)
    return registration


def list_user_registrations(session: Session, *, user: User) -> Sequence[Registration]:
    return RegistrationRepository(session).list_for_user(user.id)


def list_event_registrations(
    session: Session, *, user: User, event_id: int
) -> Sequence[Registration]:
    event = get_event(session, event_id)
    if event.organizer_id != user.id:
        raise PermissionDeniedError("Not authorized")
    return RegistrationRepository(session).list_for_event(event.id)


def check_in(
    session: Session,
    dispatcher: NotificationDispatcher,
    *,
    user: User,
    registration_id: int,
    now: datetime | None = None,
) -> Registration:
    """Check a participant in by scanning their QR code.

    The same QR cannot be scanned again before the configured cooldown.
    """

    repository = RegistrationRepository(session)
    registration = repository.get(registration_id)
    if registration is None:
        raise NotFoundError("Registration not found")

    event = get_event(session, registration.event_id)
    if event.organizer_id != user.id:
        raise PermissionDeniedError("Not authorized to check in for this event")

    now = now or utc_now()
    cooldown = timedelta(minutes=get_settings().checkin_cooldown_minutes)
    if registration.last_scanned_at and now - registration.last_scanned_at < cooldown:
        raise RateLimitedError("This QR was recently scanned. Try again later.")

    registration.check_in = True
    registration.last_scanned_at = now
    registration = repository.update(registration)

    participant = UserRepository(session).get(registration.user_id)
    if participant is not None:
        notify_checked_in(dispatcher, event=event, participant=participant)
    return registration


__all__ = [
    "check_in",
    "list_event_registrations",
    "list_user_registrations",
    "register_for_event",
]

"""Utility helpers to generate and dispatch domain notifications.

Each helper is the last step of a domain operation. The dispatcher never
raises, so calling these cannot make the surrounding operation fail.
"""

from __future__ import annotations

from collections.abc import Iterable

from app.domain.entities import Event, User
from app.infrastructure.notifications import NotificationDispatcher

LINK_EVENT = "event"
LINK_USER = "user"


def _event_link(event: Event) -> dict[str, str]:
    return {"link_type": LINK_EVENT, "link_id": str(event.id)}


def notify_event_submitted(
    dispatcher: NotificationDispatcher,
    *,
    event: Event,
    organizer: User,
    admin_ids: Iterable[int],
) -> None:
    """Ask every administrator to review an event created by an organizer."""

    dispatcher.notify_many(
        admin_ids,
        "New Event Submitted",
        f'Organizer "{organizer.name}" created "{event.title}". '
        "Approve it from admin panel.",
        **_event_link(event),
    )


def notify_event_moderated(
    dispatcher: NotificationDispatcher,
    *,
    event: Event,
    participant_ids: Iterable[int],
) -> None:
    """Tell the organizer about the moderation outcome and announce approvals."""

    state = "approved" if event.is_approved else "unlisted"
    dispatcher.notify_one(
        event.organizer_id,
        "Event Approved" if event.is_approved else "Event Unlisted",
        f'Your event "{event.title}" is now {state}.',
        **_event_link(event),
    )
    if event.is_approved:
        dispatcher.notify_many(
            participant_ids,
            "New Event Published",
            f'A new event "{event.title}" is now available.',
            **_event_link(event),
        )


def notify_event_cancelled(
    dispatcher: NotificationDispatcher,
    *,
    event: Event,
    participant_ids: Iterable[int],
) -> None:
    dispatcher.notify_many(
        participant_ids,
        "Event Cancelled",
        f'"{event.title}" has been cancelled by the organizer.',
        **_event_link(event),
    )
    dispatcher.notify_one(
        event.organizer_id,
        "Your Event Cancelled",
        f'"{event.title}" is now marked as cancelled.',
        **_event_link(event),
    )


def notify_event_deleted(
    dispatcher: NotificationDispatcher,
    *,
    event: Event,
    participant_ids: Iterable[int],
    organizer_removed: bool = False,
) -> None:
    """Inform registrants (and the organizer, unless their account is gone)."""

    if organizer_removed:
        dispatcher.notify_many(
            participant_ids,
            "Event Deleted",
            f'"{event.title}" was deleted because the organizer account was removed.',
            **_event_link(event),
        )
        return

    dispatcher.notify_many(
        participant_ids,
        "Event Deleted",
        f'"{event.title}" has been deleted by the organizer.',
        **_event_link(event),
    )
    dispatcher.notify_one(
        event.organizer_id,
        "Event Deleted",
        f'Your event "{event.title}" was deleted.',
        **_event_link(event),
    )


def notify_registration_created(
    dispatcher: NotificationDispatcher, *, event: Event, participant: User
) -> None:
    dispatcher.notify_one(
        event.organizer_id,
        "New Registration",
        f'{participant.name} registered for "{event.title}".',
        **_event_link(event),
    )
    dispatcher.notify_one(
        participant.id,
        "Registration Successful",
        f'You have successfully registered for "{event.title}".',
        **_event_link(event),
    )


def notify_checked_in(
    dispatcher: NotificationDispatcher, *, event: Event, participant: User
) -> None:
    dispatcher.notify_one(
        participant.id,
        "Check-In Successful",
        f'You have joined "{event.title}". Welcome!',
        **_event_link(event),
    )
    dispatcher.notify_one(
        event.organizer_id,
        "Participant Checked In",
        f'{participant.name} has checked in for "{event.title}".',
        **_event_link(event),
    )


def notify_role_updated(dispatcher: NotificationDispatcher, *, user: User) -> None:
    dispatcher.notify_one(
        user.id,
        "Role Updated",
        f'Your role is now "{user.role}".',
        link_type=LINK_USER,
        link_id=str(user.id),
    )


def notify_account_deleted(dispatcher: NotificationDispatcher, *, user: User) -> None:
    dispatcher.notify_one(
        user.id,
        "Account Deleted",
        "Your account was removed by the admin.",
        link_type=LINK_USER,
        link_id=str(user.id),
    )


__all__ = [
    "LINK_EVENT",
    "LINK_USER",
    "notify_account_deleted",
    "notify_checked_in",
    "notify_event_cancelled",
    "notify_event_deleted",
    "notify_event_moderated",
    "notify_event_submitted",
    "notify_registration_created",
    "notify_role_updated",
]

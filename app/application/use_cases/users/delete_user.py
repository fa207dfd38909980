"""Use cases for removing a user account and everything it owns."""

from sqlalchemy.orm import Session

from app.application.use_cases.notifications import (
    notify_account_deleted,
    notify_event_deleted,
)
from app.domain.entities import ROLE_ORGANIZER, User
from app.domain.exceptions import InvalidInputError, NotFoundError, PermissionDeniedError
from app.infrastructure.notifications import NotificationDispatcher
from app.infrastructure.repositories import (
    EventRepository,
    NotificationRepository,
    RegistrationRepository,
    UserRepository,
)
from app.infrastructure.security import verify_password


def delete_user(
    session: Session, dispatcher: NotificationDispatcher, *, user_id: int
) -> None:
    """Administrative removal of a non-admin account."""

    user = UserRepository(session).get(user_id)
    if user is None:
        raise NotFoundError("User not found")
    if user.is_admin():
        raise PermissionDeniedError("Cannot delete admin users")

    notify_account_deleted(dispatcher, user=user)
    _purge_account(session, dispatcher, user)


def delete_own_account(
    session: Session, dispatcher: NotificationDispatcher, *, user: User, password: str
) -> None:
    """Remove the caller's own account after confirming the password."""

    if not password or not verify_password(password, user.password):
        raise InvalidInputError("Incorrect password")
    _purge_account(session, dispatcher, user)


def _purge_account(session: Session, dispatcher: NotificationDispatcher, user: User) -> None:
    registrations = RegistrationRepository(session)
    registrations.delete_for_user(user.id)

    if user.has_role(ROLE_ORGANIZER):
        events_repository = EventRepository(session)
        events = events_repository.list_by_organizer(user.id)
        for event in events:
            notify_event_deleted(
                dispatcher,
                event=event,
                participant_ids=registrations.list_participant_ids(event.id),
                organizer_removed=True,
            )
        event_ids = [event.id for event in events]
        registrations.delete_for_events(event_ids)
        events_repository.delete_many(event_ids)

    NotificationRepository(session).delete_for_user(user.id)
    UserRepository(session).delete(user.id)

"""Use case for changing the role of a user."""

from sqlalchemy.orm import Session

from app.application.use_cases.notifications import notify_role_updated
from app.domain.entities import ROLE_ORGANIZER, ROLE_PARTICIPANT, User
from app.domain.exceptions import NotFoundError
from app.infrastructure.notifications import NotificationDispatcher
from app.infrastructure.repositories import UserRepository

from .validators import ensure_valid_role


def update_user_role(
    session: Session,
    dispatcher: NotificationDispatcher,
    *,
    user_id: int,
    role: str,
) -> User:
    """Switch a user between participant and organizer and notify them."""

    role = ensure_valid_role(role, allowed=(ROLE_PARTICIPANT, ROLE_ORGANIZER))
    repository = UserRepository(session)
    if repository.get(user_id) is None:
        raise NotFoundError("User not found")

    user = repository.update_role(user_id, role)
    notify_role_updated(dispatcher, user=user)
    return user

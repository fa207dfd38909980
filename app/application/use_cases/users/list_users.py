"""Use case for listing users."""

from collections.abc import Sequence

from sqlalchemy.orm import Session

from app.domain.entities import User
from app.infrastructure.repositories import UserRepository


def list_users(session: Session) -> Sequence[User]:
    """Return every registered user, newest first."""

    return UserRepository(session).list()

"""Use case for registering users."""

from sqlalchemy.orm import Session

from app.domain.entities import ROLE_PARTICIPANT, User
from app.domain.exceptions import InvalidInputError
from app.infrastructure.repositories import UserRepository
from app.infrastructure.security import get_password_hash

from .validators import ensure_valid_role, normalize_email


def create_user(
    session: Session,
    *,
    name: str,
    email: str,
    password: str,
    role: str = ROLE_PARTICIPANT,
) -> User:
    """Create a new user ensuring unique email addresses."""

    repository = UserRepository(session)

    name = (name or "").strip()
    if not name:
        raise InvalidInputError("Name is required")
    if not password:
        raise InvalidInputError("Password is required")
    email = normalize_email(email)
    role = ensure_valid_role(role)

    if repository.get_by_email(email):
        raise InvalidInputError("User already exists")

    user = User(
        id=None,
        name=name,
        email=email,
        password=get_password_hash(password),
        role=role,
    )
    return repository.create(user)

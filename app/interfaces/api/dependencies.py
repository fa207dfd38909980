"""FastAPI dependency utilities."""

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from app.domain.entities import User
from app.infrastructure.database import get_db
from app.infrastructure.notifications import NotificationDispatcher
from app.infrastructure.repositories import UserRepository
from app.infrastructure.security import user_id_from_token

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="auth/token")

_AUTHENTICATION_FAILED = "Authentication failed"


def _unauthorized() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=_AUTHENTICATION_FAILED,
        headers={"WWW-Authenticate": "Bearer"},
    )


def resolve_current_user(token: str, db: Session) -> User:
    """Resolve the authenticated user for the provided token."""

    try:
        user_id = user_id_from_token(token)
    except ValueError as exc:
        raise _unauthorized() from exc

    user = UserRepository(db).get(user_id)
    if user is None:
        raise _unauthorized()
    return user


def get_current_user(
    token: str = Depends(oauth2_scheme),
    db: Session = Depends(get_db),
) -> User:
    """Return the authenticated user from the provided token."""

    return resolve_current_user(token, db)


def require_organizer(current_user: User = Depends(get_current_user)) -> User:
    """Ensure the authenticated user may publish events."""

    if not current_user.is_organizer():
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Organizer role required",
        )
    return current_user


def require_admin(current_user: User = Depends(get_current_user)) -> User:
    """Ensure the authenticated user has administrator privileges."""

    if not current_user.is_admin():
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin role required",
        )
    return current_user


def get_notification_dispatcher(request: Request) -> NotificationDispatcher:
    """Return the dispatcher wired into the running application."""

    return request.app.state.notification_dispatcher

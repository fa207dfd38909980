"""Administrative endpoints for moderating events and users."""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.application.use_cases.events import list_all_events, set_event_approval
from app.application.use_cases.users import delete_user, list_users, update_user_role
from app.domain.entities import User
from app.domain.exceptions import (
    InvalidInputError,
    NotFoundError,
    PermissionDeniedError,
)
from app.infrastructure.database import get_db
from app.infrastructure.notifications import NotificationDispatcher
from app.interfaces.api.dependencies import get_notification_dispatcher, require_admin
from app.interfaces.api.routes_helpers import to_http_exception
from app.interfaces.api.schemas import (
    EventApprovalRequest,
    EventRead,
    RoleUpdateRequest,
    UserRead,
)

router = APIRouter(prefix="/admin", tags=["admin"])
logger = logging.getLogger(__name__)


@router.put("/events/{event_id}/approve", response_model=EventRead)
def approve_event(
    event_id: int,
    payload: EventApprovalRequest,
    db: Session = Depends(get_db),
    _: User = Depends(require_admin),
    dispatcher: NotificationDispatcher = Depends(get_notification_dispatcher),
):
    """Approve or unlist an event."""

    try:
        event = set_event_approval(
            db, dispatcher, event_id=event_id, is_approved=payload.is_approved
        )
    except NotFoundError as exc:
        raise to_http_exception(exc) from exc
    return EventRead.model_validate(event)


@router.put("/users/{user_id}/role", response_model=UserRead)
def change_role(
    user_id: int,
    payload: RoleUpdateRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
    dispatcher: NotificationDispatcher = Depends(get_notification_dispatcher),
):
    try:
        user = update_user_role(db, dispatcher, user_id=user_id, role=payload.role)
    except (NotFoundError, InvalidInputError) as exc:
        raise to_http_exception(exc) from exc

    logger.info("Admin %s set role of user %s to %s", current_user.id, user.id, user.role)
    return UserRead.model_validate(user)


@router.delete("/users/{user_id}")
def remove_user(
    user_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
    dispatcher: NotificationDispatcher = Depends(get_notification_dispatcher),
):
    """Delete a non-admin account and everything it owns."""

    try:
        delete_user(db, dispatcher, user_id=user_id)
    except (NotFoundError, PermissionDeniedError) as exc:
        raise to_http_exception(exc) from exc

    logger.info("Admin %s deleted user %s", current_user.id, user_id)
    return {"message": "User deleted"}


@router.get("/users", response_model=list[UserRead])
def read_users(
    db: Session = Depends(get_db),
    _: User = Depends(require_admin),
):
    return [UserRead.model_validate(user) for user in list_users(db)]


@router.get("/events", response_model=list[EventRead])
def read_events(
    db: Session = Depends(get_db),
    _: User = Depends(require_admin),
):
    return [EventRead.model_validate(event) for event in list_all_events(db)]

"""Endpoints for event registrations and QR check-in."""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.application.use_cases.registrations import (
    check_in,
    list_event_registrations,
    list_user_registrations,
    register_for_event,
)
from app.domain.entities import Registration, User
from app.domain.exceptions import (
    InvalidInputError,
    NotFoundError,
    PermissionDeniedError,
    RateLimitedError,
)
from app.infrastructure.database import get_db
from app.infrastructure.notifications import NotificationDispatcher
from app.interfaces.api.dependencies import (
    get_current_user,
    get_notification_dispatcher,
    require_organizer,
)
from app.interfaces.api.routes_helpers import to_http_exception
from app.interfaces.api.schemas import RegistrationCreate, RegistrationRead

router = APIRouter(prefix="/registrations", tags=["registrations"])


def _to_read_model(registration: Registration) -> RegistrationRead:
    return RegistrationRead.model_validate(registration)


@router.post("/", response_model=RegistrationRead, status_code=status.HTTP_201_CREATED)
def register(
    payload: RegistrationCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    dispatcher: NotificationDispatcher = Depends(get_notification_dispatcher),
):
    """Register the caller for an approved event."""

    try:
        registration = register_for_event(
            db, dispatcher, user=current_user, event_id=payload.event_id
        )
    except (NotFoundError, InvalidInputError) as exc:
        raise to_http_exception(exc) from exc
    return _to_read_model(registration)


@router.get("/my", response_model=list[RegistrationRead])
def my_registrations(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return [
        _to_read_model(registration)
        for registration in list_user_registrations(db, user=current_user)
    ]


@router.get("/event/{event_id}", response_model=list[RegistrationRead])
def event_registrations(
    event_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_organizer),
):
    try:
        registrations = list_event_registrations(db, user=current_user, event_id=event_id)
    except (NotFoundError, PermissionDeniedError) as exc:
        raise to_http_exception(exc) from exc
    return [_to_read_model(registration) for registration in registrations]


@router.put("/{registration_id}/checkin", response_model=RegistrationRead)
def checkin(
    registration_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_organizer),
    dispatcher: NotificationDispatcher = Depends(get_notification_dispatcher),
):
    """Check a participant in; repeated scans within the cooldown get 429."""

    try:
        registration = check_in(
            db, dispatcher, user=current_user, registration_id=registration_id
        )
    except (NotFoundError, PermissionDeniedError, RateLimitedError) as exc:
        raise to_http_exception(exc) from exc
    return _to_read_model(registration)

"""Endpoints for publishing and managing events."""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.application.use_cases.events import (
    cancel_event,
    create_event,
    delete_event,
    get_event,
    list_organizer_events,
    list_published_events,
)
from app.domain.entities import Event, User
from app.domain.exceptions import (
    InvalidInputError,
    NotFoundError,
    PermissionDeniedError,
)
from app.infrastructure.database import get_db
from app.infrastructure.notifications import NotificationDispatcher
from app.interfaces.api.dependencies import (
    get_current_user,
    get_notification_dispatcher,
    require_organizer,
)
from app.interfaces.api.routes_helpers import to_http_exception
from app.interfaces.api.schemas import EventCancelRequest, EventCreate, EventRead

router = APIRouter(prefix="/events", tags=["events"])


def _to_read_model(event: Event) -> EventRead:
    return EventRead.model_validate(event)


@router.post("/", response_model=EventRead, status_code=status.HTTP_201_CREATED)
def create(
    payload: EventCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_organizer),
    dispatcher: NotificationDispatcher = Depends(get_notification_dispatcher),
):
    """Create an event pending admin approval."""

    try:
        event = create_event(
            db,
            dispatcher,
            organizer=current_user,
            title=payload.title,
            description=payload.description,
            date=payload.date,
            category=payload.category,
            location=payload.location,
            is_paid=payload.is_paid,
            price=payload.price,
        )
    except InvalidInputError as exc:
        raise to_http_exception(exc) from exc
    return _to_read_model(event)


@router.get("/", response_model=list[EventRead])
def list_events(
    db: Session = Depends(get_db),
    _: User = Depends(get_current_user),
):
    """Return approved events ordered by date."""

    return [_to_read_model(event) for event in list_published_events(db)]


@router.get("/organizer", response_model=list[EventRead])
def list_my_events(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_organizer),
):
    return [
        _to_read_model(event)
        for event in list_organizer_events(db, organizer=current_user)
    ]


@router.get("/{event_id}", response_model=EventRead)
def read_event(
    event_id: int,
    db: Session = Depends(get_db),
    _: User = Depends(get_current_user),
):
    try:
        event = get_event(db, event_id)
    except NotFoundError as exc:
        raise to_http_exception(exc) from exc
    return _to_read_model(event)


@router.put("/{event_id}/cancel", response_model=EventRead)
def cancel(
    event_id: int,
    payload: EventCancelRequest | None = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_organizer),
    dispatcher: NotificationDispatcher = Depends(get_notification_dispatcher),
):
    """Mark an owned event as cancelled and notify its registrants."""

    reason = payload.reason if payload else ""
    try:
        event = cancel_event(db, dispatcher, event_id=event_id, user=current_user, reason=reason)
    except (NotFoundError, PermissionDeniedError) as exc:
        raise to_http_exception(exc) from exc
    return _to_read_model(event)


@router.delete("/{event_id}")
def delete(
    event_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_organizer),
    dispatcher: NotificationDispatcher = Depends(get_notification_dispatcher),
):
    try:
        delete_event(db, dispatcher, event_id=event_id, user=current_user)
    except (NotFoundError, PermissionDeniedError) as exc:
        raise to_http_exception(exc) from exc
    return {"message": "Event deleted"}

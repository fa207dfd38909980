"""Endpoints and websocket handler for user notifications."""

from __future__ import annotations

import logging
from typing import Any

from anyio import to_thread
from fastapi import (
    APIRouter,
    Body,
    Depends,
    Query,
    WebSocket,
    WebSocketDisconnect,
)
from sqlalchemy.orm import Session

from app.application.use_cases.notifications import (
    acknowledge_notifications,
    clear_notifications,
    count_unread_notifications,
    delete_notification,
    delete_selected_notifications,
    list_notifications,
    mark_all_notifications_read,
    mark_notification_read,
)
from app.config import get_settings
from app.domain.entities import Notification, NotificationPage, User
from app.domain.exceptions import (
    AuthenticationError,
    InvalidInputError,
    NotFoundError,
    StorageUnavailableError,
)
from app.infrastructure.database import SessionLocal, get_db
from app.infrastructure.notifications import SessionRegistry, serialize_notification
from app.infrastructure.repositories import UserRepository
from app.interfaces.api.dependencies import get_current_user
from app.interfaces.api.routes_helpers import to_http_exception
from app.interfaces.api.schemas import (
    DeleteCountResponse,
    DeleteResponse,
    MarkAllReadResponse,
    NotificationPageRead,
    NotificationPagination,
    NotificationRead,
    UnreadCountRead,
)

router = APIRouter(prefix="/notifications", tags=["notifications"])
settings = get_settings()
logger = logging.getLogger(__name__)

WS_POLICY_VIOLATION = 1008


def _notification_to_schema(notification: Notification) -> NotificationRead:
    return NotificationRead.model_validate(serialize_notification(notification))


def _page_to_schema(page: NotificationPage) -> NotificationPageRead:
    return NotificationPageRead(
        notifications=[_notification_to_schema(n) for n in page.notifications],
        pagination=NotificationPagination(
            page=page.page,
            limit=page.limit,
            total=page.total,
            total_pages=page.total_pages,
            has_more=page.has_more,
        ),
    )


@router.get("/my", response_model=list[NotificationRead] | NotificationPageRead)
def list_my_notifications(
    page: int | None = Query(default=None, ge=1),
    limit: int | None = Query(default=None, ge=1, le=settings.feed_max_page_size),
    read: bool | None = Query(default=None),
    link_type: str | None = Query(default=None, alias="linkType"),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Return the caller's notifications, newest first.

    Without ``page`` and ``limit`` a flat list of the most recent entries is
    returned; with either of them the response carries pagination metadata.
    """

    try:
        result = list_notifications(
            db,
            user_id=current_user.id,
            page=page,
            limit=limit,
            read=read,
            link_type=link_type,
        )
    except InvalidInputError as exc:
        raise to_http_exception(exc) from exc

    if isinstance(result, NotificationPage):
        return _page_to_schema(result)
    return [_notification_to_schema(notification) for notification in result]


@router.get("/unread-count", response_model=UnreadCountRead)
def unread_count(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return UnreadCountRead(count=count_unread_notifications(db, user_id=current_user.id))


@router.put("/read-all", response_model=MarkAllReadResponse)
def mark_all_read(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    modified = mark_all_notifications_read(db, user_id=current_user.id)
    return MarkAllReadResponse(success=True, modified_count=modified)


@router.put("/{notification_id}/read", response_model=NotificationRead)
def mark_read(
    notification_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    try:
        notification = mark_notification_read(
            db, user_id=current_user.id, notification_id=notification_id
        )
    except NotFoundError as exc:
        raise to_http_exception(exc) from exc
    return _notification_to_schema(notification)


@router.post("/delete-multiple", response_model=DeleteCountResponse)
def delete_multiple(
    payload: Any = Body(default=None),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Delete the listed notifications; foreign or unknown ids are ignored."""

    ids = payload.get("ids") if isinstance(payload, dict) else None
    try:
        deleted = delete_selected_notifications(db, user_id=current_user.id, ids=ids)
    except InvalidInputError as exc:
        raise to_http_exception(exc) from exc
    return DeleteCountResponse(success=True, deleted_count=deleted)


@router.delete("/", response_model=DeleteCountResponse)
def clear_all(
    read_only: bool = Query(default=False, alias="readOnly"),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    deleted = clear_notifications(db, user_id=current_user.id, read_only=read_only)
    return DeleteCountResponse(success=True, deleted_count=deleted)


@router.delete("/{notification_id}", response_model=DeleteResponse)
def delete_one(
    notification_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    try:
        delete_notification(db, user_id=current_user.id, notification_id=notification_id)
    except NotFoundError as exc:
        raise to_http_exception(exc) from exc
    return DeleteResponse(success=True)


def _authenticate_websocket(registry: SessionRegistry, websocket: WebSocket) -> int:
    credential = registry.extract_credential(
        websocket.query_params.get("token"),
        websocket.headers.get("authorization"),
    )
    user_id = registry.authenticate(credential)
    with SessionLocal() as session:
        if UserRepository(session).get(user_id) is None:
            raise AuthenticationError()
    return user_id


def _acknowledge(user_id: int, ids: Any) -> int:
    with SessionLocal() as session:
        return acknowledge_notifications(session, user_id=user_id, ids=ids)


@router.websocket("/ws")
async def notifications_websocket(websocket: WebSocket) -> None:
    """Websocket endpoint that streams notifications to the authenticated user."""

    registry: SessionRegistry = websocket.app.state.session_registry

    try:
        user_id = await to_thread.run_sync(_authenticate_websocket, registry, websocket)
    except AuthenticationError as exc:
        logger.warning("Refused notification websocket handshake")
        await websocket.close(code=WS_POLICY_VIOLATION, reason=str(exc))
        return

    await registry.connect(user_id, websocket)
    try:
        while True:
            try:
                message = await websocket.receive_json()
            except WebSocketDisconnect:
                raise
            except ValueError:
                continue

            if not isinstance(message, dict):
                continue

            message_type = message.get("type")
            if message_type == "ping":
                await websocket.send_json({"type": "pong"})
                continue

            if message_type == "ack":
                try:
                    await to_thread.run_sync(_acknowledge, user_id, message.get("ids"))
                except StorageUnavailableError:
                    logger.warning("Could not acknowledge notifications for user %s", user_id)
                continue
    except WebSocketDisconnect:
        registry.disconnect(user_id, websocket)
    except Exception:
        registry.disconnect(user_id, websocket)
        raise

"""Tests for the realtime notification websocket."""

from __future__ import annotations

import asyncio
import threading
import time
from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient
from jose import jwt
from starlette.websockets import WebSocketDisconnect

from app.infrastructure.database import SessionLocal
from app.infrastructure.repositories import NotificationRepository
from app.infrastructure.security import JWT_ALGORITHM, create_user_token

from conftest import auth_headers


def _assert_refused(client: TestClient, url: str, **kwargs) -> None:
    with pytest.raises(WebSocketDisconnect) as exc_info:
        with client.websocket_connect(url, **kwargs) as websocket:
            websocket.receive_json()

    assert exc_info.value.code == 1008
    assert exc_info.value.reason == "Authentication failed"


def test_handshake_without_credential_is_refused(client, app):
    _assert_refused(client, "/notifications/ws")
    assert app.state.session_registry.online_user_ids() == set()


def test_handshake_with_invalid_or_unknown_credential_is_refused(client):
    _assert_refused(client, "/notifications/ws?token=garbage")
    _assert_refused(client, f"/notifications/ws?token={create_user_token(999)}")


def test_handshake_with_expired_token_is_refused(client, participant):
    token = create_user_token(participant.id, expires_delta=timedelta(seconds=-5))

    _assert_refused(client, f"/notifications/ws?token={token}")


def test_handshake_with_token_signed_elsewhere_is_refused(client, participant):
    expire = datetime.now(tz=timezone.utc) + timedelta(minutes=5)
    token = jwt.encode(
        {"sub": str(participant.id), "exp": expire}, "another-secret", algorithm=JWT_ALGORITHM
    )

    _assert_refused(client, f"/notifications/ws?token={token}")
    _assert_refused(
        client, "/notifications/ws", headers={"Authorization": f"Bearer {token}"}
    )


def test_connected_event_and_ping(client, app, participant):
    with client.websocket_connect(
        f"/notifications/ws?token={create_user_token(participant.id)}"
    ) as websocket:
        assert websocket.receive_json() == {"type": "connected", "data": {"ok": True}}
        assert app.state.session_registry.connection_count(participant.id) == 1

        websocket.send_json({"type": "ping"})
        assert websocket.receive_json() == {"type": "pong"}

    assert app.state.session_registry.connection_count(participant.id) == 0


def test_bearer_header_is_accepted(client, participant):
    with client.websocket_connect(
        "/notifications/ws", headers=auth_headers(participant)
    ) as websocket:
        assert websocket.receive_json()["type"] == "connected"


def test_push_matches_persisted_record(client, admin, participant):
    with client.websocket_connect(
        f"/notifications/ws?token={create_user_token(participant.id)}"
    ) as websocket:
        websocket.receive_json()

        response = client.put(
            f"/admin/users/{participant.id}/role",
            json={"role": "organizer"},
            headers=auth_headers(admin),
        )
        assert response.status_code == 200

        message = websocket.receive_json()

    assert message["type"] == "notification:new"
    payload = message["data"]
    assert payload["user"] == participant.id
    assert payload["title"] == "Role Updated"
    assert payload["message"] == 'Your role is now "organizer".'
    assert payload["read"] is False
    assert payload["linkType"] == "user"
    assert payload["linkId"] == str(participant.id)

    with SessionLocal() as session:
        stored, total = NotificationRepository(session).query(participant.id)
    assert total == 1
    assert stored[0].id == payload["id"]
    assert stored[0].created_at == datetime.fromisoformat(
        payload["createdAt"].replace("Z", "+00:00")
    )

    feed = client.get("/notifications/my", headers=auth_headers(participant)).json()
    assert feed[0]["id"] == payload["id"]
    assert feed[0]["title"] == payload["title"]


def test_every_connection_of_a_user_receives_the_push(client, admin, participant):
    url = f"/notifications/ws?token={create_user_token(participant.id)}"
    with client.websocket_connect(url) as first, client.websocket_connect(url) as second:
        first.receive_json()
        second.receive_json()

        client.put(
            f"/admin/users/{participant.id}/role",
            json={"role": "organizer"},
            headers=auth_headers(admin),
        )

        assert first.receive_json()["type"] == "notification:new"
        assert second.receive_json()["type"] == "notification:new"


def test_ack_marks_notifications_read(client, admin, participant):
    headers = auth_headers(participant)
    with client.websocket_connect(
        f"/notifications/ws?token={create_user_token(participant.id)}"
    ) as websocket:
        websocket.receive_json()
        client.put(
            f"/admin/users/{participant.id}/role",
            json={"role": "organizer"},
            headers=auth_headers(admin),
        )
        notification_id = websocket.receive_json()["data"]["id"]

        websocket.send_json({"type": "ack", "ids": [notification_id]})
        websocket.send_json({"type": "ping"})
        assert websocket.receive_json() == {"type": "pong"}

    assert client.get("/notifications/unread-count", headers=headers).json() == {"count": 0}


class SlowConnection:
    """Connection whose sends take a while and signal when they finish."""

    def __init__(self, delay: float) -> None:
        self.delay = delay
        self.delivered = threading.Event()

    async def send_json(self, data) -> None:
        await asyncio.sleep(self.delay)
        self.delivered.set()


def test_slow_connections_do_not_hold_up_the_request(client, app, admin, participant):
    slow = SlowConnection(delay=2.0)
    registry = app.state.session_registry
    registry.bind(participant.id, slow)

    started = time.monotonic()
    response = client.put(
        f"/admin/users/{participant.id}/role",
        json={"role": "organizer"},
        headers=auth_headers(admin),
    )
    elapsed = time.monotonic() - started

    assert response.status_code == 200
    assert elapsed < 1.0
    assert not slow.delivered.is_set()
    assert slow.delivered.wait(timeout=5)
    registry.unbind(participant.id, slow)

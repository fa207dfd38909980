"""Connection registry for notification websockets."""

from __future__ import annotations

import asyncio
import logging
import threading
from collections import defaultdict
from collections.abc import Callable, Iterable
from typing import Any, DefaultDict, Protocol, Set

from app.domain.exceptions import AuthenticationError

logger = logging.getLogger(__name__)

CONNECTED_EVENT = "connected"


class RealtimeConnection(Protocol):
    """Minimal interface of a live client connection (e.g. a ``WebSocket``)."""

    async def send_json(self, data: Any) -> None: ...


class SessionRegistry:
    """Authenticate realtime clients and track their connections per user.

    A user may hold any number of simultaneous connections; all of them form
    that user's channel and all of them receive every push. The mapping is
    shared by every connection handler, so it is only touched under a lock.
    """

    def __init__(
        self,
        *,
        token_decoder: Callable[[str], int],
        send_timeout: float = 5.0,
    ) -> None:
        self._token_decoder = token_decoder
        self._send_timeout = send_timeout
        self._connections: DefaultDict[int, Set[RealtimeConnection]] = defaultdict(set)
        self._lock = threading.Lock()

    # ---------------------------------------------------------- authentication
    @staticmethod
    def extract_credential(
        auth_token: str | None = None, authorization: str | None = None
    ) -> str | None:
        """Return the bearer token from an explicit field or an auth header."""

        if auth_token and auth_token.strip():
            return auth_token.strip()
        if authorization:
            scheme, _, token = authorization.strip().partition(" ")
            if scheme.lower() == "bearer" and token.strip():
                return token.strip()
        return None

    def authenticate(self, credential: str | None) -> int:
        """Return the user id carried by ``credential``.

        Every failure cause surfaces as the same :class:`AuthenticationError`.
        """

        if not credential:
            raise AuthenticationError()
        try:
            user_id = self._token_decoder(credential)
        except Exception as exc:
            raise AuthenticationError() from exc
        if isinstance(user_id, bool) or not isinstance(user_id, int) or user_id <= 0:
            raise AuthenticationError()
        return user_id

    # ----------------------------------------------------------------- binding
    async def connect(self, user_id: int, websocket: Any) -> None:
        """Accept ``websocket``, bind it to ``user_id`` and acknowledge it."""

        await websocket.accept()
        self.bind(user_id, websocket)
        await websocket.send_json({"type": CONNECTED_EVENT, "data": {"ok": True}})

    def bind(self, user_id: int, connection: RealtimeConnection) -> None:
        with self._lock:
            self._connections[user_id].add(connection)
            count = len(self._connections[user_id])
        logger.info("Realtime connection bound for user %s (connections=%s)", user_id, count)

    def unbind(self, user_id: int, connection: RealtimeConnection) -> None:
        """Remove ``connection`` from the channel of ``user_id``."""

        with self._lock:
            connections = self._connections.get(user_id)
            if connections is None or connection not in connections:
                return
            connections.discard(connection)
            if not connections:
                self._connections.pop(user_id, None)
        logger.info("Realtime connection released for user %s", user_id)

    disconnect = unbind

    def connection_count(self, user_id: int) -> int:
        with self._lock:
            return len(self._connections.get(user_id, ()))

    def online_user_ids(self) -> set[int]:
        with self._lock:
            return set(self._connections)

    # ---------------------------------------------------------------- delivery
    async def send_to_user(self, user_id: int, message: dict[str, Any]) -> int:
        """Send ``message`` to every live connection of ``user_id``.

        Returns the number of connections that received it. A user without
        connections is simply offline, which is not an error.
        """

        with self._lock:
            connections = list(self._connections.get(user_id, ()))

        delivered = 0
        for connection in connections:
            try:
                await asyncio.wait_for(
                    connection.send_json(message), timeout=self._send_timeout
                )
            except Exception as exc:
                logger.debug("Dropping realtime connection of user %s: %r", user_id, exc)
                self.unbind(user_id, connection)
            else:
                delivered += 1
        return delivered

    async def send_to_many(
        self, deliveries: Iterable[tuple[int, dict[str, Any]]]
    ) -> int:
        """Deliver each ``(user_id, message)`` pair concurrently."""

        results = await asyncio.gather(
            *(self.send_to_user(user_id, message) for user_id, message in deliveries),
            return_exceptions=True,
        )
        return sum(result for result in results if isinstance(result, int))


__all__ = ["CONNECTED_EVENT", "RealtimeConnection", "SessionRegistry"]

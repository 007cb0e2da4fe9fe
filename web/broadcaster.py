"""Live-update fan-out of debate events to WebSocket observers."""

import asyncio
import logging
from typing import Protocol

from fastapi import WebSocket
from pydantic import BaseModel
from starlette.websockets import WebSocketState

from debate_engine.events import serialize_event

logger = logging.getLogger(__name__)


class ObserverConnection(Protocol):
    """Transport an observer is reached through."""

    @property
    def is_open(self) -> bool: ...

    async def send(self, text: str) -> None: ...


class WebSocketObserver:
    """Adapts a Starlette WebSocket to ObserverConnection."""

    def __init__(self, websocket: WebSocket):
        self.websocket = websocket

    @property
    def is_open(self) -> bool:
        return (
            self.websocket.client_state == WebSocketState.CONNECTED
            and self.websocket.application_state == WebSocketState.CONNECTED
        )

    async def send(self, text: str) -> None:
        await self.websocket.send_text(text)


class DebateBroadcaster:
    """Session id -> subscribed connections.

    Delivery is best effort: no queuing and no replay. A reconnecting observer
    re-fetches state over HTTP and subscribes again.
    """

    def __init__(self):
        self._subscriptions: dict[str, set[ObserverConnection]] = {}
        self._lock = asyncio.Lock()

    async def subscribe(self, session_id: str, connection: ObserverConnection) -> None:
        async with self._lock:
            self._subscriptions.setdefault(session_id, set()).add(connection)
        logger.debug(f"Connection subscribed to session {session_id}")

    async def unsubscribe(self, session_id: str, connection: ObserverConnection) -> None:
        async with self._lock:
            self._discard(session_id, connection)
        logger.debug(f"Connection unsubscribed from session {session_id}")

    async def remove_connection(self, connection: ObserverConnection) -> None:
        """Drop a closed connection from every session it was subscribed to."""
        async with self._lock:
            for session_id in list(self._subscriptions):
                self._discard(session_id, connection)

    async def publish(self, session_id: str, event: BaseModel) -> int:
        """Send an event to every open subscriber of a session.

        Returns:
            Number of connections the event was delivered to.
        """
        async with self._lock:
            connections = list(self._subscriptions.get(session_id, ()))

        if not connections:
            return 0

        payload = serialize_event(event)
        delivered = 0
        dead_connections = []

        for connection in connections:
            if not connection.is_open:
                dead_connections.append(connection)
                continue
            try:
                await connection.send(payload)
                delivered += 1
            except Exception as e:
                logger.debug(f"WebSocket send failed: {e}")
                dead_connections.append(connection)

        if dead_connections:
            async with self._lock:
                for connection in dead_connections:
                    self._discard(session_id, connection)

        return delivered

    async def connection_count(self, session_id: str | None = None) -> int:
        async with self._lock:
            if session_id is not None:
                return len(self._subscriptions.get(session_id, ()))
            return len({c for conns in self._subscriptions.values() for c in conns})

    def _discard(self, session_id: str, connection: ObserverConnection) -> None:
        connections = self._subscriptions.get(session_id)
        if connections is None:
            return
        connections.discard(connection)
        if not connections:
            del self._subscriptions[session_id]

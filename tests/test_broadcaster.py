"""Tests for the live-update broadcaster."""

import asyncio
import json

from debate_engine.events import StatusChangedEvent
from web.broadcaster import DebateBroadcaster


class FakeConnection:
    """In-memory observer transport."""

    def __init__(self, is_open: bool = True, fail: bool = False):
        self.is_open = is_open
        self.fail = fail
        self.sent: list[str] = []

    async def send(self, text: str) -> None:
        if self.fail:
            raise RuntimeError("connection reset")
        self.sent.append(text)


def _event(session_id: str) -> StatusChangedEvent:
    return StatusChangedEvent(session_id=session_id, status="running")


def test_publish_reaches_only_subscribers_of_the_session() -> None:
    broadcaster = DebateBroadcaster()
    first, second, other = FakeConnection(), FakeConnection(), FakeConnection()

    async def scenario() -> int:
        await broadcaster.subscribe("s1", first)
        await broadcaster.subscribe("s1", second)
        await broadcaster.subscribe("s2", other)
        return await broadcaster.publish("s1", _event("s1"))

    delivered = asyncio.run(scenario())

    assert delivered == 2
    assert json.loads(first.sent[0]) == {"type": "status_changed", "session_id": "s1", "status": "running"}
    assert second.sent == first.sent
    assert other.sent == []


def test_unsubscribe_stops_delivery_without_affecting_others() -> None:
    broadcaster = DebateBroadcaster()
    leaving, staying = FakeConnection(), FakeConnection()

    async def scenario() -> None:
        await broadcaster.subscribe("s1", leaving)
        await broadcaster.subscribe("s1", staying)
        await broadcaster.unsubscribe("s1", leaving)
        await broadcaster.publish("s1", _event("s1"))

    asyncio.run(scenario())

    assert leaving.sent == []
    assert len(staying.sent) == 1


def test_closed_and_failing_connections_are_pruned() -> None:
    broadcaster = DebateBroadcaster()
    closed, broken, healthy = FakeConnection(is_open=False), FakeConnection(fail=True), FakeConnection()

    async def scenario() -> tuple[int, int]:
        for connection in (closed, broken, healthy):
            await broadcaster.subscribe("s1", connection)
        delivered = await broadcaster.publish("s1", _event("s1"))
        return delivered, await broadcaster.connection_count("s1")

    delivered, remaining = asyncio.run(scenario())

    assert delivered == 1
    assert remaining == 1
    assert len(healthy.sent) == 1


def test_remove_connection_drops_every_subscription() -> None:
    broadcaster = DebateBroadcaster()
    connection = FakeConnection()

    async def scenario() -> int:
        await broadcaster.subscribe("s1", connection)
        await broadcaster.subscribe("s2", connection)
        await broadcaster.remove_connection(connection)
        await broadcaster.publish("s1", _event("s1"))
        return await broadcaster.connection_count()

    assert asyncio.run(scenario()) == 0
    assert connection.sent == []

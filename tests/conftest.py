"""Shared fixtures: an in-memory WebSocket and a loop drain helper."""

import asyncio
import json

import pytest
from websockets.exceptions import ConnectionClosedError, ConnectionClosedOK
from websockets.protocol import State

_CLOSED = object()
_DROPPED = object()


class FakeWebSocket:
    """In-memory stand-in for a websockets client connection."""

    def __init__(self):
        self.url = None
        self.state = State.OPEN
        self.sent: list[str] = []
        self.close_code = None
        self.close_reason = ""
        self._inbox: asyncio.Queue = asyncio.Queue()

    @property
    def sent_json(self) -> list:
        return [json.loads(frame) for frame in self.sent]

    async def send(self, data):
        if self.state is not State.OPEN:
            raise ConnectionClosedOK(None, None)
        self.sent.append(data)

    def push(self, payload) -> None:
        """Queue one inbound frame (dicts/lists are JSON-encoded)."""
        self._inbox.put_nowait(payload if isinstance(payload, (str, bytes)) else json.dumps(payload))

    def drop(self) -> None:
        """Simulate an abnormal closure."""
        self.state = State.CLOSED
        self.close_code = 1006
        self._inbox.put_nowait(_DROPPED)

    async def close(self, code: int = 1000, reason: str = ""):
        if self.state is State.CLOSED:
            return
        self.state = State.CLOSED
        self.close_code = code
        self.close_reason = reason
        self._inbox.put_nowait(_CLOSED)

    def __aiter__(self):
        return self

    async def __anext__(self):
        item = await self._inbox.get()
        if item is _CLOSED:
            raise StopAsyncIteration
        if item is _DROPPED:
            raise ConnectionClosedError(None, None)
        return item


@pytest.fixture
def fake_ws():
    return FakeWebSocket()


@pytest.fixture
def ws_connect(fake_ws):
    async def _connect(url):
        fake_ws.url = url
        return fake_ws

    return _connect


@pytest.fixture
def drain():
    async def _drain(rounds: int = 5) -> None:
        for _ in range(rounds):
            await asyncio.sleep(0)

    return _drain

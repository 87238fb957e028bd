"""WebSocket and HTTP transports for JSON-RPC frames.

The WebSocket connection is used whenever it is open; every other send
falls back to a single HTTP POST exchange whose reply is fed into the same
inbound path as WebSocket frames.
"""

from __future__ import annotations

import asyncio
from typing import Any, Callable

import httpx
import websockets
from loguru import logger
from websockets.exceptions import ConnectionClosed, ConnectionClosedError
from websockets.protocol import State

from .errors import TransportError
from .events import CloseEvent, ErrorEvent, EventBus, OpenEvent
from .serialization import decode_frame, encode_frame

InboundSink = Callable[[Any], None]

_HTTP_HEADERS = {
    "Accept": "application/json",
    "Content-Type": "application/json",
}


class WebSocketTransport:
    """Persistent connection; inbound frames arrive from a reader task."""

    def __init__(
        self,
        url: str,
        events: EventBus,
        on_message: InboundSink,
        *,
        connect: Callable[..., Any] | None = None,
    ):
        self.url = url
        self._events = events
        self._on_message = on_message
        self._connect = connect or websockets.connect
        self._ws: Any = None
        self._reader: asyncio.Task[None] | None = None

    @property
    def opened(self) -> bool:
        return self._ws is not None and self._ws.state is State.OPEN

    async def open(self) -> None:
        """Connect and wait for the open event.

        A failed connection is emitted as an ``ErrorEvent``; the wait for the
        open event then fails with that error.
        """
        opened = self._events.once(OpenEvent)
        try:
            ws = await self._connect(self.url)
        except (OSError, websockets.InvalidHandshake, websockets.InvalidURI) as exc:
            logger.warning("WebSocket connect to {} failed: {}", self.url, exc)
            error = TransportError(f"websocket connect failed: {self.url}: {exc}")
            error.__cause__ = exc
            self._events.emit(ErrorEvent(error))
        else:
            self._ws = ws
            self._reader = asyncio.ensure_future(self._read_loop(ws))
            logger.debug("WebSocket connected to {}", self.url)
            self._events.emit(OpenEvent())
        await opened

    async def close(self) -> None:
        """Close the connection and wait for the close event."""
        ws = self._ws
        if ws is None:
            return
        closed = self._events.once(CloseEvent, fail_on_error=False)
        await ws.close()
        await closed

    async def send(self, payload: Any) -> None:
        ws = self._ws
        if ws is None:
            raise TransportError("websocket is not connected")
        try:
            await ws.send(encode_frame(payload))
        except ConnectionClosed as exc:
            raise TransportError(f"websocket send failed: {exc}") from exc

    async def _read_loop(self, ws: Any) -> None:
        try:
            async for raw in ws:
                try:
                    message = decode_frame(raw)
                except ValueError as exc:
                    text = raw if isinstance(raw, str) else repr(raw)
                    logger.warning("WebSocket sent invalid JSON: {}", text[:200])
                    self._events.emit(ErrorEvent(TransportError(f"invalid JSON frame: {exc}")))
                    continue
                self._on_message(message)
        except ConnectionClosedError as exc:
            logger.warning("WebSocket connection to {} dropped: {}", self.url, exc)
            self._events.emit(ErrorEvent(TransportError(f"websocket connection dropped: {exc}")))
        finally:
            if self._ws is ws:
                self._ws = None
            logger.debug("WebSocket to {} closed", self.url)
            self._events.emit(CloseEvent(code=ws.close_code, reason=ws.close_reason or ""))


class HttpTransport:
    """One POST per send; the reply body goes back through the inbound path."""

    def __init__(
        self,
        url: str,
        events: EventBus,
        on_message: InboundSink,
        *,
        client: httpx.AsyncClient | None = None,
        timeout: float = 20.0,
    ):
        self.url = url
        self._events = events
        self._on_message = on_message
        self._client = client
        self._timeout = timeout

    async def send(self, payload: Any) -> httpx.Response:
        body = encode_frame(payload)
        try:
            if self._client is not None:
                resp = await self._client.post(self.url, content=body, headers=_HTTP_HEADERS)
            else:
                async with httpx.AsyncClient(timeout=self._timeout) as client:
                    resp = await client.post(self.url, content=body, headers=_HTTP_HEADERS)
        except httpx.RequestError as exc:
            raise TransportError(f"http exchange failed: {self.url}: {exc}") from exc

        try:
            message = resp.json()
        except ValueError as exc:
            text = str(getattr(resp, "text", "") or "")
            logger.warning("HTTP {} reply is not JSON: {}", resp.status_code, text[:200])
            self._events.emit(ErrorEvent(TransportError(f"invalid JSON reply (status {resp.status_code}): {exc}")))
        else:
            self._on_message(message)
        return resp


class TransportLayer:
    """Picks the transport per send: WebSocket when open, HTTP otherwise."""

    def __init__(self, websocket: WebSocketTransport, http: HttpTransport):
        self.websocket = websocket
        self.http = http

    @property
    def opened(self) -> bool:
        return self.websocket.opened

    async def open(self) -> None:
        await self.websocket.open()

    async def close(self) -> None:
        await self.websocket.close()

    async def send(self, payload: Any) -> httpx.Response | None:
        if self.websocket.opened:
            await self.websocket.send(payload)
            return None
        return await self.http.send(payload)

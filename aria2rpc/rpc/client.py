"""Generic JSON-RPC client over WebSocket or HTTP.

Protocol-specific behaviour (method namespaces, credentials, notification
aliases) is supplied through ``ClientHooks`` instead of subclassing.
"""

from __future__ import annotations

import asyncio
import inspect
from dataclasses import dataclass
from typing import Any, Callable, Iterable, Sequence

import httpx
from loguru import logger

from aria2rpc.config.schema import ClientConfig

from .errors import ProtocolError, RpcError, TransportError
from .events import ErrorEvent, EventBus, InputEvent, NotificationEvent, OutputEvent
from .protocol import MessageKind, RpcNotification, RpcRequest, classify
from .registry import CompletionRegistry
from .serialization import decode_params, decode_response, to_wire
from .transport import HttpTransport, TransportLayer, WebSocketTransport

MULTICALL_METHOD = "system.multicall"
LIST_METHODS_METHOD = "system.listMethods"
LIST_NOTIFICATIONS_METHOD = "system.listNotifications"

RequestHandler = Callable[[str, list[Any]], Any]


def _identity(value: Any) -> Any:
    return value


@dataclass(frozen=True, slots=True)
class ClientHooks:
    """Outbound/inbound rewrites applied by the client.

    rewrite_method: outbound method name -> wire method name.
    decorate_params: caller params -> wire params (e.g. credential injection).
    bare_name: wire method/notification name -> name shown to callers.
    """

    rewrite_method: Callable[[str], str] = _identity
    decorate_params: Callable[[list[Any]], list[Any]] = _identity
    bare_name: Callable[[str], str] = _identity


class JsonRpcClient:
    """JSON-RPC client with id correlation, batches and multicalls."""

    def __init__(
        self,
        config: ClientConfig | None = None,
        *,
        hooks: ClientHooks | None = None,
        on_request: RequestHandler | None = None,
        http_client: httpx.AsyncClient | None = None,
        ws_connect: Callable[..., Any] | None = None,
    ):
        self.config = config or ClientConfig()
        self.hooks = hooks or ClientHooks()
        self.on_request = on_request
        self.events = EventBus()
        self._registry = CompletionRegistry()
        self.transport = TransportLayer(
            WebSocketTransport(self.config.url("ws"), self.events, self._on_message, connect=ws_connect),
            HttpTransport(self.config.url("http"), self.events, self._on_message, client=http_client),
        )

    # --- lifecycle ---

    @property
    def opened(self) -> bool:
        return self.transport.opened

    @property
    def pending(self) -> int:
        """Number of requests still waiting for a response."""
        return len(self._registry)

    async def open(self) -> None:
        """Open the WebSocket; later sends use it instead of HTTP."""
        await self.transport.open()

    async def close(self) -> None:
        await self.transport.close()

    async def __aenter__(self) -> "JsonRpcClient":
        await self.open()
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    def on(self, name: str, handler: Callable[[list[Any]], Any]) -> Callable[[], None]:
        """Subscribe to a notification by name."""
        return self.events.on(name, handler)

    # --- outbound ---

    def build_message(self, method: str, params: Sequence[Any] | None = None) -> RpcRequest:
        """Build a request with the next id; raises ``ProtocolError`` for a non-str method."""
        if not isinstance(method, str):
            raise ProtocolError(f"{method!r} is not a string")
        return RpcRequest(id=self._registry.next_id(), method=method, params=list(params or []))

    def _prepare(self, method: str, params: Sequence[Any]) -> tuple[str, list[Any]]:
        if not isinstance(method, str):
            raise ProtocolError(f"{method!r} is not a string")
        return self.hooks.rewrite_method(method), self.hooks.decorate_params(list(params))

    async def call(self, method: str, *params: Any) -> Any:
        """Call ``method`` and wait for its result; raises ``RpcError`` on a server error."""
        wire_method, wire_params = self._prepare(method, params)
        future = await self._call(wire_method, wire_params)
        return await future

    async def notify(self, method: str, *params: Any) -> None:
        """Send a notification; no id is assigned and no response is awaited."""
        wire_method, wire_params = self._prepare(method, params)
        await self._send(RpcNotification(method=wire_method, params=wire_params))

    async def batch(self, calls: Iterable[Sequence[Any]]) -> list[asyncio.Future[Any]]:
        """Send ``[method, *params]`` calls as one array frame.

        Returns one future per call, in submission order; each completes
        independently when its own response arrives.
        """
        requests = []
        for method, *params in calls:
            wire_method, wire_params = self._prepare(method, params)
            requests.append(self.build_message(wire_method, wire_params))
        futures = [self._registry.register(request.id)[1] for request in requests]
        try:
            await self._send(requests)
        except TransportError:
            for request in requests:
                self._registry.discard(request.id)
            raise
        return futures

    async def multicall(self, calls: Iterable[Sequence[Any]]) -> list[Any]:
        """Run ``[method, *params]`` calls server-side as one ``system.multicall`` request.

        One id and one response: the result is the full list of sub-results.
        """
        multi = []
        for method, *params in calls:
            wire_method, wire_params = self._prepare(method, params)
            multi.append({"methodName": wire_method, "params": wire_params})
        future = await self._call(MULTICALL_METHOD, [multi])
        return await future

    async def list_methods(self) -> list[str]:
        methods = await self.call(LIST_METHODS_METHOD)
        return [self.hooks.bare_name(method) for method in methods]

    async def list_notifications(self) -> list[str]:
        events = await self.call(LIST_NOTIFICATIONS_METHOD)
        return [self.hooks.bare_name(event) for event in events]

    async def _call(self, method: str, params: list[Any]) -> asyncio.Future[Any]:
        request = self.build_message(method, params)
        _, future = self._registry.register(request.id)
        try:
            await self._send(request)
        except TransportError:
            self._registry.discard(request.id)
            raise
        return future

    async def _send(self, message: RpcRequest | RpcNotification | list[RpcRequest]) -> httpx.Response | None:
        payload = to_wire(message)
        self.events.emit(OutputEvent(payload))
        logger.debug("RPC send: {}", payload)
        return await self.transport.send(payload)

    # --- inbound ---

    def _on_message(self, message: Any) -> None:
        self.events.emit(InputEvent(message))
        for obj in message if isinstance(message, list) else [message]:
            try:
                self._on_object(obj)
            except Exception as exc:
                logger.opt(exception=True).warning("Failed to dispatch inbound RPC message: {!r}", obj)
                self.events.emit(ErrorEvent(TransportError(f"inbound message failed: {exc}")))

    def _on_object(self, obj: Any) -> None:
        kind = classify(obj)
        if kind is MessageKind.RESPONSE:
            self._on_response(obj)
        elif kind is MessageKind.NOTIFICATION:
            self._on_notification(obj["method"], decode_params(obj.get("params")))
        elif kind is MessageKind.REQUEST:
            self._on_request(obj["method"], decode_params(obj.get("params")))
        else:
            logger.warning("Dropping invalid RPC message: {!r}", obj)
            self.events.emit(ErrorEvent(TransportError(f"invalid RPC message: {obj!r}")))

    def _on_response(self, obj: dict[str, Any]) -> None:
        response = decode_response(obj)
        if response.error is not None:
            self._registry.reject(response.id, RpcError.from_payload(response.error))
        else:
            self._registry.resolve(response.id, response.result)

    def _on_notification(self, method: str, params: list[Any]) -> None:
        self.events.emit(NotificationEvent(name=method, params=params))
        bare = self.hooks.bare_name(method)
        if bare != method:
            self.events.emit(NotificationEvent(name=bare, params=params))

    def _on_request(self, method: str, params: list[Any]) -> None:
        if self.on_request is None:
            logger.debug("No request handler set; discarding inbound request {}", method)
            return
        try:
            result = self.on_request(method, params)
            if inspect.isawaitable(result):
                asyncio.ensure_future(result)
        except Exception:
            logger.opt(exception=True).warning("Request handler failed for {}", method)

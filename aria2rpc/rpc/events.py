"""Typed client events and a small subscription bus."""

from __future__ import annotations

import asyncio
import inspect
from dataclasses import dataclass, field
from typing import Any, Callable, TypeVar

from loguru import logger


@dataclass(frozen=True, slots=True)
class OpenEvent:
    """The persistent connection reached the open state."""


@dataclass(frozen=True, slots=True)
class CloseEvent:
    """The persistent connection reached the closed state."""

    code: int | None = None
    reason: str = ""


@dataclass(frozen=True, slots=True)
class ErrorEvent:
    """Non-fatal transport error (refused, dropped, unparseable frame)."""

    error: BaseException


@dataclass(frozen=True, slots=True)
class OutputEvent:
    """Raw outbound wire data, emitted before it is sent."""

    message: Any


@dataclass(frozen=True, slots=True)
class InputEvent:
    """Raw inbound wire data, emitted before it is classified."""

    message: Any


@dataclass(frozen=True, slots=True)
class NotificationEvent:
    """Server notification, emitted once per name variant."""

    name: str
    params: list[Any] = field(default_factory=list)


ClientEvent = OpenEvent | CloseEvent | ErrorEvent | OutputEvent | InputEvent | NotificationEvent
E = TypeVar("E", OpenEvent, CloseEvent, ErrorEvent, OutputEvent, InputEvent, NotificationEvent)
Handler = Callable[[Any], Any]


@dataclass(slots=True, eq=False)
class _Subscription:
    kind: type
    handler: Handler
    name: str | None = None

    def matches(self, event: ClientEvent) -> bool:
        if not isinstance(event, self.kind):
            return False
        if self.name is not None:
            return isinstance(event, NotificationEvent) and event.name == self.name
        return True


class EventBus:
    """Dispatches client events to subscribers, synchronously and in order."""

    def __init__(self) -> None:
        self._subscriptions: list[_Subscription] = []

    def subscribe(self, kind: type[E], handler: Callable[[E], Any], *, name: str | None = None) -> Callable[[], None]:
        """Register ``handler`` for events of ``kind``; returns an unsubscribe callable.

        ``name`` narrows a ``NotificationEvent`` subscription to one notification.
        """
        subscription = _Subscription(kind=kind, handler=handler, name=name)
        self._subscriptions.append(subscription)

        def unsubscribe() -> None:
            if subscription in self._subscriptions:
                self._subscriptions.remove(subscription)

        return unsubscribe

    def on(self, name: str, handler: Callable[[list[Any]], Any]) -> Callable[[], None]:
        """Subscribe to one notification by name; the handler receives its params."""
        return self.subscribe(NotificationEvent, lambda event: handler(event.params), name=name)

    def emit(self, event: ClientEvent) -> None:
        for subscription in list(self._subscriptions):
            if not subscription.matches(event):
                continue
            try:
                result = subscription.handler(event)
                if inspect.isawaitable(result):
                    asyncio.ensure_future(result)
            except Exception:
                logger.opt(exception=True).warning("Event handler failed for {}", type(event).__name__)

    def once(self, kind: type[E], *, fail_on_error: bool = True) -> "asyncio.Future[E]":
        """Future for the next event of ``kind``, subscribed immediately.

        With ``fail_on_error`` an ``ErrorEvent`` emitted first fails the future
        with the error it carries.
        """
        future: asyncio.Future[Any] = asyncio.get_running_loop().create_future()

        def on_event(event: Any) -> None:
            if not future.done():
                future.set_result(event)

        def on_error(event: ErrorEvent) -> None:
            if not future.done():
                future.set_exception(event.error)

        unsubscribers = [self.subscribe(kind, on_event)]
        if fail_on_error and kind is not ErrorEvent:
            unsubscribers.append(self.subscribe(ErrorEvent, on_error))

        def cleanup(_: asyncio.Future[Any]) -> None:
            for unsubscribe in unsubscribers:
                unsubscribe()

        future.add_done_callback(cleanup)
        return future

    async def wait_for(self, kind: type[E], *, fail_on_error: bool = True) -> E:
        return await self.once(kind, fail_on_error=fail_on_error)

import pytest

from aria2rpc.rpc.errors import TransportError
from aria2rpc.rpc.events import CloseEvent, ErrorEvent, EventBus, NotificationEvent, OpenEvent


def test_subscribe_dispatches_by_kind_and_unsubscribes() -> None:
    bus = EventBus()
    seen = []
    unsubscribe = bus.subscribe(OpenEvent, seen.append)

    bus.emit(OpenEvent())
    bus.emit(CloseEvent(code=1000))
    unsubscribe()
    bus.emit(OpenEvent())

    assert seen == [OpenEvent()]


def test_notification_name_filter() -> None:
    bus = EventBus()
    starts = []
    everything = []
    bus.on("onDownloadStart", starts.append)
    bus.subscribe(NotificationEvent, everything.append)

    bus.emit(NotificationEvent("onDownloadStart", [{"gid": "1"}]))
    bus.emit(NotificationEvent("onDownloadStop", [{"gid": "2"}]))

    assert starts == [[{"gid": "1"}]]
    assert [event.name for event in everything] == ["onDownloadStart", "onDownloadStop"]


def test_failing_handler_does_not_stop_dispatch() -> None:
    bus = EventBus()
    seen = []

    def boom(event):
        raise RuntimeError("handler bug")

    bus.subscribe(OpenEvent, boom)
    bus.subscribe(OpenEvent, seen.append)
    bus.emit(OpenEvent())
    assert seen == [OpenEvent()]


@pytest.mark.asyncio
async def test_once_resolves_with_event() -> None:
    bus = EventBus()
    waiter = bus.once(CloseEvent)
    bus.emit(CloseEvent(code=1000, reason="bye"))
    event = await waiter
    assert event.reason == "bye"


@pytest.mark.asyncio
async def test_once_fails_on_error_event_unless_disabled() -> None:
    bus = EventBus()
    failing = bus.once(OpenEvent)
    tolerant = bus.once(CloseEvent, fail_on_error=False)

    bus.emit(ErrorEvent(TransportError("refused")))
    with pytest.raises(TransportError, match="refused"):
        await failing
    assert not tolerant.done()

    bus.emit(CloseEvent())
    assert await tolerant == CloseEvent()


@pytest.mark.asyncio
async def test_async_handlers_are_scheduled(drain) -> None:
    bus = EventBus()
    seen = []

    async def handler(event):
        seen.append(event)

    bus.subscribe(OpenEvent, handler)
    bus.emit(OpenEvent())
    await drain()
    assert seen == [OpenEvent()]

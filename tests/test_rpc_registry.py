import pytest

from aria2rpc.rpc.errors import RpcError
from aria2rpc.rpc.registry import CompletionRegistry


@pytest.mark.asyncio
async def test_register_allocates_strictly_increasing_ids() -> None:
    registry = CompletionRegistry()
    ids = [registry.register()[0] for _ in range(5)]
    assert ids == [0, 1, 2, 3, 4]
    assert len(registry) == 5


@pytest.mark.asyncio
async def test_resolve_completes_once_and_removes_entry() -> None:
    registry = CompletionRegistry()
    identifier, future = registry.register()

    assert registry.resolve(identifier, "ok") is True
    assert await future == "ok"
    assert identifier not in registry
    # duplicate delivery is ignored
    assert registry.resolve(identifier, "again") is False
    assert registry.reject(identifier, RpcError(1, "late")) is False


@pytest.mark.asyncio
async def test_reject_fails_only_the_matching_future() -> None:
    registry = CompletionRegistry()
    first_id, first = registry.register()
    second_id, second = registry.register()

    registry.reject(second_id, RpcError(1, "bad"))

    with pytest.raises(RpcError) as exc_info:
        await second
    assert exc_info.value.code == 1
    assert not first.done()
    assert first_id in registry


@pytest.mark.asyncio
async def test_unknown_ids_are_silent_noops() -> None:
    registry = CompletionRegistry()
    _, future = registry.register()
    assert registry.resolve(999, "x") is False
    assert registry.reject("nope", RpcError(1, "x")) is False
    assert not future.done()


@pytest.mark.asyncio
async def test_out_of_order_resolution() -> None:
    registry = CompletionRegistry()
    entries = [registry.register() for _ in range(4)]
    for identifier, _ in reversed(entries):
        registry.resolve(identifier, identifier * 10)
    assert [await future for _, future in entries] == [0, 10, 20, 30]
    assert len(registry) == 0


@pytest.mark.asyncio
async def test_discard_drops_entry_without_completing() -> None:
    registry = CompletionRegistry()
    identifier, future = registry.register()
    registry.discard(identifier)
    assert identifier not in registry
    assert not future.done()
    # next id is still fresh
    assert registry.register()[0] == identifier + 1

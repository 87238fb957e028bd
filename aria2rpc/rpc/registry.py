"""Pending-call registry: one future per outstanding request id."""

from __future__ import annotations

import asyncio
import itertools
from typing import Any

from loguru import logger


class CompletionRegistry:
    """Allocates request ids and completes their futures exactly once.

    Unknown or already-completed ids are ignored, so duplicate or stale
    responses cannot disturb other calls. Entries are only removed by
    completion; a call that never gets a response stays pending.
    """

    def __init__(self) -> None:
        self._ids = itertools.count()
        self._pending: dict[int, asyncio.Future[Any]] = {}

    def __len__(self) -> int:
        return len(self._pending)

    def __contains__(self, identifier: object) -> bool:
        return identifier in self._pending

    def next_id(self) -> int:
        return next(self._ids)

    def register(self, identifier: int | None = None) -> tuple[int, asyncio.Future[Any]]:
        """Create a pending entry, allocating the next id unless one is given."""
        if identifier is None:
            identifier = self.next_id()
        future: asyncio.Future[Any] = asyncio.get_running_loop().create_future()
        self._pending[identifier] = future
        return identifier, future

    def discard(self, identifier: Any) -> None:
        """Drop an entry whose request never made it onto the wire."""
        self._pending.pop(identifier, None)

    def resolve(self, identifier: Any, result: Any) -> bool:
        future = self._pending.pop(identifier, None)
        if future is None or future.done():
            logger.debug("Ignoring result for unknown request id {}", identifier)
            return False
        future.set_result(result)
        return True

    def reject(self, identifier: Any, error: BaseException) -> bool:
        future = self._pending.pop(identifier, None)
        if future is None or future.done():
            logger.debug("Ignoring error for unknown request id {}", identifier)
            return False
        future.set_exception(error)
        return True

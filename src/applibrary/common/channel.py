"""Single-slot async channel that keeps only the newest value."""

from __future__ import annotations

import asyncio


class ChannelClosedError(RuntimeError):
    """Raised when sending to a channel that has been closed."""


class LatestValueChannel[T]:
    """Conflating channel between one producer and one consumer.

    ``send`` never blocks: a value that has not been received yet is replaced by
    the newer one. After ``fail`` the receiver drains the pending value (if any)
    and then gets the error. After ``close`` iteration stops once the pending
    value has been delivered. All methods must be called on the event loop thread.
    """

    __slots__ = ("_closed", "_error", "_has_value", "_ready", "_value")

    def __init__(self) -> None:
        self._value: T | None = None
        self._has_value = False
        self._error: BaseException | None = None
        self._closed = False
        self._ready = asyncio.Event()

    @property
    def closed(self) -> bool:
        return self._closed

    def send(self, value: T) -> None:
        if self._closed:
            raise ChannelClosedError("Cannot send on a closed channel")
        self._value = value
        self._has_value = True
        self._ready.set()

    def fail(self, error: BaseException) -> None:
        if self._closed:
            return
        self._error = error
        self._closed = True
        self._ready.set()

    def close(self) -> None:
        self._closed = True
        self._ready.set()

    async def receive(self) -> T:
        """Wait for the next value; raise ``StopAsyncIteration`` once closed and drained."""

        while not (self._has_value or self._closed):
            self._ready.clear()
            await self._ready.wait()
        if self._has_value:
            value = self._value
            self._value = None
            self._has_value = False
            return value  # type: ignore[return-value]
        if self._error is not None:
            raise self._error
        raise StopAsyncIteration

    def __aiter__(self) -> LatestValueChannel[T]:
        return self

    async def __anext__(self) -> T:
        return await self.receive()

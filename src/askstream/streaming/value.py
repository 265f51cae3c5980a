"""
Single-writer, multi-reader streaming values.

A StreamableValue bridges an incremental producer (model generation) and
passive consumers (renderers). The producer owns the write end:

    pending -> update()/append() ... -> done() -> closed
                                     \\-> error() -> errored

Consumers call subscribe() to get an independent async cursor. Each cursor
starts from the CURRENT state (no replay of intermediate updates), always
yields the latest write, and ends after exactly one terminal observation.
Detaching a cursor never affects the writer.

Example:
    answer = StreamableValue[str]()

    async def render():
        async for text in answer.subscribe():
            print(text)

    answer.append("Hel")
    answer.append("lo")
    answer.done()
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, AsyncIterator, Generic, Literal, TypeVar, cast

logger = logging.getLogger(__name__)

T = TypeVar("T")

StreamStatus = Literal["pending", "streaming", "closed", "errored"]

_UNSET: Any = object()


class InvalidStateError(RuntimeError):
    """Raised when writing to a streaming value that already reached a terminal state."""

    pass


def _wake(waiter: asyncio.Future[None]) -> None:
    if not waiter.done():
        waiter.set_result(None)


class StreamableValue(Generic[T]):
    """
    Incremental container for one value with a terminal "done" state.

    Writes are synchronous and never block. Reads suspend only inside
    subscribe() while waiting for the next write.
    """

    def __init__(self, initial: T = _UNSET):
        self._value: Any = initial
        self._status: StreamStatus = "pending" if initial is _UNSET else "streaming"
        # Bumped on every write; cursors compare against the last version they saw
        self._version = 0 if initial is _UNSET else 1
        self._error: BaseException | None = None
        self._waiters: set[asyncio.Future[None]] = set()

    @classmethod
    def resolved(cls, value: T) -> "StreamableValue[T]":
        """Create a value that is already done (used when replaying a log)."""
        stream: StreamableValue[T] = cls()
        stream.done(value)
        return stream

    @property
    def status(self) -> StreamStatus:
        return self._status

    @property
    def is_done(self) -> bool:
        """True once done() or error() has been called."""
        return self._status in ("closed", "errored")

    @property
    def has_value(self) -> bool:
        return self._value is not _UNSET

    @property
    def value(self) -> T | None:
        """Latest written value, or None while pending."""
        return None if self._value is _UNSET else self._value

    # --- Write end ---

    def update(self, value: T) -> None:
        """Replace the current value with a newer partial value."""
        self._ensure_open("update")
        self._write(value, "streaming")

    def append(self, delta: str) -> None:
        """Append a text delta to a string value."""
        self._ensure_open("append")
        current = "" if self._value is _UNSET else self._value
        if not isinstance(current, str) or not isinstance(delta, str):
            raise TypeError(
                f"append() requires string values, got {type(current).__name__} "
                f"and {type(delta).__name__}"
            )
        self._write(current + delta, "streaming")

    def done(self, value: T = _UNSET) -> None:
        """
        Close the value.

        Without an argument the latest written value becomes final
        (None if nothing was ever written).
        """
        self._ensure_open("done")
        if value is _UNSET:
            value = None if self._value is _UNSET else self._value
        self._write(value, "closed")

    def error(self, exc: BaseException) -> None:
        """Close the value with an error; subscribers raise it."""
        self._ensure_open("error")
        self._error = exc
        self._status = "errored"
        self._version += 1
        self._notify()

    # --- Read end ---

    def subscribe(self) -> AsyncIterator[T]:
        """
        Return a fresh cursor over this value.

        The cursor yields the current value (if any) immediately, then each
        newer value as it is written, and stops after the final value.
        """
        return self._iterate()

    def __aiter__(self) -> AsyncIterator[T]:
        return self.subscribe()

    async def wait(self) -> T:
        """Wait for the final value."""
        final: Any = None
        async for final in self.subscribe():
            pass
        return final

    # --- Internals ---

    def _ensure_open(self, operation: str) -> None:
        if self.is_done:
            raise InvalidStateError(
                f".{operation}(): value stream is already {self._status}"
            )

    def _write(self, value: Any, status: StreamStatus) -> None:
        self._value = value
        self._status = status
        self._version += 1
        self._notify()

    def _notify(self) -> None:
        for waiter in list(self._waiters):
            if waiter.done():
                continue
            # Readers may live on another loop/thread than the writer
            waiter.get_loop().call_soon_threadsafe(_wake, waiter)

    async def _iterate(self) -> AsyncIterator[T]:
        seen = 0
        while True:
            if self._version > seen:
                seen = self._version
                if self._status == "errored":
                    raise cast(BaseException, self._error)
                # Snapshot: writes may land while the reader is suspended at yield
                status, value = self._status, self._value
                yield value
                if status == "closed":
                    return
                continue

            waiter: asyncio.Future[None] = asyncio.get_running_loop().create_future()
            self._waiters.add(waiter)
            try:
                # Re-check after registering so a write from another thread is not missed
                if self._version == seen:
                    await waiter
            finally:
                self._waiters.discard(waiter)

    def __repr__(self) -> str:
        if self._value is _UNSET:
            return f"StreamableValue(status={self._status!r})"
        return f"StreamableValue(status={self._status!r}, value={self._value!r})"

"""Tests for StreamableValue."""

import asyncio
import threading

import pytest

from askstream.streaming import InvalidStateError, StreamableValue


async def collect(stream: StreamableValue) -> list:
    return [value async for value in stream.subscribe()]


class TestLifecycle:
    """Tests for the pending -> streaming -> closed state machine."""

    def test_new_value_is_pending(self):
        stream = StreamableValue()

        assert stream.status == "pending"
        assert stream.has_value is False
        assert stream.value is None
        assert stream.is_done is False

    def test_initial_value_starts_streaming(self):
        stream = StreamableValue(True)

        assert stream.status == "streaming"
        assert stream.value is True

    def test_update_replaces_value(self):
        stream = StreamableValue()
        stream.update("a")
        stream.update("ab")

        assert stream.value == "ab"
        assert stream.status == "streaming"

    def test_done_closes_value(self):
        stream = StreamableValue()
        stream.done("final")

        assert stream.status == "closed"
        assert stream.is_done is True
        assert stream.value == "final"

    def test_done_without_argument_keeps_latest(self):
        stream = StreamableValue()
        stream.update([1, 2])
        stream.done()

        assert stream.value == [1, 2]

    def test_done_on_pending_without_argument_is_none(self):
        stream = StreamableValue()
        stream.done()

        assert stream.is_done is True
        assert stream.value is None

    def test_resolved_is_already_done(self):
        stream = StreamableValue.resolved("hello")

        assert stream.status == "closed"
        assert stream.value == "hello"


class TestAppend:
    """Tests for incremental text generation."""

    def test_append_concatenates(self):
        stream = StreamableValue()
        stream.append("Hel")
        stream.append("lo")

        assert stream.value == "Hello"

    def test_append_to_non_string_raises(self):
        stream = StreamableValue([1])

        with pytest.raises(TypeError):
            stream.append("x")


class TestTerminality:
    """Writes after done() fail with InvalidStateError."""

    @pytest.mark.parametrize("write", ["update", "append", "done"])
    def test_write_after_done_raises(self, write):
        stream = StreamableValue()
        stream.done("final")

        with pytest.raises(InvalidStateError):
            getattr(stream, write)("more")

        assert stream.value == "final"

    def test_error_after_done_raises(self):
        stream = StreamableValue.resolved(1)

        with pytest.raises(InvalidStateError):
            stream.error(ValueError("late"))

    def test_write_after_error_raises(self):
        stream = StreamableValue()
        stream.error(ValueError("boom"))

        assert stream.status == "errored"
        with pytest.raises(InvalidStateError):
            stream.done("x")

    def test_invalid_state_error_is_runtime_error(self):
        assert issubclass(InvalidStateError, RuntimeError)


class TestSubscribe:
    """Tests for subscriber cursors."""

    async def test_subscriber_after_done_sees_final_only(self):
        stream = StreamableValue()
        stream.update("partial")
        stream.update("partial 2")
        stream.done("final")

        assert await collect(stream) == ["final"]

    async def test_subscriber_sees_live_updates_and_final(self):
        stream = StreamableValue()
        seen: list = []

        async def reader():
            async for value in stream.subscribe():
                seen.append(value)

        task = asyncio.create_task(reader())
        await asyncio.sleep(0)

        stream.update(1)
        await asyncio.sleep(0)
        await asyncio.sleep(0)
        stream.update(2)
        await asyncio.sleep(0)
        await asyncio.sleep(0)
        stream.done(3)

        await asyncio.wait_for(task, timeout=1)
        assert seen[-1] == 3
        assert seen == sorted(seen)
        assert seen.count(3) == 1

    async def test_subscriber_starts_from_current_value(self):
        stream = StreamableValue()
        stream.update("a")
        stream.update("ab")

        cursor = stream.subscribe()
        first = await cursor.__anext__()

        assert first == "ab"
        stream.done("abc")
        assert await cursor.__anext__() == "abc"
        with pytest.raises(StopAsyncIteration):
            await cursor.__anext__()

    async def test_slow_subscriber_still_sees_final_value(self):
        """done() while the reader is busy with a partial value must not drop the final value."""
        stream = StreamableValue[str]()
        seen = []

        async def render():
            async for text in stream.subscribe():
                seen.append(text)
                await asyncio.sleep(0.01)

        task = asyncio.create_task(render())
        await asyncio.sleep(0)
        stream.append("Hel")
        while not seen:
            await asyncio.sleep(0)
        # Reader is now inside its own sleep, holding "Hel"
        stream.done("Hello")

        await asyncio.wait_for(task, timeout=1)
        assert seen == ["Hel", "Hello"]

    async def test_error_while_reader_is_suspended(self):
        stream = StreamableValue[str]()
        cursor = stream.subscribe()
        stream.update("partial")

        assert await cursor.__anext__() == "partial"
        stream.error(ValueError("boom"))
        with pytest.raises(ValueError, match="boom"):
            await cursor.__anext__()

    async def test_each_subscribe_is_independent(self):
        stream = StreamableValue.resolved("x")

        assert await collect(stream) == ["x"]
        assert await collect(stream) == ["x"]

    async def test_many_subscribers_all_terminate(self):
        stream = StreamableValue()
        readers = [asyncio.create_task(collect(stream)) for _ in range(3)]
        await asyncio.sleep(0)

        stream.done("end")

        results = await asyncio.wait_for(asyncio.gather(*readers), timeout=1)
        assert results == [["end"], ["end"], ["end"]]

    async def test_cancelled_reader_leaves_writer_unaffected(self):
        stream = StreamableValue()
        reader = asyncio.create_task(collect(stream))
        await asyncio.sleep(0)

        reader.cancel()
        with pytest.raises(asyncio.CancelledError):
            await reader

        stream.update("still writable")
        stream.done("done")
        assert stream.value == "done"
        assert stream._waiters == set()

    async def test_error_raises_in_subscriber(self):
        stream = StreamableValue()
        reader = asyncio.create_task(collect(stream))
        await asyncio.sleep(0)

        stream.error(ValueError("generation failed"))

        with pytest.raises(ValueError, match="generation failed"):
            await asyncio.wait_for(reader, timeout=1)

    async def test_async_for_on_value_subscribes(self):
        stream = StreamableValue.resolved(42)

        assert [v async for v in stream] == [42]

    async def test_wait_returns_final_value(self):
        stream = StreamableValue()

        async def writer():
            await asyncio.sleep(0)
            stream.append("he")
            await asyncio.sleep(0)
            stream.append("llo")
            stream.done()

        asyncio.create_task(writer())

        assert await asyncio.wait_for(stream.wait(), timeout=1) == "hello"

    async def test_writer_on_other_thread_wakes_reader(self):
        stream = StreamableValue()
        reader = asyncio.create_task(stream.wait())
        await asyncio.sleep(0)

        thread = threading.Thread(target=stream.done, args=("from thread",))
        thread.start()
        thread.join()

        assert await asyncio.wait_for(reader, timeout=1) == "from thread"

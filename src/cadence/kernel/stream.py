"""Stream - a push-based sequence of zero or more values."""

from __future__ import annotations

import logging
from collections import deque
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from cadence.errors import require_count, require_positive_count
from cadence.kernel.handles import STOPPED, Running, Scheduled, discard, stop_all
from cadence.kernel.ports import Continuation, RunningStream, ScheduledTask, Sink
from cadence.kernel.task import Task
from cadence.kernel.trace import Trace

logger = logging.getLogger(__name__)

T = TypeVar("T")
U = TypeVar("U")
A = TypeVar("A")

Producer = Callable[[Sink[T]], RunningStream]


class Absent:
    """Marks the inactive slot of a merged pair."""

    _instance: Absent | None = None

    def __new__(cls) -> Absent:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "ABSENT"

    def __bool__(self) -> bool:
        return False


ABSENT = Absent()


@dataclass(frozen=True)
class Stream(Generic[T]):
    """A reusable description of a push sequence.

    Each call to start() drives its own producer and returns an independent
    RunningStream. There is no completion signal: a stream ends when it
    stops pushing or when it is stopped. Stateful operators keep their
    buffers and counters per start(), never on the description.
    """

    _start: Producer[T]

    def start(self, sink: Sink[T] = discard) -> RunningStream:
        """Activate the producer and push each emission to sink.

        Args:
            sink: Callback receiving every emission (default: discard)

        Returns:
            RunningStream whose stop() detaches the producer. Emissions
            arriving after stop() are dropped.
        """
        stopped = False

        def forward(value: T) -> None:
            if not stopped:
                sink(value)

        running = self._start(forward)

        def stop() -> None:
            nonlocal stopped
            if stopped:
                return
            stopped = True
            running.stop()

        return Running(stop)

    # Stateless transforms

    def map(self, func: Callable[[T], U]) -> Stream[U]:
        def new_start(sink: Sink[U]) -> RunningStream:
            return self.start(lambda value: sink(func(value)))

        return Stream(new_start)

    def filter(self, predicate: Callable[[T], bool]) -> Stream[T]:
        def new_start(sink: Sink[T]) -> RunningStream:
            def on_value(value: T) -> None:
                if predicate(value):
                    sink(value)

            return self.start(on_value)

        return Stream(new_start)

    def flat_map(self, func: Callable[[T], Stream[U]]) -> Stream[U]:
        """Start func(value) for every emission and interleave their output.

        Stopping the result stops the outer producer and every inner
        stream started so far.
        """
        def new_start(sink: Sink[U]) -> RunningStream:
            inner: list[RunningStream] = []
            stopped = False

            def on_value(value: T) -> None:
                running = func(value).start(sink)
                if stopped:
                    # The inner stream stopped us while it was still starting.
                    running.stop()
                    return
                inner.append(running)

            outer = self.start(on_value)

            def stop() -> None:
                nonlocal stopped
                stopped = True
                outer.stop()
                stop_all(inner)

            return Running(stop)

        return Stream(new_start)

    # Stateful transforms

    def take(self, n: int) -> Stream[T]:
        """Forward the first n emissions, then stop the upstream producer."""
        count = require_count("take", n)

        def new_start(sink: Sink[T]) -> RunningStream:
            remaining = count
            upstream: RunningStream | None = None

            def on_value(value: T) -> None:
                nonlocal remaining
                if remaining <= 0:
                    return
                remaining -= 1
                if remaining == 0:
                    logger.debug("take(%d) exhausted, stopping upstream", count)
                    if upstream is not None:
                        upstream.stop()
                sink(value)

            upstream = self.start(on_value)
            if remaining == 0:
                # Exhausted while start() was still running, or take(0).
                upstream.stop()
            return upstream

        return Stream(new_start)

    def drop(self, n: int) -> Stream[T]:
        """Suppress the first n emissions and forward the rest."""
        count = require_count("drop", n)

        def new_start(sink: Sink[T]) -> RunningStream:
            remaining = count

            def on_value(value: T) -> None:
                nonlocal remaining
                if remaining > 0:
                    remaining -= 1
                    return
                sink(value)

            return self.start(on_value)

        return Stream(new_start)

    def skip(self, n: int) -> Stream[T]:
        """Alias of drop()."""
        return self.drop(n)

    def shift(self, n: int) -> Stream[T]:
        """Delay by n emissions through a FIFO window of depth n."""
        depth = require_count("shift", n)

        def new_start(sink: Sink[T]) -> RunningStream:
            window: deque[T] = deque()

            def on_value(value: T) -> None:
                window.append(value)
                if len(window) > depth:
                    sink(window.popleft())

            return self.start(on_value)

        return Stream(new_start)

    def chunk(self, n: int) -> Stream[tuple[T, ...]]:
        """Group emissions into tuples of n.

        A trailing partial chunk is never emitted.
        """
        size = require_positive_count("chunk", n)

        def new_start(sink: Sink[tuple[T, ...]]) -> RunningStream:
            buffer: list[T] = []

            def on_value(value: T) -> None:
                buffer.append(value)
                if len(buffer) == size:
                    chunk = tuple(buffer)
                    buffer.clear()
                    sink(chunk)

            return self.start(on_value)

        return Stream(new_start)

    def scan(self, reducer: Callable[[T, A], A], seed: A) -> Stream[A]:
        """Emit the running accumulator, reducer(value, accumulator), per emission."""
        def new_start(sink: Sink[A]) -> RunningStream:
            accumulator = seed

            def on_value(value: T) -> None:
                nonlocal accumulator
                accumulator = reducer(value, accumulator)
                sink(accumulator)

            return self.start(on_value)

        return Stream(new_start)

    def zip(self, other: Stream[U]) -> Stream[tuple[T, U]]:
        """Pair the n-th emission of this stream with the n-th of other.

        Unmatched emissions queue up per side (FIFO) until their partner
        arrives; nothing is dropped.
        """
        def new_start(sink: Sink[tuple[T, U]]) -> RunningStream:
            left: deque[T] = deque()
            right: deque[U] = deque()

            def drain() -> None:
                while left and right:
                    sink((left.popleft(), right.popleft()))

            def on_left(value: T) -> None:
                left.append(value)
                drain()

            def on_right(value: U) -> None:
                right.append(value)
                drain()

            running = [self.start(on_left), other.start(on_right)]
            return Running(lambda: stop_all(running))

        return Stream(new_start)

    def merge(self, other: Stream[U]) -> Stream[tuple[T | Absent, U | Absent]]:
        """Interleave both streams in arrival order.

        Emissions from this stream arrive as (value, ABSENT), emissions from
        other as (ABSENT, value), so the origin survives None payloads.
        """
        def new_start(sink: Sink[tuple[T | Absent, U | Absent]]) -> RunningStream:
            running = [
                self.start(lambda value: sink((value, ABSENT))),
                other.start(lambda value: sink((ABSENT, value))),
            ]
            return Running(lambda: stop_all(running))

        return Stream(new_start)

    def through(self, pipe: Callable[[Stream[T]], Any]) -> Any:
        """Apply a reusable transformation to this Stream."""
        return pipe(self)

    def first(self) -> Task[T]:
        """The first emission as a Task; the stream is stopped once it arrives."""
        def new_run(then: Continuation[T]) -> ScheduledTask:
            produced = False
            running: RunningStream | None = None

            def on_value(value: T) -> None:
                nonlocal produced
                if produced:
                    return
                produced = True
                if running is not None:
                    running.stop()
                then(value)

            running = self.start(on_value)
            if produced:
                running.stop()

            def cancel() -> bool:
                running.stop()
                return not produced

            return Scheduled(cancel)

        return Task(new_run)

    def traced(self, trace: Trace, label: str) -> Stream[T]:
        """Record start/emit/stop events of every run in trace."""
        def new_start(sink: Sink[T]) -> RunningStream:
            start_id = trace.record("stream.start", info={"label": label})

            def on_value(value: T) -> None:
                trace.record("stream.emit", info={"label": label}, parent_id=start_id)
                sink(value)

            running = self.start(on_value)

            def stop() -> None:
                running.stop()
                trace.record("stream.stop", info={"label": label}, parent_id=start_id)

            return Running(stop)

        return Stream(new_start)

    @staticmethod
    def from_iterable(values: Iterable[T]) -> Stream[T]:
        """Push every value synchronously during start().

        The values are captured once, so the Stream can be started again.
        """
        items = tuple(values)

        def new_start(sink: Sink[T]) -> RunningStream:
            for item in items:
                sink(item)
            return STOPPED

        return Stream(new_start)

    @staticmethod
    def from_task(task: Task[T]) -> Stream[T]:
        """Emit the value of task once; stopping cancels the task."""
        def new_start(sink: Sink[T]) -> RunningStream:
            scheduled = task.run(sink)

            def stop() -> None:
                scheduled.cancel()

            return Running(stop)

        return Stream(new_start)

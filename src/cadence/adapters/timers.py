"""Timer adapters: one-shot timeout Task and repeating interval Stream."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TypeVar

from cadence.config import Host
from cadence.errors import ContractError, require_delay
from cadence.kernel.handles import Running, Scheduled
from cadence.kernel.ports import Continuation, RunningStream, ScheduledTask, Sink, TimerHandle
from cadence.kernel.stream import Stream
from cadence.kernel.task import Task

logger = logging.getLogger(__name__)

T = TypeVar("T")


def timeout(
    delay: float,
    action: Callable[[], T] | None = None,
    host: Host | None = None,
) -> Task[T | None]:
    """A Task producing after delay seconds.

    Args:
        delay: Seconds to wait (>= 0)
        action: Called when the timer fires; its result is the produced
            value (None without an action). Never called if cancelled first.
        host: Timer mechanism and optional trace

    Returns:
        Task whose cancel() reports True only if the timer had not fired.
    """
    seconds = require_delay("timeout", delay)
    host = host or Host()

    def _run(then: Continuation[T | None]) -> ScheduledTask:
        pending = True

        def fire() -> None:
            nonlocal pending
            # The host may still deliver a callback queued before cancel().
            if not pending:
                return
            pending = False
            logger.debug("timeout(%s) fired", seconds)
            then(action() if action is not None else None)

        handle = host.timers.call_later(seconds, fire)
        logger.debug("timeout(%s) scheduled", seconds)

        def cancel() -> bool:
            nonlocal pending
            handle.cancel()
            interrupted = pending
            pending = False
            if interrupted:
                logger.debug("timeout(%s) cancelled before firing", seconds)
            return interrupted

        return Scheduled(cancel)

    task: Task[T | None] = Task(_run)
    if host.trace is not None:
        return task.traced(host.trace, f"timeout({seconds})")
    return task


def interval(period: float, host: Host | None = None) -> Stream[int]:
    """A Stream emitting the tick index 0, 1, 2, ... every period seconds.

    Args:
        period: Seconds between ticks (> 0)
        host: Timer mechanism and optional trace
    """
    seconds = require_delay("interval", period)
    if seconds == 0:
        raise ContractError("interval expects a positive period", period)
    host = host or Host()

    def _start(sink: Sink[int]) -> RunningStream:
        ticks = 0
        active = True
        handle: TimerHandle

        def tick() -> None:
            nonlocal ticks, handle
            if not active:
                return
            handle = host.timers.call_later(seconds, tick)
            index = ticks
            ticks += 1
            sink(index)

        handle = host.timers.call_later(seconds, tick)
        logger.debug("interval(%s) started", seconds)

        def stop() -> None:
            nonlocal active
            active = False
            handle.cancel()
            logger.debug("interval(%s) stopped after %d tick(s)", seconds, ticks)

        return Running(stop)

    stream: Stream[int] = Stream(_start)
    if host.trace is not None:
        return stream.traced(host.trace, f"interval({seconds})")
    return stream

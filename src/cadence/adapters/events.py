"""Event-source adapters: first firing as a Task, every firing as a Stream."""

from __future__ import annotations

import logging
from typing import Any

from cadence.config import Host
from cadence.kernel.handles import Running, Scheduled
from cadence.kernel.ports import Continuation, EventSourcePort, RunningStream, ScheduledTask, Sink
from cadence.kernel.stream import Stream
from cadence.kernel.task import Task

logger = logging.getLogger(__name__)


def event(name: str, source: EventSourcePort, host: Host | None = None) -> Task[Any]:
    """A Task producing the payload of the next name event on source.

    The listener is detached after the first firing or on cancel().
    """
    def _run(then: Continuation[Any]) -> ScheduledTask:
        attached = True

        def detach() -> None:
            nonlocal attached
            if attached:
                attached = False
                source.remove_listener(name, listener)
                logger.debug("listener for %r detached", name)

        def listener(payload: Any) -> None:
            if not attached:
                return
            detach()
            then(payload)

        source.add_listener(name, listener)
        logger.debug("listener for %r attached", name)

        def cancel() -> bool:
            interrupted = attached
            detach()
            return interrupted

        return Scheduled(cancel)

    task: Task[Any] = Task(_run)
    if host is not None and host.trace is not None:
        return task.traced(host.trace, f"event({name})")
    return task


def events(name: str, source: EventSourcePort, host: Host | None = None) -> Stream[Any]:
    """A Stream of the payload of every name event on source until stopped."""
    def _start(sink: Sink[Any]) -> RunningStream:
        def listener(payload: Any) -> None:
            sink(payload)

        source.add_listener(name, listener)
        logger.debug("listener for %r attached", name)

        def stop() -> None:
            source.remove_listener(name, listener)
            logger.debug("listener for %r detached", name)

        return Running(stop)

    stream: Stream[Any] = Stream(_start)
    if host is not None and host.trace is not None:
        return stream.traced(host.trace, f"events({name})")
    return stream

"""Port protocols for Cadence - pure abstractions."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, Protocol, TypeVar

T_contra = TypeVar("T_contra", contravariant=True)

Continuation = Callable[[T_contra], Any]
Sink = Callable[[T_contra], Any]


class ScheduledTask(Protocol):
    """A live execution instance of a Task."""

    def cancel(self) -> bool:
        """Abort the pending production.

        Returns True only if a still-pending result was intercepted.
        """
        ...


class RunningStream(Protocol):
    """A live execution instance of a Stream."""

    def stop(self) -> None:
        """Detach the producer so no further emission reaches the sink."""
        ...


class TimerHandle(Protocol):
    def cancel(self) -> None: ...


class TimerPort(Protocol):
    """Host timer mechanism.

    Infrastructure-level.
    Not part of the combinator core.
    """

    def call_later(self, delay: float, callback: Callable[[], Any]) -> TimerHandle:
        """Schedule callback to run once after delay seconds."""
        ...


class EventSourcePort(Protocol):
    """Anything a listener can be attached to by event name."""

    def add_listener(self, name: str, listener: Callable[[Any], Any]) -> None: ...
    def remove_listener(self, name: str, listener: Callable[[Any], Any]) -> None: ...

"""Cancellation-result protocol shared by every Task and Stream."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Any

from cadence.kernel.ports import RunningStream, ScheduledTask


def discard(_: Any = None) -> None:
    """Default continuation/sink: drop the value."""
    return None


@dataclass(frozen=True)
class Scheduled:
    """ScheduledTask backed by a cancel function."""

    _cancel: Callable[[], bool]

    def cancel(self) -> bool:
        return self._cancel()


@dataclass(frozen=True)
class Running:
    """RunningStream backed by a stop function."""

    _stop: Callable[[], None]

    def stop(self) -> None:
        self._stop()


SETTLED = Scheduled(lambda: False)
STOPPED = Running(discard)


def fold_cancel(handles: Iterable[ScheduledTask]) -> bool:
    """Cancel every handle and OR the results.

    Every handle is cancelled even after one has reported True.
    """
    interrupted = False
    for handle in list(handles):
        interrupted = handle.cancel() or interrupted
    return interrupted


def stop_all(handles: Iterable[RunningStream]) -> None:
    for handle in list(handles):
        handle.stop()

"""Runtime layer - concrete host implementations of the kernel ports."""

from cadence.runtime.events import EventEmitter
from cadence.runtime.timers import AsyncioTimers

__all__ = ["AsyncioTimers", "EventEmitter"]

"""Producer adapters bridging host primitives into Tasks and Streams."""

from cadence.adapters.events import event, events
from cadence.adapters.timers import interval, timeout

__all__ = ["timeout", "interval", "event", "events"]

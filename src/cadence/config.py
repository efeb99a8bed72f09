"""Host configuration for producer adapters."""

from __future__ import annotations

from dataclasses import dataclass, field

from cadence.kernel.ports import TimerPort
from cadence.kernel.trace import Trace
from cadence.runtime.timers import AsyncioTimers


@dataclass
class Host:
    """Environment an adapter talks to.

    Attributes:
        timers: Timer mechanism used by timeout/interval (default: asyncio)
        trace: When set, adapters trace every run/start under their own label
    """

    timers: TimerPort = field(default_factory=AsyncioTimers)
    trace: Trace | None = None

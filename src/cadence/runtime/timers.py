"""asyncio-backed TimerPort."""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any


@dataclass
class AsyncioTimers:
    """Schedules callbacks on an asyncio event loop.

    When no loop is given, the running loop is looked up each time a timer
    is scheduled, so a Host can be built outside of any loop.
    """

    loop: asyncio.AbstractEventLoop | None = None

    def call_later(self, delay: float, callback: Callable[[], Any]) -> asyncio.TimerHandle:
        loop = self.loop if self.loop is not None else asyncio.get_running_loop()
        return loop.call_later(delay, callback)

import logging

from .adapters import event, events, interval, timeout
from .combinators import all_, merge, race, repeat, zip
from .config import Host
from .errors import ContractError
from .kernel import (
    ABSENT,
    Evidence,
    FoldPipe,
    Pipe,
    RecurrentPipe,
    RunningStream,
    ScheduledTask,
    Stream,
    Task,
    Trace,
)
from .runtime import AsyncioTimers, EventEmitter

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    # Core
    "Task",
    "Stream",
    "ABSENT",
    "ScheduledTask",
    "RunningStream",
    # Combinators
    "race",
    "all_",
    "repeat",
    "zip",
    "merge",
    # Pipes
    "Pipe",
    "FoldPipe",
    "RecurrentPipe",
    # Adapters
    "timeout",
    "interval",
    "event",
    "events",
    "Host",
    "AsyncioTimers",
    "EventEmitter",
    # Errors
    "ContractError",
    # Tracing
    "Trace",
    "Evidence",
]

"""Kernel layer - Task and Stream cores for Cadence."""

from cadence.kernel.handles import Running, Scheduled, discard, fold_cancel, stop_all
from cadence.kernel.pipe import FoldPipe, Pipe, RecurrentPipe
from cadence.kernel.ports import (
    Continuation,
    EventSourcePort,
    RunningStream,
    ScheduledTask,
    Sink,
    TimerHandle,
    TimerPort,
)
from cadence.kernel.stream import ABSENT, Absent, Stream
from cadence.kernel.task import Task
from cadence.kernel.trace import Evidence, Trace

__all__ = [
    "Task",
    "Stream",
    "ABSENT",
    "Absent",
    "ScheduledTask",
    "RunningStream",
    "Scheduled",
    "Running",
    "discard",
    "fold_cancel",
    "stop_all",
    # Pipes
    "Pipe",
    "FoldPipe",
    "RecurrentPipe",
    # Tracing
    "Evidence",
    "Trace",
    # Ports
    "Continuation",
    "Sink",
    "TimerPort",
    "TimerHandle",
    "EventSourcePort",
]

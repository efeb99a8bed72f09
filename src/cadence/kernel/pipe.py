"""Reusable transformation shapes accepted by Task.through / Stream.through."""

from __future__ import annotations

from collections.abc import Callable
from typing import TypeVar

from cadence.kernel.stream import Stream
from cadence.kernel.task import Task

In = TypeVar("In")
Out = TypeVar("Out")

Pipe = Callable[[Stream[In]], Stream[Out]]
FoldPipe = Callable[[Stream[In]], Task[Out]]
RecurrentPipe = Callable[[Task[In]], Stream[Out]]

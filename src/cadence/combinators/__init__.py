"""Combinators - free functions composing several Tasks or Streams."""

from cadence.combinators import streams, tasks
from cadence.combinators.streams import merge, zip
from cadence.combinators.tasks import all_, race, repeat

__all__ = [
    "tasks",
    "streams",
    "race",
    "all_",
    "repeat",
    "zip",
    "merge",
]

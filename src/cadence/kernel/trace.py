"""Runtime trace infrastructure - separate from the values flowing through.

Trace captures lifecycle events of Task executions and Stream runs
(run, produce, cancel, start, emit, stop) for debugging and tests.
Tree relationships are reconstructed only on demand via as_tree().
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any


@dataclass(frozen=True)
class Evidence:
    """A lifecycle event captured at runtime."""

    action: str
    id: int = 0
    parent_id: int | None = None
    timestamp: datetime = field(default_factory=lambda: datetime.now(UTC))
    info: dict[str, Any] = field(default_factory=dict)


class Trace:
    """Lifecycle log shared by every traced Task execution and Stream run.

    A run or start event is a root; produce/cancel and emit/stop events of
    that same execution point back at it through parent_id, so one Trace
    can hold many interleaved executions and still tell them apart.
    """

    def __init__(self, enabled: bool = True) -> None:
        self.enabled = enabled
        self._events: list[Evidence] = []
        self._next_id: int = 0

    def record(
        self,
        action: str,
        info: dict[str, Any] | None = None,
        parent_id: int | None = None,
    ) -> int | None:
        """Append one lifecycle event.

        Args:
            action: "task.run", "task.produce", "task.cancel",
                "stream.start", "stream.emit" or "stream.stop"
            info: Label of the traced Task/Stream, plus the cancel effect
            parent_id: The run/start event this event belongs to

        Returns:
            The new event's id, to be used as parent_id by later events of
            the same execution; None when the trace is disabled
        """
        if not self.enabled:
            return None

        event_id = self._next_id
        self._next_id += 1
        self._events.append(Evidence(action=action, id=event_id, parent_id=parent_id, info=info or {}))
        return event_id

    def get_events(self) -> list[Evidence]:
        """Events in the order the executions reported them."""
        return list(self._events)

    def find_all(self, action: str | None = None, **info: Any) -> list[Evidence]:
        """Events with the given action whose info contains every given entry."""
        return [
            ev
            for ev in self._events
            if (action is None or ev.action == action)
            and all(ev.info.get(k) == v for k, v in info.items())
        ]

    def as_tree(self) -> dict[int | None, list[int]]:
        """Group event ids by the execution that owns them.

        Returns:
            Mapping of run/start event id to the ids of its produce, cancel,
            emit and stop events; root events sit under None
        """
        tree: dict[int | None, list[int]] = {}
        for ev in self._events:
            tree.setdefault(ev.parent_id, []).append(ev.id)
        return tree

    def __len__(self) -> int:
        return len(self._events)

    def clear(self) -> None:
        """Forget every execution recorded so far; ids restart at 0."""
        self._events.clear()
        self._next_id = 0

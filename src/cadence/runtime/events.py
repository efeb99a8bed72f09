"""In-process event source."""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Callable
from typing import Any

Listener = Callable[[Any], Any]


class EventEmitter:
    """Named-event source implementing EventSourcePort.

    Attributes:
        _listeners: Mapping of event names to listeners in attach order.
    """

    def __init__(self) -> None:
        self._listeners: dict[str, list[Listener]] = defaultdict(list)

    def add_listener(self, name: str, listener: Listener) -> None:
        self._listeners[name].append(listener)

    def remove_listener(self, name: str, listener: Listener) -> None:
        listeners = self._listeners.get(name)
        if listeners and listener in listeners:
            listeners.remove(listener)

    def emit(self, name: str, payload: Any = None) -> int:
        """Call every listener attached to name with payload.

        A listener detached by an earlier listener during the same emit
        is not called.

        Returns:
            Number of listeners called
        """
        called = 0
        for listener in list(self._listeners.get(name, ())):
            if listener not in self._listeners[name]:
                continue
            listener(payload)
            called += 1
        return called

    def listener_count(self, name: str) -> int:
        return len(self._listeners.get(name, ()))

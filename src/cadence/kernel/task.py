"""Task monad - one deferred, cancellable result."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, ClassVar, Generic, TypeVar

from cadence.errors import require_positive_count
from cadence.kernel.handles import SETTLED, Scheduled, discard, fold_cancel
from cadence.kernel.ports import Continuation, ScheduledTask
from cadence.kernel.trace import Trace

if TYPE_CHECKING:
    from cadence.kernel.stream import Stream

T = TypeVar("T")
U = TypeVar("U")

Producer = Callable[[Continuation[T]], ScheduledTask]


@dataclass(frozen=True)
class Task(Generic[T]):
    """A description of a computation that produces exactly one value, or never.

    A Task holds no running state. Each call to run() starts an independent
    execution instance and returns its ScheduledTask.
    """

    _run: Producer[T]

    noop: ClassVar[Task[None]]

    def run(self, then: Continuation[T] = discard) -> ScheduledTask:
        """Activate the producer and forward its value to then.

        Args:
            then: Continuation receiving the produced value (default: discard)

        Returns:
            ScheduledTask whose cancel() reports whether a still-pending
            result was intercepted

        Note: then is invoked at most once per execution, and never after
        cancel(), even if the producer misbehaves and fires again.
        """
        settled = False
        cancelled = False

        def once(value: T) -> None:
            nonlocal settled
            if settled:
                return
            settled = True
            then(value)

        scheduled = self._run(once)

        def cancel() -> bool:
            nonlocal settled, cancelled
            if cancelled:
                return False
            cancelled = True
            live = not settled
            settled = True
            return scheduled.cancel() and live

        return Scheduled(cancel)

    def map(self, func: Callable[[T], U]) -> Task[U]:
        def new_run(then: Continuation[U]) -> ScheduledTask:
            return self.run(lambda value: then(func(value)))

        return Task(new_run)

    def flat_map(self, func: Callable[[T], Task[U]]) -> Task[U]:
        """Sequence a second Task built from this one's value.

        Cancelling the result cancels every stage started so far and ORs
        their results.
        """
        def new_run(then: Continuation[U]) -> ScheduledTask:
            stages: list[ScheduledTask] = []

            def on_value(value: T) -> None:
                stages.append(func(value).run(then))

            stages.append(self.run(on_value))
            return Scheduled(lambda: fold_cancel(stages))

        return Task(new_run)

    def repeat(self, n: int) -> Task[T]:
        """Run this Task n times in sequence and forward the n-th value.

        Args:
            n: Total number of productions (must be >= 1)

        Returns:
            New Task producing the value of the last run
        """
        count = require_positive_count("repeat", n)
        if count == 1:
            return self

        def new_run(then: Continuation[T]) -> ScheduledTask:
            remaining = count
            current: ScheduledTask = SETTLED
            cancelled = False
            looping = False
            again = False

            def on_value(value: T) -> None:
                nonlocal remaining, again
                remaining -= 1
                if remaining == 0:
                    then(value)
                elif looping:
                    # Synchronous production: let launch() re-run us.
                    again = True
                else:
                    launch()

            def launch() -> None:
                nonlocal current, looping, again
                looping = True
                try:
                    again = True
                    while again and not cancelled:
                        again = False
                        current = self.run(on_value)
                finally:
                    looping = False

            def cancel() -> bool:
                nonlocal cancelled
                cancelled = True
                return current.cancel()

            launch()
            return Scheduled(cancel)

        return Task(new_run)

    def through(self, pipe: Callable[[Task[T]], Any]) -> Any:
        """Apply a reusable transformation to this Task."""
        return pipe(self)

    def to_stream(self) -> Stream[T]:
        """This Task's single value as a one-shot Stream."""
        from cadence.kernel.stream import Stream

        return Stream.from_task(self)

    def traced(self, trace: Trace, label: str) -> Task[T]:
        """Record run/produce/cancel events of every execution in trace."""
        def new_run(then: Continuation[T]) -> ScheduledTask:
            run_id = trace.record("task.run", info={"label": label})

            def produce(value: T) -> None:
                trace.record("task.produce", info={"label": label}, parent_id=run_id)
                then(value)

            scheduled = self.run(produce)

            def cancel() -> bool:
                effect = scheduled.cancel()
                trace.record("task.cancel", info={"label": label, "effect": effect}, parent_id=run_id)
                return effect

            return Scheduled(cancel)

        return Task(new_run)

    @staticmethod
    def lambda_(action: Callable[[], T]) -> Task[T]:
        """Wrap a synchronous action as an immediately-resolving Task.

        The action runs inside run(); its exceptions propagate to the caller.
        Cancelling is always a no-op returning False.
        """
        def new_run(then: Continuation[T]) -> ScheduledTask:
            then(action())
            return SETTLED

        return Task(new_run)

    @staticmethod
    def of(value: T) -> Task[T]:
        """Create a Task that immediately produces value."""
        return Task.lambda_(lambda: value)


Task.noop = Task.lambda_(discard)

"""Task combinators: race, all_, repeat."""

# Combinators satisfy the following algebraic laws:
#
# 1. Identity: task.flat_map(Task.of) == task
# 2. Associativity: task.flat_map(f).flat_map(g) == task.flat_map(lambda x: f(x).flat_map(g))
# 3. Race identity: race(task) == task
# 4. All ordering: all_(a, b) produces [a_value, b_value] whichever finishes first

from __future__ import annotations

import logging
from typing import Any, TypeVar

from cadence.kernel.handles import SETTLED, Scheduled, fold_cancel
from cadence.kernel.ports import Continuation, ScheduledTask
from cadence.kernel.task import Task

logger = logging.getLogger(__name__)

T = TypeVar("T")


def race(*tasks: Task[T]) -> Task[T]:
    """Run every task and forward the first value produced.

    Semantics:
        - All tasks are started in argument order
        - The first production wins; every other started task is cancelled
          before the winning value is forwarded
        - If a task wins synchronously while the race is still starting
          its members, the remaining members are never started
        - cancel() cancels every started task and ORs their results

    Args:
        tasks: Competing tasks. With no tasks the race never produces.

    Returns:
        Task[T]: A new task producing the winner's value.
    """
    def _run(then: Continuation[T]) -> ScheduledTask:
        started: list[ScheduledTask] = []
        settled = False
        starting = True

        def win(value: T) -> None:
            nonlocal settled
            if settled:
                return
            settled = True
            # A synchronous winner is not in started yet.
            launched = len(started) + 1 if starting else len(started)
            logger.debug("race settled with %d of %d task(s) started", launched, len(tasks))
            fold_cancel(started)
            then(value)

        for task in tasks:
            if settled:
                break
            started.append(task.run(win))
        starting = False

        if settled:
            # The synchronous winner's handle was appended after win() ran.
            fold_cancel(started)

        return Scheduled(lambda: fold_cancel(started))

    return Task(_run)


def all_(*tasks: Task[T]) -> Task[list[T]]:
    """Run every task and produce all their values once the last one finishes.

    Semantics:
        - Values are ordered by argument position, not completion order
        - The continuation fires exactly once, after the last production
        - cancel() cancels every task and ORs their results

    Args:
        tasks: Tasks to run concurrently. With no tasks, [] is produced
            immediately.

    Returns:
        Task[list[T]]: A new task producing the list of values.
    """
    def _run(then: Continuation[list[T]]) -> ScheduledTask:
        if not tasks:
            then([])
            return SETTLED

        results: list[Any] = [None] * len(tasks)
        remaining = len(tasks)

        def collect(index: int) -> Continuation[T]:
            def on_value(value: T) -> None:
                nonlocal remaining
                results[index] = value
                remaining -= 1
                if remaining == 0:
                    then(list(results))

            return on_value

        started = [task.run(collect(i)) for i, task in enumerate(tasks)]
        return Scheduled(lambda: fold_cancel(started))

    return Task(_run)


def repeat(task: Task[T], n: int) -> Task[T]:
    """Run task n times in sequence and produce the last value.

    Args:
        task: The task to repeat
        n: Total number of productions (must be >= 1)

    Returns:
        New Task that executes the inner task n times
    """
    return task.repeat(n)

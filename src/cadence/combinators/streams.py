"""Stream combinators taking both operands explicitly."""

from __future__ import annotations

from typing import TypeVar

from cadence.kernel.stream import Absent, Stream

T = TypeVar("T")
U = TypeVar("U")


def zip(first: Stream[T], second: Stream[U]) -> Stream[tuple[T, U]]:  # noqa: A001
    """Pair emissions positionally, queueing unmatched ones per side.

    Same semantics as Stream.zip.
    """
    return first.zip(second)


def merge(first: Stream[T], second: Stream[U]) -> Stream[tuple[T | Absent, U | Absent]]:
    """Interleave both streams; the other slot of each pair holds ABSENT."""
    return first.merge(second)

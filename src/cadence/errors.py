"""Error types for combinator misuse."""

from __future__ import annotations

from typing import Annotated

from pydantic import Field, StrictFloat, StrictInt, TypeAdapter, ValidationError

_count = TypeAdapter(Annotated[StrictInt, Field(ge=0)])
_positive_count = TypeAdapter(Annotated[StrictInt, Field(ge=1)])
_delay = TypeAdapter(Annotated[StrictFloat, Field(ge=0)])


class ContractError(ValueError):
    """Error raised when a combinator or adapter is built with invalid arguments.

    This error preserves the raw value for debugging purposes.
    """

    def __init__(self, message: str, raw_value: object) -> None:
        self.raw_value = raw_value
        super().__init__(message)

    def __repr__(self) -> str:
        return f"ContractError({super().__repr__()}, raw_value={self.raw_value!r})"


def require_count(name: str, n: object) -> int:
    """Validate a non-negative integer count."""
    try:
        return _count.validate_python(n)
    except ValidationError as exc:
        raise ContractError(f"{name} expects a non-negative int, got {n!r}", n) from exc


def require_positive_count(name: str, n: object) -> int:
    """Validate an integer count of at least one."""
    try:
        return _positive_count.validate_python(n)
    except ValidationError as exc:
        raise ContractError(f"{name} expects an int >= 1, got {n!r}", n) from exc


def require_delay(name: str, seconds: object) -> float:
    """Validate a non-negative delay in seconds."""
    try:
        return float(_delay.validate_python(seconds))
    except ValidationError as exc:
        raise ContractError(f"{name} expects a non-negative delay in seconds, got {seconds!r}", seconds) from exc

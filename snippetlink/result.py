"""Two-case outcome type used instead of exceptions for expected failures."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

T = TypeVar("T")


@dataclass(frozen=True)
class Success(Generic[T]):
    """Successful outcome carrying an optional payload."""

    value: T = None  # type: ignore[assignment]


@dataclass(frozen=True)
class Failure:
    """Failed outcome carrying a human readable message."""

    message: str


Outcome = Union[Success[T], Failure]


__all__ = ["Failure", "Outcome", "Success"]

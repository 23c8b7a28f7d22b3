"""Ok / Err values returned by building, loading and reconciling.

Callers inspect the outcome with ``is_ok`` / ``is_err`` or take the value
with ``unwrap``, which raises :class:`ResultError` on the wrong variant.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, NoReturn, TypeVar, Union

T = TypeVar("T")
E = TypeVar("E")


class ResultError(Exception):
    """Raised when the wrong side of a Result is unwrapped."""


@dataclass(frozen=True)
class Ok(Generic[T]):
    """Successful outcome carrying ``value``."""

    value: T

    def is_ok(self) -> bool:
        return True

    def is_err(self) -> bool:
        return False

    def unwrap(self) -> T:
        return self.value

    def unwrap_or(self, default: T) -> T:
        return self.value

    def unwrap_err(self) -> NoReturn:
        raise ResultError(f"Expected an error, got Ok({self.value!r})")


@dataclass(frozen=True)
class Err(Generic[E]):
    """Failed outcome carrying ``error``, passed back untouched."""

    error: E

    def is_ok(self) -> bool:
        return False

    def is_err(self) -> bool:
        return True

    def unwrap(self) -> NoReturn:
        raise ResultError(f"Expected a value, got Err({self.error!r})")

    def unwrap_or(self, default: T) -> T:
        return default

    def unwrap_err(self) -> E:
        return self.error


Result = Union[Ok[T], Err[E]]


@dataclass(frozen=True)
class ConfigError:
    """Problem in a configuration or definitions file."""

    field: str
    message: str

    def __str__(self) -> str:
        return f"Config error in '{self.field}': {self.message}"


class ExitCode:
    """Exit codes for CLI."""

    SUCCESS = 0
    FAILURE = 1
    UNEXPECTED = 2


def first_err(results: list[Result[T, E]]) -> Result[list[T], E]:
    """Collect the values of ``results``, stopping at the first error."""
    values = []

    for result in results:
        if result.is_err():
            return Err(result.unwrap_err())
        values.append(result.unwrap())

    return Ok(values)

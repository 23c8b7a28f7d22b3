"""Error values produced by the state machine engine."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ErrorKind(Enum):
    """Classification of engine errors."""

    # Build time
    ILLEGAL_NAME = "illegal_name"
    UNDEFINED_STATE = "undefined_state"
    ILLEGAL_HISTORY_SIZE = "illegal_history_size"

    # Run time
    UNDEFINED_TRANSITION = "undefined_transition"
    NIL_TO_NON_INITIAL_TRANSITION = "nil_to_non_initial_transition"

    def is_build_error(self) -> bool:
        """Check if this kind is only raised while building a machine."""
        return self in (
            ErrorKind.ILLEGAL_NAME,
            ErrorKind.UNDEFINED_STATE,
            ErrorKind.ILLEGAL_HISTORY_SIZE,
        )


@dataclass(frozen=True)
class MachineError:
    """
    A classified engine error.

    Instances are immutable and compare by value, so the module level
    constants below can be used directly in equality checks and ``match``
    statements.

    Attributes:
        kind: Error classification
        code: Short category shared by related kinds
        message: Human readable description
    """

    kind: ErrorKind
    code: str
    message: str

    def __str__(self) -> str:
        return f"{self.code}: {self.message}"


ERR_ILLEGAL_NAME = MachineError(
    kind=ErrorKind.ILLEGAL_NAME,
    code="invalid state",
    message="state name can't be an empty string",
)

ERR_UNDEFINED_STATE = MachineError(
    kind=ErrorKind.UNDEFINED_STATE,
    code="invalid state",
    message="can't reference undefined state",
)

ERR_ILLEGAL_HISTORY_SIZE = MachineError(
    kind=ErrorKind.ILLEGAL_HISTORY_SIZE,
    code="invalid option",
    message="history size must be at least 1",
)

ERR_UNDEFINED_TRANSITION = MachineError(
    kind=ErrorKind.UNDEFINED_TRANSITION,
    code="invalid transition",
    message="can't undergo an undefined transition",
)

ERR_NIL_TO_NON_INITIAL_TRANSITION = MachineError(
    kind=ErrorKind.NIL_TO_NON_INITIAL_TRANSITION,
    code="invalid transition",
    message="can't transition from nil state to non-initial state",
)

"""reconcile-fsm: a small, thread-safe finite state machine engine."""

__version__ = "0.1.0"

from reconcile_fsm.machine import (
    ERR_ILLEGAL_NAME,
    ERR_NIL_TO_NON_INITIAL_TRANSITION,
    ERR_UNDEFINED_STATE,
    ERR_UNDEFINED_TRANSITION,
    ErrorKind,
    Machine,
    MachineError,
    State,
    StateDefinition,
    TransitionRecord,
    build,
    load_definitions,
)
from reconcile_fsm.utils.result import Err, Ok, Result, ResultError

__all__ = [
    "__version__",
    "StateDefinition",
    "State",
    "TransitionRecord",
    "Machine",
    "build",
    "load_definitions",
    "ErrorKind",
    "MachineError",
    "ERR_ILLEGAL_NAME",
    "ERR_UNDEFINED_STATE",
    "ERR_UNDEFINED_TRANSITION",
    "ERR_NIL_TO_NON_INITIAL_TRANSITION",
    "Ok",
    "Err",
    "Result",
    "ResultError",
]

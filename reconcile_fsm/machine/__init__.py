"""Finite state machine engine.

A machine is built once from a mapping of state name to
:class:`StateDefinition`. Building validates the definitions and produces
an immutable transition table; afterwards the only thing that changes is
the current state, moved by :meth:`Machine.reconcile`:

    unstarted --reconcile(initial state)--> S --reconcile(T in S.outgoing)--> T

Rules:
- The first transition must target a state flagged ``initial``
- Later transitions must follow a declared edge of the current state
- Reconciling to the current state is a no-op
- Callbacks run after the state has changed; their errors are returned
  as-is and nothing is rolled back
"""

from reconcile_fsm.machine.builder import build, validate_definitions
from reconcile_fsm.machine.errors import (
    ERR_ILLEGAL_HISTORY_SIZE,
    ERR_ILLEGAL_NAME,
    ERR_NIL_TO_NON_INITIAL_TRANSITION,
    ERR_UNDEFINED_STATE,
    ERR_UNDEFINED_TRANSITION,
    ErrorKind,
    MachineError,
)
from reconcile_fsm.machine.loader import (
    DefinitionSet,
    load_definitions,
    parse_definitions,
)
from reconcile_fsm.machine.machine import DEFAULT_HISTORY_SIZE, Machine
from reconcile_fsm.machine.states import (
    EnterCallback,
    State,
    StateDefinition,
    TransitionCallback,
    TransitionRecord,
)

__all__ = [
    # States
    "StateDefinition",
    "State",
    "TransitionRecord",
    "EnterCallback",
    "TransitionCallback",
    # Errors
    "ErrorKind",
    "MachineError",
    "ERR_ILLEGAL_HISTORY_SIZE",
    "ERR_ILLEGAL_NAME",
    "ERR_UNDEFINED_STATE",
    "ERR_UNDEFINED_TRANSITION",
    "ERR_NIL_TO_NON_INITIAL_TRANSITION",
    # Machine
    "Machine",
    "DEFAULT_HISTORY_SIZE",
    "build",
    "validate_definitions",
    # Loading
    "DefinitionSet",
    "load_definitions",
    "parse_definitions",
]

"""Definition validation and machine construction."""

from __future__ import annotations

from typing import Mapping, Optional

from reconcile_fsm.machine.errors import (
    ERR_ILLEGAL_HISTORY_SIZE,
    ERR_ILLEGAL_NAME,
    ERR_UNDEFINED_STATE,
    MachineError,
)
from reconcile_fsm.machine.machine import DEFAULT_HISTORY_SIZE, Machine
from reconcile_fsm.machine.states import State, StateDefinition, TransitionCallback
from reconcile_fsm.utils.logging import get_logger
from reconcile_fsm.utils.result import Err, Ok, Result

logger = get_logger("machine.builder")


def validate_definitions(
    definitions: Mapping[str, StateDefinition],
) -> Result[None, MachineError]:
    """
    Check naming and referential integrity of state definitions.

    Definitions are checked in mapping order and the first failure is
    returned. Self references and repeated transition names are allowed.

    Args:
        definitions: State definitions indexed by name

    Returns:
        Ok(None), or Err with ERR_ILLEGAL_NAME / ERR_UNDEFINED_STATE
    """
    for name, definition in definitions.items():
        if name == "":
            return Err(ERR_ILLEGAL_NAME)

        for transition in definition.transitions:
            if transition not in definitions:
                logger.debug(
                    "undefined_state_reference",
                    state=name,
                    transition=transition,
                )
                return Err(ERR_UNDEFINED_STATE)

    return Ok(None)


def build(
    initial_state: str,
    definitions: Mapping[str, StateDefinition],
    on_transition: Optional[TransitionCallback] = None,
    history_size: int = DEFAULT_HISTORY_SIZE,
) -> Result[Machine, MachineError]:
    """
    Validate definitions and build a machine.

    Nothing is built unless every definition passes validation. The
    initial state name is resolved without validation: an empty or unknown
    name leaves the machine unstarted, so the first ``reconcile`` call must
    target a state flagged as initial. A history size below 1 is rejected
    before the definitions are looked at.

    Args:
        initial_state: Name of the state to start in, may be empty
        definitions: State definitions indexed by name
        on_transition: Optional callback run on every committed transition
        history_size: Number of committed transitions to remember, at least 1

    Returns:
        Result with the built Machine or the validation error
    """
    if not isinstance(history_size, int) or isinstance(history_size, bool) or history_size < 1:
        logger.info("build_rejected", error=str(ERR_ILLEGAL_HISTORY_SIZE), history_size=history_size)
        return Err(ERR_ILLEGAL_HISTORY_SIZE)

    validation = validate_definitions(definitions)
    if validation.is_err():
        logger.info("build_rejected", error=str(validation.unwrap_err()))
        return validation

    states = {
        name: State.from_definition(name, definition)
        for name, definition in definitions.items()
    }

    machine = Machine(
        states,
        current=initial_state if initial_state in states else None,
        on_transition=on_transition,
        history_size=history_size,
    )

    logger.debug(
        "machine_built",
        states=len(states),
        current=machine.current_state_name(),
    )
    return Ok(machine)

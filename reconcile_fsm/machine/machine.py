"""Machine implementation: current state, transition table and reconcile."""

from __future__ import annotations

import threading
from collections import deque
from types import MappingProxyType
from typing import Any, Deque, Mapping, Optional

from reconcile_fsm.machine.errors import (
    ERR_NIL_TO_NON_INITIAL_TRANSITION,
    ERR_UNDEFINED_TRANSITION,
)
from reconcile_fsm.machine.states import State, TransitionCallback, TransitionRecord
from reconcile_fsm.utils.logging import get_logger
from reconcile_fsm.utils.result import Err, Ok, Result

logger = get_logger("machine.machine")

DEFAULT_HISTORY_SIZE = 64


def _callback_failure(callback: str, state: str, result: Any) -> Optional[Err[Any]]:
    """Return the Err a callback produced, or None if it succeeded."""
    if result is None or isinstance(result, Ok):
        return None

    if not isinstance(result, Err):
        raise TypeError(
            f"{callback} callback for state '{state}' must return None, Ok or Err, "
            f"got {type(result).__name__}"
        )

    logger.warning(
        "callback_failed",
        callback=callback,
        to_state=state,
        error=str(result.error),
    )
    return result


class Machine:
    """
    Finite State Machine over a fixed set of named states.

    The state table is read-only after construction. The current state is
    the only mutable field and every read or write of it happens under a
    single lock, so concurrent ``reconcile`` calls are applied one at a
    time.

    Callbacks run while the lock is held. A callback must not call
    ``reconcile`` on the same machine, or it will deadlock.

    Machines are normally created with :func:`reconcile_fsm.machine.build`,
    which validates the definitions first.
    """

    def __init__(
        self,
        states: Mapping[str, State],
        current: Optional[str] = None,
        on_transition: Optional[TransitionCallback] = None,
        history_size: int = DEFAULT_HISTORY_SIZE,
    ) -> None:
        """
        Initialize the machine.

        Args:
            states: Built states indexed by name
            current: Name of the state to start in, or None for unstarted
            on_transition: Optional callback run on every committed transition
            history_size: Number of committed transitions to remember
        """
        self._states: Mapping[str, State] = MappingProxyType(dict(states))
        self._current: Optional[State] = self._states.get(current) if current else None
        self._on_transition = on_transition
        self._history: Deque[TransitionRecord] = deque(maxlen=history_size)
        self._lock = threading.Lock()

    @property
    def states(self) -> Mapping[str, State]:
        """Read-only view of the machine's states."""
        return self._states

    @property
    def current_state(self) -> Optional[State]:
        """The current state record, or None before the first transition."""
        with self._lock:
            return self._current

    def current_state_name(self) -> Optional[str]:
        """Get the name of the current state, or None if unstarted."""
        with self._lock:
            return self._current.name if self._current else None

    def state_names(self) -> list[str]:
        """Get all state names in definition order."""
        return list(self._states)

    def history(self) -> list[TransitionRecord]:
        """Get committed transitions, oldest first."""
        with self._lock:
            return list(self._history)

    def can_reconcile(self, target: str) -> bool:
        """Check if ``reconcile(target)`` would pass the legality checks."""
        with self._lock:
            return self._check(target).is_ok()

    def _check(self, target: str) -> Result[State, Any]:
        """Resolve ``target`` and check it against the current state."""
        next_state = self._states.get(target)

        if next_state is None:
            return Err(ERR_UNDEFINED_TRANSITION)

        if self._current is None:
            if not next_state.initial:
                return Err(ERR_NIL_TO_NON_INITIAL_TRANSITION)
            return Ok(next_state)

        if self._current.name == next_state.name:
            return Ok(next_state)

        if not self._current.can_transition_to(next_state.name):
            return Err(ERR_UNDEFINED_TRANSITION)

        return Ok(next_state)

    def reconcile(self, target: str, *args: Any) -> Result[None, Any]:
        """
        Move the machine to ``target`` and run the transition callbacks.

        Reconciling to the current state is a no-op and runs no callbacks.
        On a legal transition the current state is updated first, then the
        machine-wide callback runs, then the target's ``on_enter``. An error
        returned by either callback is passed back unchanged and the state
        change is not rolled back. A callback that returns anything other
        than None, Ok or Err raises TypeError, after the state has changed.

        Args:
            target: Name of the state to move to
            *args: Opaque values handed to the callbacks as a tuple

        Returns:
            Ok(None) on success, Err with a MachineError for illegal
            transitions, or the Err returned by a failing callback
        """
        with self._lock:
            checked = self._check(target)
            if checked.is_err():
                logger.debug(
                    "transition_rejected",
                    from_state=self._current.name if self._current else None,
                    to_state=target,
                    error=checked.unwrap_err().kind.value,
                )
                return checked

            next_state = checked.unwrap()
            previous = self._current

            if previous is not None and previous.name == next_state.name:
                return Ok(None)

            previous_name = previous.name if previous else None
            self._current = next_state
            self._history.append(TransitionRecord(previous=previous_name, target=next_state.name))

            logger.debug(
                "transition_committed",
                from_state=previous_name,
                to_state=next_state.name,
            )

            if self._on_transition is not None:
                failure = _callback_failure(
                    "on_transition",
                    next_state.name,
                    self._on_transition(next_state.name, args),
                )
                if failure is not None:
                    return failure

            if next_state.on_enter is not None:
                failure = _callback_failure(
                    "on_enter",
                    next_state.name,
                    next_state.on_enter(previous_name, args),
                )
                if failure is not None:
                    return failure

            return Ok(None)

    def to_dict(self) -> dict:
        """Convert topology and current state to a dictionary."""
        return {
            "current": self.current_state_name(),
            "states": [state.to_dict() for state in self._states.values()],
        }

    def __repr__(self) -> str:
        return f"Machine(current={self.current_state_name()!r}, states={len(self._states)})"

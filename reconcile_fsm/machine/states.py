"""State definitions and the built state records."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Callable, Optional

from reconcile_fsm.utils.result import Result

# on_enter(previous_state_name, args) and on_transition(target_state_name, args).
# Returning None is treated the same as Ok(None).
EnterCallback = Callable[[Optional[str], tuple], Optional[Result[None, Any]]]
TransitionCallback = Callable[[str, tuple], Optional[Result[None, Any]]]


@dataclass(frozen=True)
class StateDefinition:
    """
    Caller-authored description of one state.

    Attributes:
        initial: Whether the state may be entered from the unstarted machine
        transitions: Names of the states reachable from this one, in order
        on_enter: Optional callback run after the machine enters this state
    """

    initial: bool = False
    transitions: tuple[str, ...] = ()
    on_enter: Optional[EnterCallback] = None

    def __post_init__(self) -> None:
        # Accept any iterable of names; keep order and duplicates
        if not isinstance(self.transitions, tuple):
            object.__setattr__(self, "transitions", tuple(self.transitions))


@dataclass(frozen=True)
class State:
    """A built, immutable node of the machine's topology."""

    name: str
    initial: bool = False
    outgoing: frozenset[str] = field(default_factory=frozenset)
    on_enter: Optional[EnterCallback] = None

    @classmethod
    def from_definition(cls, name: str, definition: StateDefinition) -> State:
        """Create a state record, copying the definition's flags and edges."""
        return cls(
            name=name,
            initial=definition.initial,
            outgoing=frozenset(definition.transitions),
            on_enter=definition.on_enter,
        )

    def can_transition_to(self, name: str) -> bool:
        """Check if ``name`` is one of this state's outgoing transitions."""
        return name in self.outgoing

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "name": self.name,
            "initial": self.initial,
            "transitions": sorted(self.outgoing),
            "has_on_enter": self.on_enter is not None,
        }


@dataclass(frozen=True)
class TransitionRecord:
    """A committed transition, kept in the machine's history."""

    previous: Optional[str]
    target: str
    at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "previous": self.previous,
            "target": self.target,
            "at": self.at.isoformat(),
        }


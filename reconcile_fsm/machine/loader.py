"""Load state definitions from YAML documents.

A definitions file looks like::

    initial: ""            # optional starting state
    states:
      OPEN:
        initial: true
        transitions: [CLOSED]
      CLOSED:
        transitions: [OPEN, STORED]
      STORED:
        transitions: [OPEN]

Only the shape of the document is checked here. Naming and references
between states are validated by :func:`reconcile_fsm.machine.build`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

import yaml

from reconcile_fsm.machine.builder import build
from reconcile_fsm.machine.errors import MachineError
from reconcile_fsm.machine.machine import DEFAULT_HISTORY_SIZE, Machine
from reconcile_fsm.machine.states import StateDefinition, TransitionCallback
from reconcile_fsm.utils.logging import get_logger
from reconcile_fsm.utils.result import ConfigError, Err, Ok, Result, first_err

logger = get_logger("machine.loader")


@dataclass
class DefinitionSet:
    """Definitions read from a file, ready to build a machine from."""

    initial_state: str = ""
    definitions: dict[str, StateDefinition] = field(default_factory=dict)

    def build(
        self,
        on_transition: Optional[TransitionCallback] = None,
        history_size: int = DEFAULT_HISTORY_SIZE,
    ) -> Result[Machine, MachineError]:
        """Build a machine from these definitions."""
        return build(
            self.initial_state,
            self.definitions,
            on_transition=on_transition,
            history_size=history_size,
        )


def _parse_state(name: Any, data: Any) -> Result[tuple[str, StateDefinition], ConfigError]:
    if not isinstance(name, str):
        return Err(ConfigError(
            field="states",
            message=f"State names must be strings, got {name!r}",
        ))

    if data is None:
        data = {}
    if not isinstance(data, dict):
        return Err(ConfigError(
            field=f"states.{name}",
            message="State must be a mapping",
        ))

    initial = data.get("initial", False)
    if not isinstance(initial, bool):
        return Err(ConfigError(
            field=f"states.{name}.initial",
            message=f"Must be a boolean, got {initial!r}",
        ))

    transitions = data.get("transitions") or []
    if not isinstance(transitions, list) or not all(isinstance(t, str) for t in transitions):
        return Err(ConfigError(
            field=f"states.{name}.transitions",
            message="Must be a list of state names",
        ))

    return Ok((name, StateDefinition(initial=initial, transitions=tuple(transitions))))


def parse_definitions(data: Any) -> Result[DefinitionSet, ConfigError]:
    """
    Create a DefinitionSet from a parsed YAML document.

    Args:
        data: Document contents

    Returns:
        Result with the definitions or the first shape error
    """
    if not isinstance(data, dict):
        return Err(ConfigError(
            field="document",
            message="Definitions document must be a mapping",
        ))

    initial_state = data.get("initial") or ""
    if not isinstance(initial_state, str):
        return Err(ConfigError(
            field="initial",
            message=f"Must be a state name, got {initial_state!r}",
        ))

    states_data = data.get("states")
    if not isinstance(states_data, dict):
        return Err(ConfigError(
            field="states",
            message="Must be a mapping of state name to definition",
        ))

    parsed = first_err([
        _parse_state(name, state_data) for name, state_data in states_data.items()
    ])
    if parsed.is_err():
        return parsed

    return Ok(DefinitionSet(
        initial_state=initial_state,
        definitions=dict(parsed.unwrap()),
    ))


def load_definitions(path: Path) -> Result[DefinitionSet, ConfigError]:
    """
    Load state definitions from a YAML file.

    Args:
        path: Path to the definitions file

    Returns:
        Result with the definitions or error
    """
    path = Path(path)

    if not path.exists():
        return Err(ConfigError(
            field="path",
            message=f"Definitions file not found: {path}",
        ))

    try:
        with open(path) as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        return Err(ConfigError(
            field="yaml",
            message=f"Failed to parse YAML: {e}",
        ))
    except OSError as e:
        return Err(ConfigError(
            field="file",
            message=f"Failed to read definitions file: {e}",
        ))

    result = parse_definitions(data)
    if result.is_ok():
        logger.debug(
            "definitions_loaded",
            path=str(path),
            states=len(result.unwrap().definitions),
        )
    return result

"""Shared fixtures for the machine tests."""

from __future__ import annotations

from typing import Any, Optional

import pytest

from reconcile_fsm.machine import StateDefinition, build
from reconcile_fsm.utils.result import Err, Ok

OPEN = "OPEN"
CLOSED = "CLOSED"
STORED = "STORED"
FAILING = "FAILING"


class Box:
    """A box that records every state it is reconciled into."""

    def __init__(self) -> None:
        self.entered: list[tuple[str, Optional[str], tuple]] = []

    def on_open(self, previous: Optional[str], args: tuple) -> Ok[None]:
        self.entered.append((OPEN, previous, args))
        return Ok(None)

    def on_stored(self, previous: Optional[str], args: tuple) -> None:
        self.entered.append((STORED, previous, args))

    def on_failing(self, previous: Optional[str], args: tuple) -> Err[str]:
        self.entered.append((FAILING, previous, args))
        return Err("failing")

    def definitions(self) -> dict[str, StateDefinition]:
        return {
            OPEN: StateDefinition(initial=True, transitions=[CLOSED], on_enter=self.on_open),
            CLOSED: StateDefinition(transitions=[OPEN, STORED]),
            STORED: StateDefinition(transitions=[OPEN], on_enter=self.on_stored),
            FAILING: StateDefinition(initial=True, on_enter=self.on_failing),
        }


class Recorder:
    """Machine-wide callback that records calls and can be told to fail."""

    def __init__(self, error: Any = None) -> None:
        self.calls: list[tuple[str, tuple]] = []
        self.error = error

    def __call__(self, target: str, args: tuple):
        self.calls.append((target, args))
        if self.error is not None:
            return Err(self.error)
        return Ok(None)


@pytest.fixture
def box() -> Box:
    return Box()


@pytest.fixture
def machine(box):
    """An unstarted box machine."""
    return build("", box.definitions()).unwrap()


@pytest.fixture
def box_yaml(tmp_path):
    path = tmp_path / "box.yaml"
    path.write_text(
        "states:\n"
        "  OPEN:\n"
        "    initial: true\n"
        "    transitions: [CLOSED]\n"
        "  CLOSED:\n"
        "    transitions: [OPEN, STORED]\n"
        "  STORED:\n"
        "    transitions: [OPEN]\n"
    )
    return path

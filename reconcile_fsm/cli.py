"""CLI entry point for reconcile-fsm."""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any, Optional

import click

from reconcile_fsm import __version__
from reconcile_fsm.config import FsmConfig, load_config
from reconcile_fsm.machine import DefinitionSet, Machine, load_definitions
from reconcile_fsm.utils.logging import configure_logging, get_correlation_id, get_logger
from reconcile_fsm.utils.result import ExitCode, Ok


class Context:
    """CLI context for sharing state between commands."""

    def __init__(self, config: FsmConfig) -> None:
        self.config = config
        self.logger = get_logger("cli")


pass_context = click.make_pass_decorator(Context)


def output_json(data: dict) -> None:
    """Output JSON to stdout."""
    click.echo(json.dumps(data, indent=2, default=str))


def fail(data: dict) -> None:
    """Output an error report and exit with the failure code."""
    output_json({"status": "error", **data})
    sys.exit(ExitCode.FAILURE)


def load_machine(ctx: Context, path: Path, on_transition: Any = None) -> Machine:
    """Load a definitions file and build a machine, exiting on any error."""
    loaded = load_definitions(path)
    if loaded.is_err():
        error = loaded.unwrap_err()
        fail({"stage": "load", "field": error.field, "message": str(error)})

    definition_set: DefinitionSet = loaded.unwrap()
    built = definition_set.build(
        on_transition=on_transition,
        history_size=ctx.config.history_size,
    )
    if built.is_err():
        error = built.unwrap_err()
        fail({"stage": "build", "kind": error.kind.value, "message": str(error)})

    return built.unwrap()


@click.group()
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=False, path_type=Path),
    default=None,
    help="Path to a YAML configuration file",
)
@click.option(
    "--log-level",
    type=click.Choice(["debug", "info", "warn", "error"], case_sensitive=False),
    default=None,
    help="Logging level (overrides the configuration file)",
)
@click.option(
    "--log-format",
    type=click.Choice(["json", "text"], case_sensitive=False),
    default=None,
    help="Log format (overrides the configuration file)",
)
@click.version_option(version=__version__)
@click.pass_context
def cli(
    ctx: click.Context,
    config_path: Optional[Path],
    log_level: Optional[str],
    log_format: Optional[str],
) -> None:
    """
    Reconcile FSM - validate and exercise state machine definitions.

    Definitions files are YAML documents listing each state, whether it
    may be entered first, and the states it can move to.
    """
    result = load_config(config_path)
    if result.is_err():
        error = result.unwrap_err()
        fail({"stage": "config", "field": error.field, "message": str(error)})

    config = result.unwrap()
    if log_level:
        config.logging.level = log_level
    if log_format:
        config.logging.format = log_format

    configure_logging(level=config.logging.level, format_type=config.logging.format)
    get_correlation_id()

    ctx.obj = Context(config)


@cli.command()
@click.argument("definitions", type=click.Path(exists=False, path_type=Path))
@pass_context
def check(ctx: Context, definitions: Path) -> None:
    """Validate a definitions file."""
    machine = load_machine(ctx, definitions)

    ctx.logger.info("check_passed", path=str(definitions))
    output_json({
        "status": "ok",
        "states": machine.state_names(),
        "current": machine.current_state_name(),
    })


@cli.command()
@click.argument("definitions", type=click.Path(exists=False, path_type=Path))
@pass_context
def describe(ctx: Context, definitions: Path) -> None:
    """Show the topology of a definitions file."""
    machine = load_machine(ctx, definitions)
    output_json({"status": "ok", **machine.to_dict()})


@cli.command()
@click.argument("definitions", type=click.Path(exists=False, path_type=Path))
@click.argument("targets", nargs=-1, required=True)
@click.option(
    "--keep-going/--stop-on-error",
    default=False,
    help="Continue with the remaining targets after a failed transition",
)
@pass_context
def run(
    ctx: Context,
    definitions: Path,
    targets: tuple[str, ...],
    keep_going: bool,
) -> None:
    """Reconcile a machine through TARGETS in order."""

    def on_transition(target: str, args: tuple) -> Ok[None]:
        ctx.logger.info("state_entered", state=target)
        return Ok(None)

    machine = load_machine(ctx, definitions, on_transition=on_transition)

    steps = []
    failed = False
    for target in targets:
        result = machine.reconcile(target)
        step = {
            "target": target,
            "ok": result.is_ok(),
            "error": None if result.is_ok() else str(result.unwrap_err()),
            "state": machine.current_state_name(),
        }
        steps.append(step)

        if result.is_err():
            failed = True
            ctx.logger.warning("transition_failed", target=target, error=step["error"])
            if not keep_going:
                break

    output_json({
        "status": "error" if failed else "ok",
        "steps": steps,
        "final_state": machine.current_state_name(),
        "history": [record.to_dict() for record in machine.history()],
    })

    if failed:
        sys.exit(ExitCode.FAILURE)


def main() -> None:
    """Main entry point."""
    try:
        cli()
    except Exception as e:
        logger = get_logger("cli")
        logger.error("cli_error", error=str(e))
        sys.exit(ExitCode.UNEXPECTED)


if __name__ == "__main__":
    main()

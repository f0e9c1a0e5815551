"""
flagnames CLI - Resolve command.

Expand abbreviated flags in an argument list against declared flag specs.
"""

from __future__ import annotations

import json
import shlex
from typing import Annotated

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from flagnames.cli.errors import (
    ExitCode,
    print_invalid_config_error,
    print_invalid_flag_spec_error,
)
from flagnames.core.config import ResolverConfig, load_config
from flagnames.core.models import ResolutionAction, TraceStep
from flagnames.core.registry import FlagnamesError, known_flags_from_specs
from flagnames.core.resolver import resolve

console = Console()

ACTION_STYLES = {
    ResolutionAction.REWRITTEN: "green",
    ResolutionAction.ABSORBED: "green",
    ResolutionAction.AMBIGUOUS: "red",
    ResolutionAction.UNMATCHED: "yellow",
    ResolutionAction.TERMINATOR: "cyan",
}


def load_cli_config(ctx: typer.Context, **overrides: object) -> ResolverConfig:
    """
    Load the layered config and apply CLI overrides.

    Overrides left as None keep the configured value. ``--debug`` on the
    root command turns on resolver tracing.
    """
    try:
        config = load_config()
    except ValidationError as e:
        print_invalid_config_error(str(e))
        raise typer.Exit(ExitCode.USER_ERROR)

    update = {key: value for key, value in overrides.items() if value is not None}
    if ctx.obj and ctx.obj.get("debug"):
        update["trace"] = True
    if update:
        config = config.model_copy(update=update)
    return config


def render_trace(steps: list[TraceStep]) -> None:
    """Show how each token was handled."""
    table = Table(title="Resolution", show_header=True, header_style="bold cyan")
    table.add_column("#", style="dim", justify="right")
    table.add_column("Token", overflow="fold")
    table.add_column("Action")
    table.add_column("Candidates", overflow="fold")
    table.add_column("Emitted", overflow="fold")

    for step in steps:
        style = ACTION_STYLES.get(step.action, "dim")
        table.add_row(
            str(step.index),
            escape(step.token),
            f"[{style}]{step.action.value}[/{style}]",
            ", ".join(step.candidates) or "-",
            escape(step.emitted),
        )

    console.print(table)


def resolve_command(
    ctx: typer.Context,
    args: Annotated[
        list[str] | None,
        typer.Argument(
            help="Arguments to resolve (put them after --)",
            show_default=False,
        ),
    ] = None,
    flag: Annotated[
        list[str] | None,
        typer.Option(
            "--flag",
            "-f",
            help="Declared flag as NAME or NAME:KIND (KIND: bool, value, multi). Repeatable.",
        ),
    ] = None,
    stop_at_positional: Annotated[
        bool | None,
        typer.Option(
            "--stop-at-positional/--no-stop-at-positional",
            help="Stop resolving at the first bare positional argument",
            show_default=False,
        ),
    ] = None,
    exact: Annotated[
        bool | None,
        typer.Option(
            "--exact/--no-exact",
            help="Let a flag named exactly by a token beat longer prefix matches",
            show_default=False,
        ),
    ] = None,
    json_output: Annotated[
        bool,
        typer.Option(
            "--json",
            help="Print the resolved arguments as a JSON list",
        ),
    ] = False,
    explain: Annotated[
        bool,
        typer.Option(
            "--explain",
            "-e",
            help="Show a table of what happened to each token",
        ),
    ] = False,
) -> None:
    """
    Expand abbreviated flags into their full names.

    Unknown and ambiguous flags are left alone; an ambiguous flag also
    stops resolution for everything after it, as does a literal --.

    Examples:

        # -v → --verbose, -p x → --prefix=x
        flagnames resolve -f verbose:bool -f prefix -- -v -p x a b

        # -i matches both id and item, so nothing is rewritten
        flagnames resolve -f id -f item -- -i 19

        # --id is also a prefix of --idle unless exact names win
        flagnames resolve -f id -f idle --exact -- --id 5

        # Machine-readable output
        flagnames resolve -f id -f item --json -- -id 19 -it 62
    """
    try:
        known_flags = known_flags_from_specs(flag or [])
    except FlagnamesError as e:
        print_invalid_flag_spec_error(e)
        raise typer.Exit(ExitCode.USER_ERROR)

    config = load_cli_config(
        ctx,
        stop_at_positional=stop_at_positional,
        exact_match_wins=exact,
    )

    steps: list[TraceStep] = []
    resolved = resolve(known_flags, args or [], config, trace=steps.append)

    if explain:
        render_trace(steps)

    output = json.dumps(resolved, indent=2) if json_output else shlex.join(resolved)
    console.print(output, markup=False, highlight=False, soft_wrap=True)

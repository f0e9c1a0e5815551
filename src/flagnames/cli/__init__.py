"""
flagnames CLI - Main application entry point.

This module sets up the Typer CLI application with all subcommands.
"""

import logging
import sys

import typer
from rich.console import Console

from flagnames import __version__
from flagnames.cli import demo, resolve
from flagnames.core.config import load_layered_env

app = typer.Typer(
    name="flagnames",
    help="Expand abbreviated command-line flags into their full names",
    no_args_is_help=True,
    add_completion=False,
    context_settings={"help_option_names": ["--help", "-h"]},
)

console = Console()


def setup_logging(debug: bool = False) -> None:
    """
    Configure logging for all commands.

    Args:
        debug: If True, enable DEBUG level logging (resolver trace included)
    """
    level = logging.DEBUG if debug else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )


@app.callback()
def main(
    ctx: typer.Context,
    debug: bool = typer.Option(
        False,
        "--debug",
        help="Enable debug output and trace every resolved token",
    ),
) -> None:
    """
    flagnames - resolve abbreviated flags before a strict parser sees them.

    Given the flags a program declares, rewrites -v into --verbose and
    -p x into --prefix=x. Unknown and ambiguous flags pass through.

    Quick Start:
        flagnames resolve -f verbose:bool -f prefix -- -v -p out a b
        flagnames demo -- -v -id 19 -it 62 a b c
    """
    # FLAGNAMES_* settings may come from .env files
    load_layered_env()
    setup_logging(debug)

    ctx.obj = {"debug": debug}


app.command(name="resolve")(resolve.resolve_command)
app.command(name="demo")(demo.demo_command)


@app.command()
def version() -> None:
    """Show flagnames version and exit."""
    console.print(f"flagnames version {__version__}")
    raise typer.Exit(0)


def cli_main() -> None:
    """Main CLI entry point."""
    app()


__all__ = ["app", "cli_main"]

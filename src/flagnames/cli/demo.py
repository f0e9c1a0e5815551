"""
flagnames CLI - Demo command.

A small program with a strict argparse parser. Its arguments are resolved
first, so ``-v -p x -id 19`` works even though the parser itself accepts
only ``--verbose --prefix x --id 19``.
"""

from __future__ import annotations

import argparse
from typing import Annotated

import typer
from rich.console import Console

from flagnames.cli.errors import ExitCode, print_parse_error
from flagnames.cli.resolve import load_cli_config
from flagnames.core.config import ResolverConfig
from flagnames.core.patch import patch_parser_args

console = Console()


class DemoParseError(Exception):
    """The demo parser rejected its (resolved) arguments."""

    pass


class DemoArgumentParser(argparse.ArgumentParser):
    """argparse parser that raises instead of exiting."""

    def error(self, message: str) -> None:  # type: ignore[override]
        raise DemoParseError(message)


def build_demo_parser() -> DemoArgumentParser:
    """Declare the demo program's flags. Abbreviations are disabled."""
    parser = DemoArgumentParser(prog="myprog", allow_abbrev=False, add_help=False)
    parser.add_argument("--verbose", action="store_true", help="increase verbosity")
    parser.add_argument("--id", type=int, default=0, help="ID to process")
    parser.add_argument("--item", type=int, default=0, help="item number to fetch")
    parser.add_argument("--prefix", default="", help="report prefix")
    parser.add_argument("args", nargs="*", help="positional arguments")
    return parser


def parse_demo_args(
    args: list[str],
    config: ResolverConfig | None = None,
) -> argparse.Namespace:
    """
    Resolve and parse ``args`` the way the demo program does.

    Positionals may be interleaved with flags.

    Raises:
        DemoParseError: If the parser rejects the resolved arguments
    """
    parser = build_demo_parser()
    return parser.parse_intermixed_args(patch_parser_args(parser, args, config))


def demo_command(
    ctx: typer.Context,
    args: Annotated[
        list[str] | None,
        typer.Argument(
            help="Arguments for the demo program (put them after --)",
            show_default=False,
        ),
    ] = None,
) -> None:
    """
    Run the demo program on abbreviated arguments.

    The program declares --verbose, --id, --item and --prefix. Try:

        flagnames demo -- -v -p=myprefix -id 19 -it 62 a b c

        flagnames demo -- -i 19    # ambiguous: id or item
    """
    config = load_cli_config(ctx)

    try:
        namespace = parse_demo_args(args or [], config)
    except DemoParseError as e:
        print_parse_error(str(e))
        raise typer.Exit(ExitCode.USER_ERROR)

    console.print("[bold]Flags:[/bold]")
    for name in ("verbose", "id", "item", "prefix"):
        console.print(f"  {name:<8}= {getattr(namespace, name)!r}", markup=False, highlight=False)
    for arg in namespace.args:
        console.print(f"Positional argument: {arg}", markup=False, highlight=False)

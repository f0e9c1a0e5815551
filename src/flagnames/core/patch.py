"""
Parser glue for the abbreviation resolver.

These helpers derive the known flags from a parser's own declarations and
return a resolved copy of the arguments. They never assign ``sys.argv``.

argparse and click switches reject ``--flag=true``, so boolean flags never
absorb a value token here regardless of the configured literals. Both
parsers also accept any declared spelling as written (``-h`` next to
``--help`` and ``--host``), so an exact name always wins here.
"""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence

import click

from flagnames.core.config.models import ResolverConfig
from flagnames.core.registry import known_flags_from_argparse, known_flags_from_click
from flagnames.core.resolver import TraceSink, resolve

logger = logging.getLogger(__name__)


def _switch_config(config: ResolverConfig | None) -> ResolverConfig:
    if config is None:
        config = ResolverConfig()
    return config.model_copy(update={"boolean_values": [], "exact_match_wins": True})


def patch_parser_args(
    parser: argparse.ArgumentParser,
    args: Sequence[str],
    config: ResolverConfig | None = None,
    trace: TraceSink | None = None,
) -> list[str]:
    """
    Resolve ``args`` against the options an argparse parser declares.

    Args:
        parser: Parser whose option strings are the known flags
        args: Arguments without the program name
        config: Resolver settings
        trace: Optional per-token trace sink

    Returns:
        New argument list ready for ``parser.parse_args``
    """
    flags = known_flags_from_argparse(parser)
    return resolve(flags, args, _switch_config(config), trace)


def patch_argv(
    parser: argparse.ArgumentParser,
    argv: Sequence[str] | None = None,
    config: ResolverConfig | None = None,
) -> list[str]:
    """
    Resolve the process arguments (``sys.argv[1:]`` by default).

    The result is returned; ``sys.argv`` is left as it was.
    """
    if argv is None:
        argv = sys.argv[1:]
    resolved = patch_parser_args(parser, argv, config)
    logger.debug("patched argv %r -> %r", list(argv), resolved)
    return resolved


def parse_args(
    parser: argparse.ArgumentParser,
    args: Sequence[str] | None = None,
    config: ResolverConfig | None = None,
) -> argparse.Namespace:
    """Resolve abbreviations, then hand the result to ``parser.parse_args``."""
    return parser.parse_args(patch_argv(parser, args, config))


def patch_command_args(
    command: click.Command,
    args: Sequence[str],
    config: ResolverConfig | None = None,
    trace: TraceSink | None = None,
) -> list[str]:
    """
    Resolve ``args`` against the options a click command declares.

    For a Typer app, pass ``typer.main.get_command(app)``.
    """
    flags = known_flags_from_click(command)
    return resolve(flags, args, _switch_config(config), trace)

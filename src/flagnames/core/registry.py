"""
Known flag registry.

Builds the set of flags the resolver matches against, either from compact
textual specs (``verbose:bool``) or from an existing parser declaration
(argparse, click, Typer). Every set handed to the resolver implicitly
contains a boolean ``help`` flag.
"""

from __future__ import annotations

import argparse
from collections.abc import Iterable, Mapping

import click
import typer
from pydantic import ValidationError

from flagnames.core.models import KnownFlag

HELP_FLAG = KnownFlag(name="help", is_boolean=True)

BOOLEAN_KINDS = frozenset({"bool", "boolean"})
VALUE_KINDS = frozenset({"str", "string", "int", "float", "value"})
MULTI_KINDS = frozenset({"multi"})

# argparse nargs that take exactly one value when present
SINGLE_VALUE_NARGS = (None, "?", 1)


class FlagnamesError(Exception):
    """Base error for flagnames."""

    pass


class DuplicateFlagError(FlagnamesError, ValueError):
    """A flag name was declared more than once."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"flag declared more than once: {name!r}")


class FlagSpecError(FlagnamesError, ValueError):
    """A textual flag spec could not be parsed."""

    pass


def with_help(flags: Iterable[KnownFlag]) -> tuple[KnownFlag, ...]:
    """
    Return ``flags`` as a tuple, adding ``help`` when it is missing.

    Raises:
        DuplicateFlagError: If two flags share a name
    """
    seen: set[str] = set()
    result: list[KnownFlag] = []
    for flag in flags:
        if flag.name in seen:
            raise DuplicateFlagError(flag.name)
        seen.add(flag.name)
        result.append(flag)
    if HELP_FLAG.name not in seen:
        result.append(HELP_FLAG)
    return tuple(result)


def parse_flag_spec(spec: str) -> KnownFlag:
    """
    Parse a ``name[:kind]`` flag spec.

    A single leading hyphen keeps the flag single-dash (``-v:bool``); two
    or none give the usual ``--name`` spelling. ``kind`` defaults to a
    value-taking flag; ``multi`` marks one that takes several separate
    values and is therefore never merged with the next token.

    Example:
        >>> parse_flag_spec("verbose:bool")
        KnownFlag(name='verbose', is_boolean=True, single_dash=False, absorbs_value=True)

    Raises:
        FlagSpecError: If the kind is unknown or the name is unusable
    """
    name, _, kind = spec.strip().partition(":")
    kind = kind.strip().lower() or "value"
    absorbs_value = kind not in MULTI_KINDS
    if kind in BOOLEAN_KINDS:
        is_boolean = True
    elif kind in VALUE_KINDS or kind in MULTI_KINDS:
        is_boolean = False
    else:
        raise FlagSpecError(f"unknown flag kind {kind!r} in spec {spec!r}")

    name = name.strip()
    single_dash = name.startswith("-") and not name.startswith("--")
    try:
        return KnownFlag(
            name=name.lstrip("-"),
            is_boolean=is_boolean,
            single_dash=single_dash,
            absorbs_value=absorbs_value,
        )
    except ValidationError as e:
        raise FlagSpecError(f"invalid flag spec {spec!r}") from e


def known_flags_from_specs(specs: Iterable[str]) -> list[KnownFlag]:
    """Parse several flag specs, rejecting repeated names."""
    flags = [parse_flag_spec(spec) for spec in specs]
    with_help(flags)
    return flags


def known_flags_from_mapping(flags: Mapping[str, bool]) -> list[KnownFlag]:
    """Build flags from a ``{name: is_boolean}`` mapping."""
    return [KnownFlag(name=name, is_boolean=is_boolean) for name, is_boolean in flags.items()]


def _flag_from_option(option: str, is_boolean: bool, absorbs_value: bool = True) -> KnownFlag:
    single_dash = not option.startswith("--")
    return KnownFlag(
        name=option.lstrip("-"),
        is_boolean=is_boolean,
        single_dash=single_dash,
        absorbs_value=absorbs_value,
    )


def known_flags_from_argparse(parser: argparse.ArgumentParser) -> list[KnownFlag]:
    """
    Collect every option string an argparse parser declares.

    Actions that consume no arguments (store_true, store_const, count,
    help, BooleanOptionalAction) are boolean. Options taking more than one
    value (``nargs=2``, ``"+"``, ``"*"``) never absorb the next token.
    Positionals and subparsers are skipped.
    """
    flags: list[KnownFlag] = []
    # argparse exposes no public accessor for declared actions
    for action in parser._actions:
        is_boolean = action.nargs == 0
        absorbs_value = action.nargs in SINGLE_VALUE_NARGS
        for option in action.option_strings:
            flags.append(_flag_from_option(option, is_boolean, absorbs_value))
    with_help(flags)
    return flags


def known_flags_from_click(command: click.Command) -> list[KnownFlag]:
    """
    Collect every option a click command declares.

    ``is_flag`` and ``count`` options are boolean. Secondary spellings
    (``--no-color`` for ``--color/--no-color``) are included. Options with
    ``nargs`` other than 1 never absorb the next token.
    """
    flags: list[KnownFlag] = []
    for param in command.params:
        if not isinstance(param, click.Option):
            continue
        is_boolean = bool(param.is_flag or param.count)
        absorbs_value = param.nargs == 1
        for option in [*param.opts, *param.secondary_opts]:
            flags.append(_flag_from_option(option, is_boolean, absorbs_value))
    with_help(flags)
    return flags


def known_flags_from_typer(app: typer.Typer) -> list[KnownFlag]:
    """Collect the options of a single-command Typer app."""
    return known_flags_from_click(typer.main.get_command(app))

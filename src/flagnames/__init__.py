"""
flagnames - abbreviated flag resolution

Rewrites abbreviated command-line flags into the full form a strict
parser accepts, before that parser ever sees them.
"""

__version__ = "0.3.0"

# Re-export the public API for convenience
from flagnames.core.config import ResolverConfig, load_config
from flagnames.core.models import KnownFlag, ResolutionAction, TokenKind, TraceStep
from flagnames.core.patch import parse_args, patch_argv, patch_command_args, patch_parser_args
from flagnames.core.registry import (
    DuplicateFlagError,
    FlagnamesError,
    FlagSpecError,
    known_flags_from_argparse,
    known_flags_from_click,
    known_flags_from_mapping,
    known_flags_from_specs,
    known_flags_from_typer,
    parse_flag_spec,
    with_help,
)
from flagnames.core.resolver import classify_token, resolve

__all__ = [
    "DuplicateFlagError",
    "FlagSpecError",
    "FlagnamesError",
    "KnownFlag",
    "ResolutionAction",
    "ResolverConfig",
    "TokenKind",
    "TraceStep",
    "__version__",
    "classify_token",
    "known_flags_from_argparse",
    "known_flags_from_click",
    "known_flags_from_mapping",
    "known_flags_from_specs",
    "known_flags_from_typer",
    "load_config",
    "parse_args",
    "parse_flag_spec",
    "patch_argv",
    "patch_command_args",
    "patch_parser_args",
    "resolve",
    "with_help",
]

"""
Standardized error handling and exit codes for the flagnames CLI.

Every command reports problems through print_error so the output has the
same shape: what went wrong, why, and what to try next.
"""

from enum import IntEnum

from rich.console import Console
from rich.markup import escape

console = Console()


class ExitCode(IntEnum):
    """Standard exit codes for flagnames CLI operations."""

    SUCCESS = 0
    """Operation completed successfully."""

    GENERAL_ERROR = 1
    """Generic error."""

    USER_ERROR = 2
    """Bad flag spec, bad config, or arguments the parser rejected."""

    SIGINT = 130
    """Terminated by SIGINT (Ctrl+C) - Unix standard."""


def print_error(
    problem: str,
    *,
    reason: str | None = None,
    solution: str | None = None,
) -> None:
    """
    Print a standardized error message with actionable guidance.

    User-supplied text is escaped, so flag specs and argument values are
    never interpreted as Rich markup.

    Args:
        problem: Brief description of what went wrong
        reason: Optional explanation of why it happened
        solution: Optional command or action to fix it
    """
    console.print(f"[red]Error:[/red] {escape(problem)}")

    if reason:
        console.print(f"[dim]{escape(reason)}[/dim]")

    if solution:
        console.print(f"[cyan]→ Try:[/cyan] {escape(solution)}")


def print_invalid_flag_spec_error(spec_error: Exception) -> None:
    """Print error when a --flag spec can't be parsed."""
    print_error(
        str(spec_error),
        reason="Flag specs look like NAME or NAME:KIND, where KIND is bool or value",
        solution="flagnames resolve -f verbose:bool -f prefix -- -v -p x",
    )


def print_invalid_config_error(details: str) -> None:
    """Print error when the merged configuration fails validation."""
    print_error(
        "Invalid flagnames configuration",
        reason=details,
        solution="Check .flagnames.json, ~/.config/flagnames/config.json and FLAGNAMES_* vars",
    )


def print_parse_error(message: str) -> None:
    """Print error when the downstream parser rejects the resolved arguments."""
    print_error(
        f"Arguments rejected: {message}",
        reason="Unknown and ambiguous flags are passed through unchanged",
        solution="Spell out more of the flag name, e.g. -it instead of -i",
    )

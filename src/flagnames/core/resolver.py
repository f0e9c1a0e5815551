"""
Abbreviation resolver.

Rewrites abbreviated flags (``-v``, ``--pre=x``) into the full spelling a
strict parser understands (``--verbose``, ``--prefix=x``). Resolution is
best-effort: unknown and ambiguous flags are passed through untouched so
the downstream parser can report them.

Only ``--`` ends flag interpretation. A bare positional does not, unless
``ResolverConfig.stop_at_positional`` is set. A lone ``-`` is an ordinary
positional (conventionally stdin).
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Sequence

from flagnames.core.config.models import ResolverConfig
from flagnames.core.models import KnownFlag, ResolutionAction, TokenKind, TraceStep
from flagnames.core.registry import with_help

logger = logging.getLogger(__name__)

TraceSink = Callable[[TraceStep], None]


def classify_token(token: str) -> TokenKind:
    """Classify a raw argument token."""
    if token == "--":
        return TokenKind.TERMINATOR
    if token == "-":
        return TokenKind.STDIN
    if token.startswith("-"):
        return TokenKind.FLAG
    return TokenKind.PLAIN


def split_flag_token(token: str) -> tuple[str, str | None]:
    """
    Split a flag token into its bare name and optional inline value.

    Only the first ``=`` separates; the value keeps any further ones.

    Example:
        >>> split_flag_token("--p=a=b")
        ('p', 'a=b')
    """
    head, sep, value = token.partition("=")
    return head.lstrip("-"), (value if sep else None)


def match_flag(
    given_name: str,
    flags: Sequence[KnownFlag],
    exact_match_wins: bool = False,
) -> list[KnownFlag]:
    """
    Return the flags ``given_name`` may refer to.

    Every flag whose name starts with ``given_name`` is a candidate, so
    ``id`` is ambiguous between ``id`` and ``idle``. With
    ``exact_match_wins`` a flag named exactly ``given_name`` is the only
    candidate.
    """
    if exact_match_wins:
        for flag in flags:
            if flag.name == given_name:
                return [flag]
    return [flag for flag in flags if flag.name.startswith(given_name)]


def resolve(
    known_flags: Iterable[KnownFlag],
    args: Sequence[str],
    config: ResolverConfig | None = None,
    trace: TraceSink | None = None,
) -> list[str]:
    """
    Expand abbreviated flags in ``args`` to their full form.

    Args:
        known_flags: Flags the downstream parser accepts. ``help`` is added
            when missing.
        args: Argument sequence, without the program name. Not modified.
        config: Resolver settings (defaults to ``ResolverConfig()``)
        trace: Optional callable receiving one TraceStep per emitted token

    Returns:
        A new argument list. It is shorter than ``args`` only by the number
        of value tokens merged into a preceding flag.

    Raises:
        DuplicateFlagError: If ``known_flags`` repeats a name

    Example:
        >>> flags = [KnownFlag(name="verbose", is_boolean=True),
        ...          KnownFlag(name="prefix")]
        >>> resolve(flags, ["-v", "-p", "x", "a"])
        ['--verbose', '--prefix=x', 'a']
    """
    if config is None:
        config = ResolverConfig()
    flags = with_help(known_flags)
    boolean_values = set(config.boolean_values)

    resolved: list[str] = []
    resolving = True
    i = 0

    def record(step: TraceStep) -> None:
        if config.trace:
            logger.debug("resolve %s", step.describe())
        if trace is not None:
            trace(step)

    while i < len(args):
        token = args[i]
        kind = classify_token(token)
        index = i
        i += 1

        if not resolving:
            resolved.append(token)
            record(
                TraceStep(
                    index=index,
                    token=token,
                    kind=kind,
                    action=ResolutionAction.VERBATIM,
                    emitted=token,
                )
            )
            continue

        if kind is TokenKind.TERMINATOR:
            resolving = False
            resolved.append(token)
            record(
                TraceStep(
                    index=index,
                    token=token,
                    kind=kind,
                    action=ResolutionAction.TERMINATOR,
                    emitted=token,
                )
            )
            continue

        if kind is not TokenKind.FLAG:
            if config.stop_at_positional:
                resolving = False
            resolved.append(token)
            record(
                TraceStep(
                    index=index,
                    token=token,
                    kind=kind,
                    action=ResolutionAction.POSITIONAL,
                    emitted=token,
                )
            )
            continue

        given_name, inline_value = split_flag_token(token)
        # An empty name ("---", "--=x") prefixes everything.
        candidates = (
            match_flag(given_name, flags, config.exact_match_wins) if given_name else list(flags)
        )
        ambiguous = len(candidates) > 1 or not given_name

        if ambiguous or not candidates:
            if ambiguous:
                resolving = False
            resolved.append(token)
            record(
                TraceStep(
                    index=index,
                    token=token,
                    kind=kind,
                    action=(
                        ResolutionAction.AMBIGUOUS if ambiguous else ResolutionAction.UNMATCHED
                    ),
                    given_name=given_name,
                    candidates=[flag.name for flag in candidates],
                    emitted=token,
                )
            )
            continue

        flag = candidates[0]
        rewritten = flag.option
        absorbed: str | None = None

        if inline_value is not None:
            rewritten += f"={inline_value}"
        elif i < len(args):
            following = args[i]
            if (
                flag.absorbs_value
                and not following.startswith("-")
                and (not flag.is_boolean or following in boolean_values)
            ):
                absorbed = following
                rewritten += f"={following}"
                i += 1

        action = ResolutionAction.REWRITTEN if absorbed is None else ResolutionAction.ABSORBED
        resolved.append(rewritten)
        record(
            TraceStep(
                index=index,
                token=token,
                kind=kind,
                action=action,
                given_name=given_name,
                candidates=[flag.name],
                emitted=rewritten,
                absorbed=absorbed,
            )
        )

    if config.trace:
        logger.debug("resolved %d args into %r", len(args), resolved)
    return resolved

"""
Flag and trace data models.

These models describe the flags a downstream parser accepts and the
per-token diagnostics the resolver can report while rewriting arguments.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator


class TokenKind(str, Enum):
    """Classification of a single argument token."""

    TERMINATOR = "terminator"  # "--"
    STDIN = "stdin"  # "-"
    FLAG = "flag"
    PLAIN = "plain"


class ResolutionAction(str, Enum):
    """What the resolver did with a token."""

    REWRITTEN = "rewritten"
    ABSORBED = "absorbed"
    UNMATCHED = "unmatched"
    AMBIGUOUS = "ambiguous"
    TERMINATOR = "terminator"
    POSITIONAL = "positional"
    VERBATIM = "verbatim"


class KnownFlag(BaseModel):
    """
    A flag the downstream parser has been configured to accept.

    The resolver only needs the name and whether the flag is boolean.
    Boolean flags absorb a following value token only when it is one of
    the configured boolean literals. Flags taking several values
    (``nargs=2``, ``nargs="+"``) are renamed but never absorb, since
    ``--name=value`` can carry only one of them.
    """

    name: str = Field(
        min_length=1,
        description="Flag name without leading hyphens",
    )
    is_boolean: bool = Field(
        default=False,
        description="Flag takes a boolean value (or no value at all)",
    )
    single_dash: bool = Field(
        default=False,
        description="Spell the rewritten flag with one hyphen (e.g. -v)",
    )
    absorbs_value: bool = Field(
        default=True,
        description="A following value token may be merged in as --name=value",
    )

    model_config = ConfigDict(frozen=True)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        """Reject names that could never be matched from a token."""
        if v.startswith("-"):
            raise ValueError(f"flag name must not start with '-': {v!r}")
        if "=" in v:
            raise ValueError(f"flag name must not contain '=': {v!r}")
        return v

    @property
    def option(self) -> str:
        """The spelling emitted when a token resolves to this flag."""
        dashes = "-" if self.single_dash else "--"
        return f"{dashes}{self.name}"


class TraceStep(BaseModel):
    """
    Diagnostic record for one input position.

    Steps carry no semantic weight; they exist so callers can explain
    why a token was or wasn't rewritten.
    """

    index: int = Field(ge=0, description="Position of the token in the input")
    token: str
    kind: TokenKind
    action: ResolutionAction
    given_name: str | None = Field(
        default=None,
        description="Flag name with hyphens and inline value stripped",
    )
    candidates: list[str] = Field(default_factory=list)
    emitted: str = Field(description="Token placed in the output")
    absorbed: str | None = Field(
        default=None,
        description="Following value token merged into the flag",
    )

    def describe(self) -> str:
        """Render the step as a single log line."""
        line = f"[{self.index}] {self.token!r} -> {self.emitted!r} ({self.action.value})"
        if self.candidates:
            line += f" candidates={','.join(self.candidates)}"
        return line

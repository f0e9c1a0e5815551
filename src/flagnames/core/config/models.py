"""
Configuration data models for flagnames.

These models define the structure of .flagnames.json and
~/.config/flagnames/config.json files, with validation via Pydantic.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ResolverConfig(BaseModel):
    """
    Settings that shape how abbreviated flags are resolved.

    Passed explicitly to every resolver call; there is no process-wide
    debug switch.
    """

    trace: bool = Field(
        default=False,
        description="Log one DEBUG record per token while resolving",
    )
    stop_at_positional: bool = Field(
        default=False,
        description="Stop resolving at the first bare positional (POSIX style)",
    )
    exact_match_wins: bool = Field(
        default=False,
        description="A flag named exactly by the token beats longer prefix matches",
    )
    boolean_values: list[str] = Field(
        default_factory=lambda: ["true", "false"],
        description="Literal tokens a boolean flag may absorb as its value",
    )

    model_config = ConfigDict(
        extra="allow",  # Allow extra fields for forward compatibility
        validate_assignment=True,
    )

    @field_validator("boolean_values")
    @classmethod
    def validate_boolean_values(cls, v: list[str]) -> list[str]:
        """A flag-like literal could never be absorbed."""
        for value in v:
            if not value or value.startswith("-"):
                raise ValueError(f"invalid boolean literal: {value!r}")
        return v

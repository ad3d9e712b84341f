"""Core data models for sockit."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class SegmentKind(Enum):
    """Role of a segment inside a compiled pattern."""

    LITERAL = "literal"
    PARAMETER = "parameter"


@dataclass(frozen=True)
class Segment:
    """A run of literal text or a single parameter placeholder."""

    kind: SegmentKind
    text: str

    @property
    def is_parameter(self) -> bool:
        return self.kind is SegmentKind.PARAMETER

    @classmethod
    def literal(cls, text: str) -> Segment:
        return cls(SegmentKind.LITERAL, text)

    @classmethod
    def parameter(cls, token: str) -> Segment:
        return cls(SegmentKind.PARAMETER, token)


class PatternMode(Enum):
    """Direction a pattern is used in."""

    INBOUND = "inbound"    # object -> string
    OUTBOUND = "outbound"  # string -> operation


@dataclass(frozen=True)
class MatchResult:
    """Outcome of matching a string against a pattern.

    ``values`` holds one extracted substring per parameter segment, or is
    ``None`` when the string does not conform.
    """

    values: tuple[str, ...] | None = None

    @property
    def conforms(self) -> bool:
        return self.values is not None

    def __bool__(self) -> bool:
        return self.conforms


DOES_NOT_CONFORM = MatchResult()


@dataclass
class SockitConfig:
    """Library and command-line configuration."""

    argument_marker: str = ":"
    construction_prefix: str = "init"
    strict_delimiters: bool = False
    cache_size: int = 128
    log_level: str = "WARNING"

    def validate(self) -> list[str]:
        """Return a list of validation errors (empty if valid)."""
        errors: list[str] = []
        if not self.argument_marker:
            errors.append("argument_marker must not be empty")
        if any(ch in self.argument_marker for ch in "()"):
            errors.append("argument_marker must not contain parentheses")
        if not self.construction_prefix:
            errors.append("construction_prefix must not be empty")
        if self.cache_size < 0:
            errors.append("cache_size must be zero or positive")
        if self.log_level.upper() not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            errors.append(f"Unknown log_level: {self.log_level}")
        return errors

    @property
    def is_valid(self) -> bool:
        return len(self.validate()) == 0

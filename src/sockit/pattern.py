"""The compiled, immutable Pattern value."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from sockit import binder, renderer
from sockit.matcher import match_segments
from sockit.models import MatchResult, PatternMode, Segment


@dataclass(frozen=True)
class Pattern:
    """A template compiled into literal and parameter segments.

    Inbound patterns render strings from objects:

        api.github.com/repos/(owner)/(repo)/issues

    Outbound patterns call operations with values taken from strings:

        github.com/(initWithUsername:)/(repoName:)

    Build instances with :func:`sockit.compile`.
    """

    template: str
    segments: tuple[Segment, ...]
    mode: PatternMode
    key_paths: tuple[str, ...] = ()
    operation_name: str | None = None
    argument_marker: str = ":"
    construction_prefix: str = "init"

    @property
    def parameter_count(self) -> int:
        return sum(1 for s in self.segments if s.is_parameter)

    @property
    def argument_count(self) -> int:
        return self.parameter_count

    @property
    def is_inbound(self) -> bool:
        return self.mode is PatternMode.INBOUND

    @property
    def is_outbound(self) -> bool:
        return self.mode is PatternMode.OUTBOUND

    @property
    def is_constructor(self) -> bool:
        return (
            self.operation_name is not None
            and self.operation_name.startswith(self.construction_prefix)
        )

    def match(self, text: str) -> MatchResult:
        return match_segments(self.segments, text)

    def matches(self, text: str) -> bool:
        """Return True if text matches every literal and fills every parameter."""
        return self.match(text).conforms

    def extract(self, text: str) -> tuple[str, ...] | None:
        """Return the values bound to each parameter, or None if text does not conform."""
        return self.match(text).values

    def parameters(self, text: str) -> dict[str, str] | None:
        """Return extracted values keyed by their parameter tokens."""
        values = self.extract(text)
        if values is None:
            return None
        tokens = [s.text for s in self.segments if s.is_parameter]
        return dict(zip(tokens, values))

    def render(self, obj: Any, **kwargs: Any) -> str:
        return renderer.render(self, obj, **kwargs)

    def bind(self, text: str, target: Any, **kwargs: Any) -> Any:
        return binder.bind(self, text, target, **kwargs)

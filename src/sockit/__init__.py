"""String <-> object coding with parenthesized templates.

Inbound patterns render strings from objects::

    pattern = sockit.compile("api.github.com/users/(username)/gists")
    pattern.render({"username": "jverkoey"})  # 'api.github.com/users/jverkoey/gists'

Outbound patterns call operations with values extracted from strings::

    pattern = sockit.compile("github.com/(initWithUsername:)")
    user = pattern.bind("github.com/jverkoey", GithubUser)
"""

from __future__ import annotations

from typing import Any

__version__ = "0.1.0"

from sockit.cache import PatternCache
from sockit.coercion import ConversionTable, coerce, stringify
from sockit.errors import (
    ArgumentCoercionError,
    ClassificationError,
    CoercionError,
    CompileError,
    ConfigError,
    InvocationError,
    NonConformingInputError,
    PatternModeError,
    ResolutionError,
    SockitError,
)
from sockit.invocation import ReflectiveInvoker, operation
from sockit.keypath import KeyPathResolver, KeyValueCoding, resolve_key_path
from sockit.models import DOES_NOT_CONFORM, MatchResult, PatternMode, Segment, SockitConfig
from sockit.parser import compile_pattern
from sockit.pattern import Pattern


def compile(template: str, config: SockitConfig | None = None) -> Pattern:
    """Compile a template into a Pattern. Raises CompileError."""
    return compile_pattern(template, config)


def matches(pattern: Pattern, text: str) -> bool:
    return pattern.matches(text)


def extract(pattern: Pattern, text: str) -> tuple[str, ...] | None:
    return pattern.extract(text)


def render(pattern: Pattern, obj: Any, **kwargs: Any) -> str:
    return pattern.render(obj, **kwargs)


def bind(pattern: Pattern, text: str, target: Any, **kwargs: Any) -> Any:
    return pattern.bind(text, target, **kwargs)


def string_from_object(template: str, obj: Any) -> str:
    """Compile template and render it against obj in one step."""
    return compile_pattern(template).render(obj)


__all__ = [
    "ArgumentCoercionError",
    "ClassificationError",
    "CoercionError",
    "CompileError",
    "ConfigError",
    "ConversionTable",
    "DOES_NOT_CONFORM",
    "InvocationError",
    "KeyPathResolver",
    "KeyValueCoding",
    "MatchResult",
    "NonConformingInputError",
    "Pattern",
    "PatternCache",
    "PatternMode",
    "PatternModeError",
    "ReflectiveInvoker",
    "ResolutionError",
    "Segment",
    "SockitConfig",
    "SockitError",
    "bind",
    "coerce",
    "compile",
    "extract",
    "matches",
    "operation",
    "render",
    "resolve_key_path",
    "string_from_object",
    "stringify",
]

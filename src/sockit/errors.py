"""Exception taxonomy for sockit."""

from __future__ import annotations

from typing import Any


class SockitError(Exception):
    """Base class for every error raised by sockit."""


class CompileError(SockitError):
    """Raised when a template cannot be compiled into a pattern."""

    def __init__(self, message: str, template: str | None = None) -> None:
        super().__init__(message)
        self.template = template


class ClassificationError(CompileError):
    """Raised when a template mixes keyword tokens and key-path tokens."""

    def __init__(
        self,
        template: str,
        keyword_tokens: list[str],
        key_path_tokens: list[str],
    ) -> None:
        super().__init__(
            f"Template '{template}' mixes operation keywords "
            f"{keyword_tokens} with key paths {key_path_tokens}",
            template,
        )
        self.keyword_tokens = keyword_tokens
        self.key_path_tokens = key_path_tokens


class PatternModeError(SockitError):
    """Raised when a pattern is used in the wrong direction."""


class ResolutionError(SockitError):
    """Raised when a key path cannot be resolved against an object."""

    def __init__(self, key_path: str, reason: str) -> None:
        super().__init__(f"Cannot resolve key path '{key_path}': {reason}")
        self.key_path = key_path
        self.reason = reason


class NonConformingInputError(SockitError):
    """Raised when binding is attempted with a string that does not conform."""

    def __init__(self, template: str, text: str) -> None:
        super().__init__(f"'{text}' does not conform to pattern '{template}'")
        self.template = template
        self.text = text


class CoercionError(SockitError):
    """Raised by a converter when text cannot become the expected type."""


class ArgumentCoercionError(SockitError):
    """Raised when an extracted value cannot be converted to its argument type."""

    def __init__(self, position: int, text: str, expected: Any) -> None:
        name = getattr(expected, "__name__", None) or repr(expected)
        super().__init__(
            f"Argument {position}: cannot convert '{text}' to {name}"
        )
        self.position = position
        self.text = text
        self.expected = expected


class InvocationError(SockitError):
    """Raised when an operation does not exist or fails while running."""

    def __init__(self, operation: str, reason: str) -> None:
        super().__init__(f"Cannot invoke '{operation}': {reason}")
        self.operation = operation
        self.reason = reason


class ConfigError(SockitError):
    """Raised when a configuration file is malformed."""

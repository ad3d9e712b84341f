"""Conversion between extracted text and typed argument values."""

from __future__ import annotations

import inspect
import types
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any, Callable, Protocol, Union, get_args, get_origin, runtime_checkable

from sockit.errors import CoercionError

TRUE_WORDS = frozenset({"1", "true", "yes", "y", "t", "on"})
FALSE_WORDS = frozenset({"0", "false", "no", "n", "f", "off"})


@runtime_checkable
class ConverterProtocol(Protocol):
    def coerce(self, text: str, expected: Any) -> Any:
        ...

    def stringify(self, value: Any) -> str:
        ...


def _to_bool(text: str) -> bool:
    word = text.strip().lower()
    if word in TRUE_WORDS:
        return True
    if word in FALSE_WORDS:
        return False
    raise ValueError(f"not a boolean: {text!r}")


def _to_decimal(text: str) -> Decimal:
    try:
        return Decimal(text)
    except InvalidOperation as exc:
        raise ValueError(f"not a decimal: {text!r}") from exc


def _to_enum(text: str, enum_type: type[Enum]) -> Enum:
    for member in enum_type:
        if str(member.value) == text:
            return member
    try:
        return enum_type[text]
    except KeyError as exc:
        raise ValueError(f"not a member of {enum_type.__name__}: {text!r}") from exc


def _is_passthrough(expected: Any) -> bool:
    return expected in (str, Any, object, inspect.Parameter.empty, None)


def _is_union(expected: Any) -> bool:
    origin = get_origin(expected)
    return origin is Union or origin is types.UnionType


class ConversionTable:
    """Pluggable table of text-to-type converters.

    ``str``, ``int``, ``float``, ``bool`` and ``Decimal`` are registered by
    default; ``Enum`` subclasses and ``Optional``/union annotations are
    handled structurally.
    """

    def __init__(self) -> None:
        self._converters: dict[type, Callable[[str], Any]] = {
            str: str,
            int: int,
            float: float,
            bool: _to_bool,
            Decimal: _to_decimal,
        }

    def register(self, target_type: type, converter: Callable[[str], Any]) -> None:
        """Register (or replace) the converter used for target_type."""
        self._converters[target_type] = converter

    def coerce(self, text: str, expected: Any) -> Any:
        if _is_passthrough(expected):
            return text

        if _is_union(expected):
            return self._coerce_union(text, expected)

        converter = self._converters.get(expected)
        if converter is not None:
            try:
                return converter(text)
            except (TypeError, ValueError) as exc:
                raise CoercionError(f"Cannot convert {text!r} to {expected!r}: {exc}") from exc

        if isinstance(expected, type) and issubclass(expected, Enum):
            try:
                return _to_enum(text, expected)
            except ValueError as exc:
                raise CoercionError(str(exc)) from exc

        raise CoercionError(f"No converter registered for {expected!r}")

    def _coerce_union(self, text: str, expected: Any) -> Any:
        members = get_args(expected)
        if type(None) in members and text == "":
            return None
        for member in members:
            if member is type(None):
                continue
            try:
                return self.coerce(text, member)
            except CoercionError:
                continue
        raise CoercionError(f"Cannot convert {text!r} to any of {members!r}")

    def stringify(self, value: Any) -> str:
        if value is None:
            return ""
        if isinstance(value, bool):
            return "true" if value else "false"
        if isinstance(value, Enum):
            return self.stringify(value.value)
        if isinstance(value, float):
            return repr(value)
        return str(value)


DEFAULT_CONVERTER = ConversionTable()


def coerce(text: str, expected: Any) -> Any:
    """Convert text to expected using the default conversion table."""
    return DEFAULT_CONVERTER.coerce(text, expected)


def stringify(value: Any) -> str:
    """Render a value as text using the default conversion table."""
    return DEFAULT_CONVERTER.stringify(value)

"""Inbound rendering: fill a pattern's parameters from an object."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from sockit.coercion import DEFAULT_CONVERTER, ConverterProtocol
from sockit.errors import PatternModeError
from sockit.keypath import KeyPathResolver, KeyPathResolverProtocol
from sockit.models import PatternMode

if TYPE_CHECKING:
    from sockit.pattern import Pattern


def render(
    pattern: Pattern,
    obj: Any,
    *,
    resolver: KeyPathResolverProtocol | None = None,
    converter: ConverterProtocol | None = None,
) -> str:
    """Return the pattern's template with every key path resolved against obj.

    Literal text is copied verbatim; no escaping is applied.
    """
    if pattern.mode is not PatternMode.INBOUND:
        raise PatternModeError(
            f"Cannot render outbound pattern '{pattern.template}' from an object"
        )
    resolver = resolver or KeyPathResolver()
    converter = converter or DEFAULT_CONVERTER

    parts: list[str] = []
    for segment in pattern.segments:
        if segment.is_parameter:
            value = resolver.resolve(obj, segment.text)
            parts.append(converter.stringify(value))
        else:
            parts.append(segment.text)
    return "".join(parts)

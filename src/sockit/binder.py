"""Outbound binding: turn a conforming string into an operation call."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from sockit.coercion import DEFAULT_CONVERTER, ConverterProtocol
from sockit.errors import (
    ArgumentCoercionError,
    CoercionError,
    InvocationError,
    NonConformingInputError,
    PatternModeError,
)
from sockit.invocation import InvokerProtocol, ReflectiveInvoker
from sockit.models import PatternMode

if TYPE_CHECKING:
    from sockit.pattern import Pattern

logger = logging.getLogger(__name__)


def bind(
    pattern: Pattern,
    text: str,
    target: Any,
    *,
    operation: str | None = None,
    invoker: InvokerProtocol | None = None,
    converter: ConverterProtocol | None = None,
) -> Any:
    """Invoke the pattern's operation on target with values extracted from text.

    If target is a class and the operation is an initializer, a new instance
    is constructed and returned. Otherwise the operation's return value is
    returned (``None`` for operations without one).

    ``operation`` overrides the pattern's own operation name, which also
    allows binding with an inbound pattern.
    """
    values = pattern.extract(text)
    if values is None:
        raise NonConformingInputError(pattern.template, text)

    name = operation or pattern.operation_name
    if name is None:
        raise PatternModeError(
            f"Pattern '{pattern.template}' is {PatternMode.INBOUND.value}; "
            "pass an explicit operation to bind it"
        )

    invoker = invoker or ReflectiveInvoker(
        marker=pattern.argument_marker,
        construction_prefix=pattern.construction_prefix,
    )
    converter = converter or DEFAULT_CONVERTER

    expected = invoker.argument_types(target, name, len(values))
    if len(expected) != len(values):
        raise InvocationError(
            name,
            f"invoker describes {len(expected)} argument(s), pattern provides {len(values)}",
        )
    args: list[Any] = []
    for position, (value, expected_type) in enumerate(zip(values, expected)):
        try:
            args.append(converter.coerce(value, expected_type))
        except CoercionError as exc:
            raise ArgumentCoercionError(position, value, expected_type) from exc

    logger.debug("Binding %r to %s with %d argument(s)", text, name, len(args))
    return invoker.invoke(target, name, args)

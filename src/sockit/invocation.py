"""Dynamic dispatch of operations named by outbound patterns.

An operation name is the concatenation of keyword tokens, each ending with
the argument marker, e.g. ``initWithUsername:repoName:``. It is looked up on
the target's type in this order:

1. methods declared with ``@operation("initWithUsername:repoName:")``
2. the conventional Python name, ``init_with_username_repo_name``
3. for ``setX:`` on an instance, assignment to the public attribute ``x``
"""

from __future__ import annotations

import functools
import inspect
import logging
import re
import sys
import typing
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Any, Callable, Protocol, TypeVar, runtime_checkable

from sockit.errors import InvocationError, SockitError

logger = logging.getLogger(__name__)

OPERATION_ATTRIBUTE = "__sockit_operation__"

F = TypeVar("F", bound=Callable[..., Any])


@runtime_checkable
class InvokerProtocol(Protocol):
    def argument_types(self, target: Any, name: str, count: int) -> tuple[Any, ...]:
        ...

    def invoke(self, target: Any, name: str, args: Sequence[Any]) -> Any:
        ...


def operation(name: str) -> Callable[[F], F]:
    """Declare the operation name a method answers to."""

    def decorator(func: F) -> F:
        setattr(func, OPERATION_ATTRIBUTE, name)
        return func

    return decorator


_CAMEL_BOUNDARY = re.compile(r"([a-z0-9])([A-Z])")
_ACRONYM_BOUNDARY = re.compile(r"([A-Z]+)([A-Z][a-z])")


def snake_case(word: str) -> str:
    """Convert a camelCase keyword to snake_case (``repoURL`` -> ``repo_url``)."""
    word = _ACRONYM_BOUNDARY.sub(r"\1_\2", word)
    word = _CAMEL_BOUNDARY.sub(r"\1_\2", word)
    return word.lower()


def python_name(operation_name: str, marker: str = ":") -> str:
    """Map an operation name to its conventional Python method name."""
    keywords = [k for k in operation_name.split(marker) if k]
    return "_".join(snake_case(k) for k in keywords)


@functools.lru_cache(maxsize=None)
def operation_table(cls: type) -> MappingProxyType:
    """Return the declared operation names of cls mapped to attribute names."""
    table: dict[str, str] = {}
    for klass in reversed(cls.__mro__):
        for attribute, member in vars(klass).items():
            name = getattr(member, OPERATION_ATTRIBUTE, None)
            if name:
                table[name] = attribute
    return MappingProxyType(table)


def _type_hints(obj: Any) -> dict[str, Any]:
    try:
        return typing.get_type_hints(obj)
    except (NameError, TypeError) as exc:
        logger.debug("Cannot evaluate annotations of %r: %s", obj, exc)
        return {}


class OperationKind(Enum):
    CONSTRUCT = "construct"    # decorated __init__, called through the class
    INITIALIZE = "initialize"  # allocate, then run an initializer method
    CALL = "call"
    ASSIGN = "assign"


@dataclass(frozen=True)
class ResolvedOperation:
    name: str
    kind: OperationKind
    attribute: str


class ReflectiveInvoker:
    """Default invoker built on per-type operation tables."""

    def __init__(self, marker: str = ":", construction_prefix: str = "init") -> None:
        self.marker = marker
        self.construction_prefix = construction_prefix

    def resolve(self, target: Any, name: str) -> ResolvedOperation:
        """Find which attribute of target implements the named operation."""
        is_class = isinstance(target, type)
        owner = target if is_class else type(target)
        constructing = is_class and name.startswith(self.construction_prefix)

        attribute = operation_table(owner).get(name)
        if attribute is None:
            candidate = python_name(name, self.marker)
            if (
                candidate
                and not candidate.startswith("_")
                and callable(getattr(target, candidate, None))
            ):
                attribute = candidate

        if attribute is not None:
            if attribute == "__init__":
                if not constructing:
                    raise InvocationError(name, "construction needs a class target")
                return ResolvedOperation(name, OperationKind.CONSTRUCT, attribute)
            kind = OperationKind.INITIALIZE if constructing else OperationKind.CALL
            return ResolvedOperation(name, kind, attribute)

        setter = self._setter_attribute(target, name)
        if setter is not None:
            return ResolvedOperation(name, OperationKind.ASSIGN, setter)

        raise InvocationError(
            name, f"{owner.__name__} has no operation '{python_name(name, self.marker)}'"
        )

    def argument_types(self, target: Any, name: str, count: int) -> tuple[Any, ...]:
        resolved = self.resolve(target, name)
        if resolved.kind is OperationKind.ASSIGN:
            if count != 1:
                raise InvocationError(name, f"assignment takes 1 argument, got {count}")
            return (_attribute_hint(type(target), resolved.attribute),)

        func, skip_self = self._signature_source(target, resolved)
        return _parameter_types(func, skip_self, name, count)

    def invoke(self, target: Any, name: str, args: Sequence[Any]) -> Any:
        resolved = self.resolve(target, name)
        logger.debug(
            "Dispatching %s as %s of %r", name, resolved.kind.value, resolved.attribute
        )
        try:
            if resolved.kind is OperationKind.CONSTRUCT:
                return target(*args)
            if resolved.kind is OperationKind.INITIALIZE:
                instance = target.__new__(target)
                result = getattr(instance, resolved.attribute)(*args)
                return instance if result is None else result
            if resolved.kind is OperationKind.ASSIGN:
                setattr(target, resolved.attribute, args[0])
                return None
            return getattr(target, resolved.attribute)(*args)
        except SockitError:
            raise
        except Exception as exc:
            raise InvocationError(name, f"{type(exc).__name__}: {exc}") from exc

    def _signature_source(
        self, target: Any, resolved: ResolvedOperation
    ) -> tuple[Callable[..., Any], bool]:
        """Return the callable describing the signature and whether to skip self."""
        if resolved.kind is OperationKind.CONSTRUCT:
            return target.__init__, True
        member = getattr(target, resolved.attribute)
        if resolved.kind is OperationKind.INITIALIZE:
            static = inspect.getattr_static(target, resolved.attribute)
            return member, inspect.isfunction(member) and not isinstance(static, staticmethod)
        return member, False

    def _setter_attribute(self, target: Any, name: str) -> str | None:
        if isinstance(target, type) or not name.endswith(self.marker):
            return None
        keywords = [k for k in name.split(self.marker) if k]
        if len(keywords) != 1:
            return None
        keyword = keywords[0]
        if not keyword.startswith("set") or len(keyword) < 4 or not keyword[3].isupper():
            return None

        attribute = snake_case(keyword[3].lower() + keyword[4:])
        if attribute.startswith("_"):
            return None
        if hasattr(target, attribute) or attribute in _type_hints(type(target)):
            return attribute
        return None


def _attribute_hint(cls: type, attribute: str) -> Any:
    """Return the evaluated class-level annotation of attribute, or Any."""
    hints = _type_hints(cls)
    if attribute in hints:
        return hints[attribute]
    for klass in cls.__mro__:
        annotation = inspect.get_annotations(klass).get(attribute)
        if annotation is not None:
            module = sys.modules.get(klass.__module__)
            return _evaluate_annotation(annotation, vars(module) if module else {})
    return Any


def _parameter_hints(
    func: Callable[..., Any], params: Sequence[inspect.Parameter]
) -> dict[str, Any]:
    """Return the evaluated annotation of each parameter of func.

    When the annotations cannot be evaluated together, each one is evaluated
    on its own and those that still fail become ``Any``.
    """
    try:
        return typing.get_type_hints(func)
    except (NameError, TypeError) as exc:
        logger.debug("Evaluating annotations of %r one by one: %s", func, exc)
    globalns = getattr(getattr(func, "__func__", func), "__globals__", {})
    return {p.name: _evaluate_annotation(p.annotation, globalns) for p in params}


def _evaluate_annotation(annotation: Any, globalns: dict[str, Any]) -> Any:
    if not isinstance(annotation, str):
        return annotation
    try:
        return eval(annotation, globalns)
    except (NameError, AttributeError, SyntaxError, TypeError) as exc:
        logger.debug("Cannot evaluate annotation %r: %s", annotation, exc)
        return Any


def _parameter_types(
    func: Callable[..., Any], skip_self: bool, name: str, count: int
) -> tuple[Any, ...]:
    try:
        signature = inspect.signature(func)
    except (TypeError, ValueError):
        return (Any,) * count

    params = list(signature.parameters.values())
    hints = _parameter_hints(func, params)
    if skip_self:
        params = params[1:]

    positional = [
        p for p in params
        if p.kind in (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)
    ]
    variadic = next((p for p in params if p.kind is inspect.Parameter.VAR_POSITIONAL), None)
    required = [p for p in positional if p.default is inspect.Parameter.empty]

    if count < len(required) or (count > len(positional) and variadic is None):
        raise InvocationError(
            name, f"expects {len(positional)} argument(s), pattern provides {count}"
        )

    types = [hints.get(p.name, p.annotation) for p in positional[:count]]
    if variadic is not None and count > len(positional):
        extra = hints.get(variadic.name, variadic.annotation)
        types.extend([extra] * (count - len(positional)))
    return tuple(types)

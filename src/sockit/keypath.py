"""Key-path resolution against objects, mappings and collections.

Grammar (informal EBNF):
    key_path   := component ('.' component)*
    component  := identifier | '@' operator
    operator   := 'count' | 'sum' | 'avg' | 'min' | 'max'
                | 'unionOfObjects' | 'distinctUnionOfObjects'

A collection operator applies to the collection resolved so far; the rest of
the path is resolved against each element before the operator aggregates.
"""

from __future__ import annotations

from collections.abc import Mapping, Set
from typing import Any, Protocol, runtime_checkable

from sockit.errors import ResolutionError


@runtime_checkable
class KeyValueCoding(Protocol):
    """Objects that answer key lookups themselves."""

    def value_for_key(self, key: str) -> Any:
        ...


@runtime_checkable
class KeyPathResolverProtocol(Protocol):
    def resolve(self, obj: Any, key_path: str) -> Any:
        ...


def _is_collection(value: Any) -> bool:
    if isinstance(value, (str, bytes, bytearray, Mapping)):
        return False
    return isinstance(value, (list, tuple, Set))


class KeyPathResolver:
    """Default resolver for dotted key paths with collection operators."""

    OPERATORS = (
        "count",
        "sum",
        "avg",
        "min",
        "max",
        "unionOfObjects",
        "distinctUnionOfObjects",
    )

    def resolve(self, obj: Any, key_path: str) -> Any:
        if not key_path:
            raise ResolutionError(key_path, "empty key path")
        keys = key_path.split(".")
        if any(not key for key in keys):
            raise ResolutionError(key_path, "empty path component")
        return self._resolve_keys(obj, keys, key_path)

    def _resolve_keys(self, value: Any, keys: list[str], key_path: str) -> Any:
        for i, key in enumerate(keys):
            if key.startswith("@"):
                return self._apply_operator(value, key[1:], keys[i + 1:], key_path)
            value = self._value_for_key(value, key, key_path)
        return value

    def _value_for_key(self, value: Any, key: str, key_path: str) -> Any:
        if key.startswith("_"):
            raise ResolutionError(key_path, f"private key '{key}' is not accessible")

        if isinstance(value, KeyValueCoding):
            try:
                return value.value_for_key(key)
            except (KeyError, AttributeError) as exc:
                raise ResolutionError(key_path, f"no value for key '{key}'") from exc

        if isinstance(value, Mapping):
            if key not in value:
                raise ResolutionError(key_path, f"no value for key '{key}'")
            return value[key]

        if _is_collection(value):
            return [self._value_for_key(item, key, key_path) for item in value]

        if value is None:
            raise ResolutionError(key_path, f"cannot read '{key}' from None")

        try:
            return getattr(value, key)
        except AttributeError as exc:
            raise ResolutionError(
                key_path, f"{type(value).__name__} has no attribute '{key}'"
            ) from exc

    def _apply_operator(
        self, value: Any, operator: str, rest: list[str], key_path: str
    ) -> Any:
        if operator not in self.OPERATORS:
            raise ResolutionError(key_path, f"unknown collection operator '@{operator}'")
        if not _is_collection(value):
            raise ResolutionError(
                key_path, f"'@{operator}' needs a collection, got {type(value).__name__}"
            )

        if operator == "count":
            return len(value)
        if not rest:
            raise ResolutionError(key_path, f"'@{operator}' needs a key path to its right")

        items = [self._resolve_keys(item, rest, key_path) for item in value]
        try:
            if operator == "sum":
                return sum(items)
            if operator == "avg":
                return sum(items) / len(items) if items else 0
            if operator == "min":
                return min(items) if items else None
            if operator == "max":
                return max(items) if items else None
        except TypeError as exc:
            raise ResolutionError(key_path, f"'@{operator}' failed: {exc}") from exc

        if operator == "unionOfObjects":
            return items
        distinct: list[Any] = []
        for item in items:
            if item not in distinct:
                distinct.append(item)
        return distinct


def resolve_key_path(obj: Any, key_path: str) -> Any:
    """Resolve a key path with the default resolver."""
    return KeyPathResolver().resolve(obj, key_path)

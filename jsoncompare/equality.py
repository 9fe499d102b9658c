"""Equality and hashing adapters so JSON documents can act as dict/set keys."""

from __future__ import annotations

from typing import Optional

from .engine import JsonComparer, JsonInput
from .hasher import ValueHasher
from .models import ComparisonOptions
from .values import JsonValue, parse_json


class JsonEqualityComparer:
    """
    Semantic equality and a matching hash over JSON text or trees.

    ``equals(a, b)`` implies ``hash(a) == hash(b)`` for the same options.
    """

    def __init__(self, options: Optional[ComparisonOptions] = None):
        self.comparer = JsonComparer(options)
        self.hasher = ValueHasher(self.comparer.options)

    @property
    def options(self) -> ComparisonOptions:
        return self.comparer.options

    def equals(self, left: JsonInput, right: JsonInput) -> bool:
        if left is None and right is None:
            return True
        if left is None or right is None:
            return False
        return self.comparer.equals(left, right)

    def hash(self, value: JsonInput) -> int:
        if value is None:
            return 0
        if not isinstance(value, JsonValue):
            value = parse_json(value, "json")
        return self.hasher.hash(value)

    def key(self, value: JsonInput) -> JsonKey:
        return JsonKey(value, self)


class JsonKey:
    """
    Wraps a JSON document so that it hashes and compares semantically.

        seen = {JsonKey('{"a": 1, "b": 2}')}
        JsonKey('{"b": 2, "a": 1.0}') in seen  # True
    """

    __slots__ = ("value", "comparer", "_hash")

    def __init__(self, value: JsonInput, comparer: Optional[JsonEqualityComparer] = None):
        self.comparer = comparer or JsonEqualityComparer()
        self.value = parse_json(value, "json") if isinstance(value, (str, bytes)) else value
        self._hash = self.comparer.hash(self.value)

    def __hash__(self) -> int:
        return self._hash

    def __eq__(self, other) -> bool:
        if not isinstance(other, JsonKey):
            return NotImplemented
        return self._hash == other._hash and self.comparer.equals(self.value, other.value)

    def __repr__(self) -> str:
        text = "null" if self.value is None else self.value.raw_text()
        return f"JsonKey({text})"

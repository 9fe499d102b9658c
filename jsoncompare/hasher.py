"""Structural hashing of JsonValue trees, consistent with comparison equality."""

from __future__ import annotations

import hashlib
from typing import Optional

from .comparators import canonical_number, canonical_string
from .models import ComparisonOptions, NullComparison
from .values import JsonKind, JsonObject, JsonValue, check_depth


class ValueHasher:
    """
    Computes a 64-bit hash over a JsonValue tree.

    Any two values the comparer reports as equal under the same options hash
    equal: object members are hashed in name order (first occurrence of each
    name only), numbers and strings hash their canonical semantic form unless
    comparison is exact, and null members are skipped when nulls compare
    semantically. Array elements are hashed in order.
    """

    def __init__(self, options: Optional[ComparisonOptions] = None):
        self.options = options or ComparisonOptions()

    def hash(self, value: JsonValue) -> int:
        check_depth(value, "value")
        digest = hashlib.blake2b(digest_size=8)
        self._update(digest, value)
        return int.from_bytes(digest.digest(), "big")

    @staticmethod
    def _feed(digest, text: str):
        data = text.encode("utf-8", "surrogatepass")
        digest.update(len(data).to_bytes(8, "big"))
        digest.update(data)

    def _update(self, digest, value: JsonValue):
        self._feed(digest, value.kind.value)

        if value.kind == JsonKind.NULL:
            return
        elif value.kind == JsonKind.BOOLEAN:
            self._feed(digest, "true" if value.value else "false")
        elif value.kind == JsonKind.NUMBER:
            self._feed(digest, canonical_number(value, self.options.value_comparison))
        elif value.kind == JsonKind.STRING:
            self._feed(digest, canonical_string(value, self.options.value_comparison))
        elif value.kind == JsonKind.ARRAY:
            self._feed(digest, str(len(value.items)))
            for item in value.items:
                self._update(digest, item)
        elif value.kind == JsonKind.OBJECT:
            members = self._members(value)
            self._feed(digest, str(len(members)))
            for key in sorted(members):
                self._feed(digest, key)
                self._update(digest, members[key])
        else:
            raise ValueError(f"Unexpected JSON kind {value.kind}")

    def _members(self, value: JsonObject) -> dict:
        name_key = self.options.property_name_comparison.key
        skip_nulls = self.options.null_comparison == NullComparison.SEMANTIC

        members = {}
        for name, member in value.members:
            key = name_key(name)
            if key not in members:
                members[key] = member

        if skip_nulls:
            members = {k: v for k, v in members.items() if v.kind != JsonKind.NULL}
        return members

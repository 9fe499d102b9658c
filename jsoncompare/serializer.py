"""Serializers that turn typed Python values into JSON text for comparison."""

from __future__ import annotations

import dataclasses
import json
import uuid
from collections.abc import Mapping
from datetime import date, datetime, time
from decimal import Decimal
from enum import Enum
from typing import Any

from .values import JsonValue, from_python


class JsonSerializer:
    """Interface for the serializer injected into value comparisons."""

    def serialize(self, value: Any) -> str:
        raise NotImplementedError

    def clone(self) -> JsonSerializer:
        raise NotImplementedError


class StandardJsonSerializer(JsonSerializer):
    """
    Compact JSON serializer for plain data and common Python types.

    Handles dataclasses, objects exposing ``to_dict()``, enums, decimals
    (written with full precision), UUIDs, dates and times, sets and
    JsonValue trees.

    Args:
        exclude_none: Drop object members whose value is None
    """

    def __init__(self, exclude_none: bool = False):
        self.exclude_none = exclude_none

    def serialize(self, value: Any) -> str:
        return from_python(self.to_data(value)).raw_text()

    def clone(self) -> StandardJsonSerializer:
        return StandardJsonSerializer(exclude_none=self.exclude_none)

    def to_data(self, value: Any) -> Any:
        """Reduce a value to JSON-compatible Python data."""
        if value is None or isinstance(value, (bool, int, float, Decimal, str, JsonValue)):
            return value
        if isinstance(value, Enum):
            return self.to_data(value.value)
        if isinstance(value, uuid.UUID):
            return str(value)
        if isinstance(value, (datetime, date, time)):
            return value.isoformat()
        if dataclasses.is_dataclass(value) and not isinstance(value, type):
            return self._object({
                f.name: getattr(value, f.name) for f in dataclasses.fields(value)
            })
        if isinstance(value, Mapping):
            return self._object(value)
        if isinstance(value, (list, tuple)):
            return [self.to_data(item) for item in value]
        if isinstance(value, (set, frozenset)):
            items = [self.to_data(item) for item in value]
            try:
                return sorted(items)
            except TypeError:
                return sorted(items, key=lambda item: json.dumps(item, default=str))
        to_dict = getattr(value, "to_dict", None)
        if callable(to_dict):
            return self.to_data(to_dict())

        raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")

    def _object(self, members: Mapping) -> dict:
        result = {}
        for name, member in members.items():
            if isinstance(name, Enum):
                name = name.value
            if not isinstance(name, str):
                raise TypeError(f"Object keys must be strings, got {type(name).__name__}")
            if member is None and self.exclude_none:
                continue
            result[name] = self.to_data(member)
        return result

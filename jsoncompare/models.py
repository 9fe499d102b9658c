"""Data models for the jsoncompare engine."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from .exceptions import ConfigError
from .values import JsonValue, to_python


class ValueComparison(Enum):
    EXACT = "exact"
    SEMANTIC = "semantic"


class NullComparison(Enum):
    STRICT = "strict"
    SEMANTIC = "semantic"


class NameComparison(Enum):
    """How two names (property names or paths) are matched."""
    ORDINAL = "ordinal"
    IGNORE_CASE = "ignore_case"

    def key(self, name: str) -> str:
        """Normalize a name so equal names produce equal keys."""
        if self is NameComparison.IGNORE_CASE:
            return name.casefold()
        return name

    def equals(self, left: str, right: str) -> bool:
        return self.key(left) == self.key(right)


class DifferenceKind(Enum):
    KIND_MISMATCH = "KIND_MISMATCH"
    VALUE_MISMATCH = "VALUE_MISMATCH"
    MISSING_ON_LEFT = "MISSING_ON_LEFT"
    MISSING_ON_RIGHT = "MISSING_ON_RIGHT"
    ARRAY_LENGTH_MISMATCH = "ARRAY_LENGTH_MISMATCH"


_ENUM_OPTIONS = {
    "value_comparison": ValueComparison,
    "null_comparison": NullComparison,
    "path_comparison": NameComparison,
    "property_name_comparison": NameComparison,
}


@dataclass(frozen=True)
class ComparisonOptions:
    """
    Settings for a single comparison.

    Instances are immutable; use ``clone`` to derive a variant.
    """
    value_comparison: ValueComparison = ValueComparison.SEMANTIC
    null_comparison: NullComparison = NullComparison.STRICT
    max_differences: int = 100
    path_comparison: NameComparison = NameComparison.IGNORE_CASE
    property_name_comparison: NameComparison = NameComparison.ORDINAL
    preamble: Optional[str] = None

    def __post_init__(self):
        if isinstance(self.max_differences, bool) or not isinstance(self.max_differences, int):
            raise ConfigError(f"max_differences must be an integer, got {self.max_differences!r}")
        if self.max_differences < 1:
            raise ConfigError(f"max_differences must be at least 1, got {self.max_differences}")
        for name, enum_type in _ENUM_OPTIONS.items():
            if not isinstance(getattr(self, name), enum_type):
                raise ConfigError(
                    f"{name} must be a {enum_type.__name__}, got {getattr(self, name)!r}"
                )

    def clone(self, **changes) -> ComparisonOptions:
        """Return a copy with the given fields replaced."""
        return dataclasses.replace(self, **changes)

    def to_dict(self) -> dict:
        return {
            "value_comparison": self.value_comparison.value,
            "null_comparison": self.null_comparison.value,
            "max_differences": self.max_differences,
            "path_comparison": self.path_comparison.value,
            "property_name_comparison": self.property_name_comparison.value,
            "preamble": self.preamble,
        }

    @classmethod
    def from_dict(cls, data: dict, source: Optional[str] = None) -> ComparisonOptions:
        """Build options from plain configuration data (enum values as strings)."""
        if data is None:
            return cls()
        if not isinstance(data, dict):
            raise ConfigError("options must be a mapping", source)

        known = {f.name for f in dataclasses.fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigError(f"unknown option(s): {', '.join(unknown)}", source)

        kwargs = {}
        for name, value in data.items():
            enum_type = _ENUM_OPTIONS.get(name)
            if enum_type is not None and not isinstance(value, enum_type):
                try:
                    value = enum_type(str(value).lower())
                except ValueError:
                    allowed = ", ".join(m.value for m in enum_type)
                    raise ConfigError(
                        f"invalid {name} '{value}' (expected one of: {allowed})", source
                    )
            kwargs[name] = value

        try:
            return cls(**kwargs)
        except ConfigError as e:
            raise ConfigError(e.message, source) from e


@dataclass(frozen=True)
class Difference:
    """A single difference found during comparison."""
    path: str
    kind: DifferenceKind
    left: Optional[JsonValue] = None
    right: Optional[JsonValue] = None

    @property
    def message(self) -> str:
        if self.kind == DifferenceKind.MISSING_ON_LEFT:
            return "Does not exist in left JSON."
        if self.kind == DifferenceKind.MISSING_ON_RIGHT:
            return "Does not exist in right JSON."
        if self.kind == DifferenceKind.ARRAY_LENGTH_MISMATCH:
            return f"Array lengths are not equal: {len(self.left)} != {len(self.right)}."
        if self.kind == DifferenceKind.KIND_MISMATCH:
            return f"Kind is not equal: {self.left.kind.value} != {self.right.kind.value}."
        return f"Value is not equal: {self.left.raw_text()} != {self.right.raw_text()}."

    def __str__(self) -> str:
        return f"Path '{self.path}': {self.message}"

    def to_dict(self) -> dict:
        return {
            "path": self.path,
            "kind": self.kind.value,
            "left": to_python(self.left),
            "right": to_python(self.right),
            "message": self.message,
        }


@dataclass(frozen=True)
class ComparisonResult:
    """
    Outcome of one comparison.

    ``truncated`` is set once the difference cap was reached; the
    differences listed are then only the first ``max_differences`` found.
    """
    left: JsonValue
    right: JsonValue
    max_differences: int
    differences: tuple = field(default_factory=tuple)
    truncated: bool = False

    @property
    def difference_count(self) -> int:
        return len(self.differences)

    @property
    def are_equal(self) -> bool:
        return not self.differences

    def has_differences(self) -> bool:
        return bool(self.differences)

    def to_display_string(self) -> str:
        if not self.differences:
            return "No differences detected."

        lines = [str(d) for d in self.differences]
        if self.truncated:
            lines.append(
                f"Maximum difference count of '{self.max_differences}' found; comparison stopped."
            )
        return "\n".join(lines)

    def __str__(self) -> str:
        return self.to_display_string()

    def to_dict(self) -> dict:
        return {
            "are_equal": self.are_equal,
            "truncated": self.truncated,
            "max_differences": self.max_differences,
            "differences": [d.to_dict() for d in self.differences],
        }


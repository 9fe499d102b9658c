"""Bounded collection of differences."""

from __future__ import annotations

from typing import Optional

from .models import ComparisonResult, Difference, DifferenceKind
from .values import JsonValue


class DifferenceCollector:
    """
    Accumulates differences up to ``max_differences``.

    Once full, further additions are dropped and traversal is expected to
    stop iterating siblings (see ``is_full``).
    """

    def __init__(self, max_differences: int):
        if max_differences < 1:
            raise ValueError(f"max_differences must be at least 1, got {max_differences}")
        self.max_differences = max_differences
        self.differences: list[Difference] = []

    def __len__(self) -> int:
        return len(self.differences)

    @property
    def is_full(self) -> bool:
        return len(self.differences) >= self.max_differences

    def add(
        self,
        path: str,
        kind: DifferenceKind,
        left: Optional[JsonValue] = None,
        right: Optional[JsonValue] = None
    ) -> bool:
        """Record a difference; returns False when the cap was already reached."""
        if self.is_full:
            return False
        self.differences.append(Difference(path=path, kind=kind, left=left, right=right))
        return True

    def to_result(self, left: JsonValue, right: JsonValue) -> ComparisonResult:
        return ComparisonResult(
            left=left,
            right=right,
            max_differences=self.max_differences,
            differences=tuple(self.differences),
            truncated=self.is_full,
        )

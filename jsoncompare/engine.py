"""Main comparison engine for jsoncompare."""

from __future__ import annotations

import logging
from typing import Any, Iterable, Optional, Union

from .collector import DifferenceCollector
from .comparators import numbers_equal, strings_equal
from .config import get_default_options
from .exceptions import SerializationError, ValidationError
from .models import ComparisonOptions, ComparisonResult, DifferenceKind, NullComparison
from .paths import PathTracker
from .serializer import JsonSerializer, StandardJsonSerializer
from .values import JSON_NULL, JsonKind, JsonObject, JsonValue, check_depth, parse_json

logger = logging.getLogger(__name__)

JsonInput = Union[str, bytes, JsonValue, None]


class JsonComparer:
    """
    Structural JSON comparer where object member order is not significant.

    Walks both trees in lock-step and records a typed difference wherever
    they diverge:

    - a different JSON kind at the same path
    - unequal scalar values (exact or semantic, per options)
    - members present on one side only
    - arrays of different length (elements are then not compared)

    Paths listed as ignored are skipped entirely. Traversal stops once
    ``max_differences`` have been recorded.
    """

    def __init__(
        self,
        options: Optional[ComparisonOptions] = None,
        serializer: Optional[JsonSerializer] = None
    ):
        """
        Initialize the comparer.

        Args:
            options: Comparison options (a snapshot of the defaults if not provided)
            serializer: Serializer used by ``compare_values``
        """
        self.options = options if options is not None else get_default_options()
        self.serializer = serializer or StandardJsonSerializer()

    def compare_values(
        self,
        left: Any,
        right: Any,
        ignore_paths: Optional[Iterable[str]] = None
    ) -> ComparisonResult:
        """Serialize two typed values to JSON and compare the results."""
        left_json = self._serialize(left, "left")
        right_json = self._serialize(right, "right")
        return self.compare_json(left_json, right_json, ignore_paths)

    def compare_json(
        self,
        left: Union[str, bytes],
        right: Union[str, bytes],
        ignore_paths: Optional[Iterable[str]] = None
    ) -> ComparisonResult:
        """
        Parse and compare two JSON texts.

        Raises:
            JsonParseError: When either text is not valid JSON
        """
        left_tree = parse_json(left, "left")
        right_tree = parse_json(right, "right")
        return self.compare_trees(left_tree, right_tree, ignore_paths)

    def compare_trees(
        self,
        left: Optional[JsonValue],
        right: Optional[JsonValue],
        ignore_paths: Optional[Iterable[str]] = None
    ) -> ComparisonResult:
        """
        Compare two parsed JSON trees; None on either side is a JSON null.

        Args:
            left: The left (expected) tree
            right: The right (actual) tree
            ignore_paths: Paths to exclude, e.g. ``items[0].price`` or ``items.price``

        Returns:
            ComparisonResult with the differences found
        """
        left = self._tree(left, "left")
        right = self._tree(right, "right")

        tracker = PathTracker(ignore_paths, self.options.path_comparison)
        collector = DifferenceCollector(self.options.max_differences)
        self._compare(left, right, tracker, collector)

        result = collector.to_result(left, right)
        logger.debug(
            "Compared JSON: %d difference(s)%s",
            result.difference_count,
            " (maximum reached)" if result.truncated else ""
        )
        return result

    def equals(self, left: JsonInput, right: JsonInput) -> bool:
        """True when no difference exists; stops at the first one found."""
        left_tree = self._coerce(left, "left")
        right_tree = self._coerce(right, "right")

        tracker = PathTracker(path_comparison=self.options.path_comparison)
        collector = DifferenceCollector(1)
        self._compare(left_tree, right_tree, tracker, collector)
        return len(collector) == 0

    def _compare(
        self,
        left: JsonValue,
        right: JsonValue,
        tracker: PathTracker,
        collector: DifferenceCollector
    ):
        """Compare two nodes at the tracker's current position."""
        if left.kind != right.kind:
            collector.add(tracker.path, DifferenceKind.KIND_MISMATCH, left, right)
            return

        kind = left.kind
        if kind == JsonKind.NULL:
            pass
        elif kind == JsonKind.BOOLEAN:
            if left.value != right.value:
                collector.add(tracker.path, DifferenceKind.VALUE_MISMATCH, left, right)
        elif kind == JsonKind.STRING:
            if not strings_equal(left, right, self.options.value_comparison):
                collector.add(tracker.path, DifferenceKind.VALUE_MISMATCH, left, right)
        elif kind == JsonKind.NUMBER:
            if not numbers_equal(left, right, self.options.value_comparison):
                collector.add(tracker.path, DifferenceKind.VALUE_MISMATCH, left, right)
        elif kind == JsonKind.ARRAY:
            self._compare_arrays(left, right, tracker, collector)
        elif kind == JsonKind.OBJECT:
            self._compare_objects(left, right, tracker, collector)
        else:
            raise ValueError(f"Unexpected JSON kind {kind}")

    def _compare_arrays(self, left, right, tracker, collector):
        """Compare arrays index-by-index (order matters)."""
        if len(left) != len(right):
            collector.add(tracker.path, DifferenceKind.ARRAY_LENGTH_MISMATCH, left, right)
            return

        for i, (left_item, right_item) in enumerate(zip(left.items, right.items)):
            with tracker.index(i) as entered:
                if entered:
                    self._compare(left_item, right_item, tracker, collector)
            if collector.is_full:
                return

    def _compare_objects(
        self,
        left: JsonObject,
        right: JsonObject,
        tracker: PathTracker,
        collector: DifferenceCollector
    ):
        """Compare two objects member by member, regardless of member order."""
        name_key = self.options.property_name_comparison.key
        null_is_missing = self.options.null_comparison == NullComparison.SEMANTIC

        for name, left_value in left.members:
            with tracker.field(name) as entered:
                if entered:
                    right_value = right.get(name, name_key)
                    if right_value is not None:
                        self._compare(left_value, right_value, tracker, collector)
                    elif not (null_is_missing and left_value.kind == JsonKind.NULL):
                        collector.add(tracker.path, DifferenceKind.MISSING_ON_RIGHT, left_value, None)
            if collector.is_full:
                return

        for name, right_value in right.members:
            with tracker.field(name) as entered:
                if entered and left.get(name, name_key) is None:
                    if not (null_is_missing and right_value.kind == JsonKind.NULL):
                        collector.add(tracker.path, DifferenceKind.MISSING_ON_LEFT, None, right_value)
            if collector.is_full:
                return

    def _serialize(self, value: Any, argument: str) -> str:
        if isinstance(value, JsonValue):
            return value.raw_text()
        try:
            return self.serializer.serialize(value)
        except Exception as e:
            raise SerializationError(argument, _type_name(value), str(e)) from e

    @staticmethod
    def _tree(value: Optional[JsonValue], argument: str) -> JsonValue:
        if value is None:
            return JSON_NULL
        if not isinstance(value, JsonValue):
            raise ValidationError(
                f"{argument} must be a JsonValue",
                {"type": type(value).__name__}
            )
        check_depth(value, argument)
        return value

    @classmethod
    def _coerce(cls, value: JsonInput, argument: str) -> JsonValue:
        if isinstance(value, (str, bytes, bytearray)):
            return parse_json(value, argument)
        return cls._tree(value, argument)


def _type_name(value: Any) -> str:
    if value is None:
        return "null"
    cls = type(value)
    return f"{cls.__module__}.{cls.__qualname__}"


def compare_json(
    left: Union[str, bytes],
    right: Union[str, bytes],
    ignore_paths: Optional[Iterable[str]] = None,
    options: Optional[ComparisonOptions] = None
) -> ComparisonResult:
    """
    Convenience function to compare two JSON texts.

    Args:
        left: The left (expected) JSON text
        right: The right (actual) JSON text
        ignore_paths: Paths to exclude from the comparison
        options: Comparison options (defaults if not provided)

    Returns:
        ComparisonResult
    """
    return JsonComparer(options).compare_json(left, right, ignore_paths)


def compare_trees(
    left: Optional[JsonValue],
    right: Optional[JsonValue],
    ignore_paths: Optional[Iterable[str]] = None,
    options: Optional[ComparisonOptions] = None
) -> ComparisonResult:
    """Convenience function to compare two parsed JSON trees."""
    return JsonComparer(options).compare_trees(left, right, ignore_paths)


def compare_values(
    left: Any,
    right: Any,
    ignore_paths: Optional[Iterable[str]] = None,
    options: Optional[ComparisonOptions] = None,
    serializer: Optional[JsonSerializer] = None
) -> ComparisonResult:
    """Convenience function to serialize and compare two typed values."""
    return JsonComparer(options, serializer).compare_values(left, right, ignore_paths)

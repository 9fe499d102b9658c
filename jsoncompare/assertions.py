"""Test assertions built on the comparer; failures raise AssertionError."""

from __future__ import annotations

from typing import Any, Optional, Union

from .config import get_default_options
from .engine import JsonComparer
from .models import ComparisonOptions, ComparisonResult
from .serializer import JsonSerializer


def _fail(options: ComparisonOptions, message: str):
    if options.preamble:
        message = f"{options.preamble}\n{message}"
    raise AssertionError(message)


def _check_nulls(options: ComparisonOptions, expected: Any, actual: Any) -> bool:
    """Return True when the null checks settle the assertion."""
    if expected is None and actual is None:
        return True
    if expected is None:
        _fail(options, "Expected and Actual values are not equal: NULL != value.")
    if actual is None:
        _fail(options, "Expected and Actual values are not equal: value != NULL.")
    return False


def _check_result(options: ComparisonOptions, result: ComparisonResult):
    if result.has_differences():
        _fail(options, f"Expected and Actual values are not equal:\n{result.to_display_string()}")


def assert_json(
    expected: Optional[Union[str, bytes]],
    actual: Optional[Union[str, bytes]],
    *ignore_paths: str,
    options: Optional[ComparisonOptions] = None
):
    """
    Assert that two JSON texts are equal.

    Args:
        expected: The expected JSON text
        actual: The actual JSON text
        *ignore_paths: Paths to exclude from the comparison
        options: Comparison options (a snapshot of the defaults if not provided)
    """
    options = options or get_default_options()
    if _check_nulls(options, expected, actual):
        return
    _check_result(options, JsonComparer(options).compare_json(expected, actual, ignore_paths))


def assert_values(
    expected: Any,
    actual: Any,
    *ignore_paths: str,
    options: Optional[ComparisonOptions] = None,
    serializer: Optional[JsonSerializer] = None
):
    """Assert that two typed values serialize to equal JSON."""
    options = options or get_default_options()
    if _check_nulls(options, expected, actual):
        return
    comparer = JsonComparer(options, serializer.clone() if serializer else None)
    _check_result(options, comparer.compare_values(expected, actual, ignore_paths))

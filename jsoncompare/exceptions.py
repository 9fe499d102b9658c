"""Custom exceptions for the jsoncompare engine."""

from __future__ import annotations

from typing import Optional


class JsonCompareError(Exception):
    """Base exception for jsoncompare errors."""
    pass


class ValidationError(JsonCompareError):
    """Raised when input validation fails."""
    def __init__(self, message: str, details: dict = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class JsonParseError(ValidationError):
    """Raised when JSON text handed to a text-based entry point is not valid JSON."""
    def __init__(
        self,
        argument: str,
        reason: str,
        line: Optional[int] = None,
        column: Optional[int] = None
    ):
        location = f" (line {line}, column {column})" if line is not None else ""
        super().__init__(
            f"JSON is not considered valid for '{argument}'{location}: {reason}",
            {"argument": argument, "line": line, "column": column, "reason": reason}
        )
        self.argument = argument
        self.reason = reason
        self.line = line
        self.column = column


class SerializationError(ValidationError):
    """Raised when a value cannot be serialized to JSON; the cause is chained."""
    def __init__(self, argument: str, value_type: str, reason: str):
        super().__init__(
            f"Failed to serialize value '{value_type}' to JSON for '{argument}': {reason}",
            {"argument": argument, "type": value_type}
        )
        self.argument = argument
        self.value_type = value_type


class MaxDepthExceededError(ValidationError):
    """Raised when a value nests containers deeper than the maximum depth."""
    def __init__(self, depth: int, argument: str):
        super().__init__(
            f"Maximum depth ({depth}) exceeded for '{argument}'",
            {"argument": argument, "depth": depth}
        )
        self.depth = depth
        self.argument = argument


class ConfigError(JsonCompareError):
    """Raised when comparison configuration is invalid."""
    def __init__(self, message: str, source: Optional[str] = None):
        super().__init__(f"{source}: {message}" if source else message)
        self.message = message
        self.source = source

"""Immutable JSON value model and the parser adapter that produces it."""

from __future__ import annotations

import json
import math
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from enum import Enum
from functools import cached_property
from json.decoder import JSONArray, scanstring
from json.scanner import py_make_scanner
from typing import Any, Callable, Iterator, Optional, Union

from .exceptions import JsonParseError, MaxDepthExceededError, ValidationError

# Deepest container nesting accepted from parsed text or converted data
MAX_DEPTH = 64


class JsonKind(Enum):
    NULL = "Null"
    BOOLEAN = "Boolean"
    NUMBER = "Number"
    STRING = "String"
    ARRAY = "Array"
    OBJECT = "Object"


class JsonValue:
    """Base of the closed set of JSON node types."""

    kind: JsonKind

    def raw_text(self) -> str:
        """Compact JSON text of this node."""
        raise NotImplementedError


@dataclass(frozen=True)
class JsonNull(JsonValue):
    kind = JsonKind.NULL

    def raw_text(self) -> str:
        return "null"


@dataclass(frozen=True)
class JsonBoolean(JsonValue):
    value: bool
    kind = JsonKind.BOOLEAN

    def raw_text(self) -> str:
        return "true" if self.value else "false"


@dataclass(frozen=True)
class JsonNumber(JsonValue):
    """A number kept as the literal text it was written with."""
    raw: str
    kind = JsonKind.NUMBER

    @cached_property
    def decimal_value(self) -> Optional[Decimal]:
        try:
            value = Decimal(self.raw)
        except (InvalidOperation, ValueError):
            return None
        return value if value.is_finite() else None

    @cached_property
    def float_value(self) -> Optional[float]:
        try:
            value = float(self.raw)
        except ValueError:
            return None
        return value if math.isfinite(value) else None

    def raw_text(self) -> str:
        return self.raw


@dataclass(frozen=True)
class JsonString(JsonValue):
    """
    A string value.

    ``raw`` holds the literal source text (quotes and escapes included) when
    the string was parsed, so exact comparisons see it as written.
    """
    value: str
    raw: Optional[str] = field(default=None, compare=False)
    kind = JsonKind.STRING

    def raw_text(self) -> str:
        if self.raw is not None:
            return self.raw
        return json.dumps(self.value, ensure_ascii=False)


@dataclass(frozen=True)
class JsonArray(JsonValue):
    items: tuple = ()
    kind = JsonKind.ARRAY

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator[JsonValue]:
        return iter(self.items)

    def raw_text(self) -> str:
        return "[" + ",".join(item.raw_text() for item in self.items) + "]"


@dataclass(frozen=True)
class JsonObject(JsonValue):
    """
    An object as the ordered sequence of its (name, value) members.

    Duplicate names are kept as written; lookups return the first match.
    """
    members: tuple = ()
    kind = JsonKind.OBJECT

    def __len__(self) -> int:
        return len(self.members)

    def get(
        self,
        name: str,
        key: Optional[Callable[[str], str]] = None
    ) -> Optional[JsonValue]:
        """Find the first member matching ``name``, optionally via a key function."""
        if key is None:
            for member_name, value in self.members:
                if member_name == name:
                    return value
            return None

        wanted = key(name)
        for member_name, value in self.members:
            if key(member_name) == wanted:
                return value
        return None

    def raw_text(self) -> str:
        return "{" + ",".join(
            f"{json.dumps(name, ensure_ascii=False)}:{value.raw_text()}"
            for name, value in self.members
        ) + "}"


JSON_NULL = JsonNull()


_CONTAINERS = (JsonArray, JsonObject, list, tuple, dict)


def _reject_constant(name: str):
    raise ValueError(f"{name} is not a valid JSON number")


def _wrap(value: Any) -> JsonValue:
    """Wrap the scalars the json module hands back without a parse hook."""
    if isinstance(value, JsonValue):
        return value
    if value is None:
        return JSON_NULL
    if isinstance(value, bool):
        return JsonBoolean(value)
    raise TypeError(f"Unexpected parsed value of type {type(value).__name__}")


def _object_from_pairs(pairs: list) -> JsonObject:
    return JsonObject(tuple((name, _wrap(value)) for name, value in pairs))


def _parse_string(s: str, end: int, strict: bool = True):
    value, new_end = scanstring(s, end, strict)
    return JsonString(value, s[end - 1:new_end]), new_end


def _parse_array(s_and_end, scan_once):
    values, end = JSONArray(s_and_end, scan_once)
    return JsonArray(tuple(_wrap(item) for item in values)), end


class _TreeDecoder(json.JSONDecoder):
    """Decoder producing JsonValue nodes directly, strings with their source text."""

    def __init__(self):
        super().__init__(
            parse_int=JsonNumber,
            parse_float=JsonNumber,
            parse_constant=_reject_constant,
            object_pairs_hook=_object_from_pairs,
        )
        self.parse_string = _parse_string
        self.parse_array = _parse_array
        self.scan_once = py_make_scanner(self)


def _children(node: Any) -> Iterator[Any]:
    if isinstance(node, JsonArray):
        return iter(node.items)
    if isinstance(node, JsonObject):
        return (value for _, value in node.members)
    if isinstance(node, dict):
        return iter(node.values())
    return iter(node)


def exceeds_depth(value: Any, max_depth: int = MAX_DEPTH) -> bool:
    """
    True when arrays/objects in ``value`` nest deeper than ``max_depth``.

    Walks JsonValue trees and plain Python data alike, without recursion.
    """
    pending = [(value, 1)]
    while pending:
        node, depth = pending.pop()
        if not isinstance(node, _CONTAINERS):
            continue
        if depth > max_depth:
            return True
        pending.extend((child, depth + 1) for child in _children(node))
    return False


def check_depth(value: Any, argument: str, max_depth: int = MAX_DEPTH):
    if exceeds_depth(value, max_depth):
        raise MaxDepthExceededError(max_depth, argument)


def parse_json(text: Union[str, bytes], argument: str = "json") -> JsonValue:
    """
    Parse JSON text into a JsonValue tree.

    Numbers and strings keep their literal text and objects keep every
    member pair, so exact comparisons see the document as it was written.
    Documents nesting deeper than ``MAX_DEPTH`` are rejected.

    Args:
        text: The JSON text
        argument: Name of the argument being parsed, used in error messages

    Returns:
        The root JsonValue
    """
    if text is None:
        raise ValidationError(f"{argument} is required")
    if isinstance(text, (bytes, bytearray)):
        try:
            text = bytes(text).decode("utf-8")
        except UnicodeDecodeError as e:
            raise JsonParseError(argument, f"not valid UTF-8: {e}") from e
    if not isinstance(text, str):
        raise ValidationError(
            f"{argument} must be JSON text",
            {"type": type(text).__name__}
        )

    try:
        parsed = json.loads(text, cls=_TreeDecoder)
    except json.JSONDecodeError as e:
        raise JsonParseError(argument, e.msg, e.lineno, e.colno) from e
    except RecursionError as e:
        raise JsonParseError(argument, f"maximum depth ({MAX_DEPTH}) exceeded") from e
    except ValueError as e:
        raise JsonParseError(argument, str(e)) from e

    if exceeds_depth(parsed):
        raise JsonParseError(argument, f"maximum depth ({MAX_DEPTH}) exceeded")
    return _wrap(parsed)


def from_python(obj: Any, argument: str = "value") -> JsonValue:
    """Convert already-decoded Python JSON data into a JsonValue tree."""
    check_depth(obj, argument)
    return _from_python(obj)


def _from_python(obj: Any) -> JsonValue:
    if isinstance(obj, JsonValue):
        return obj
    if obj is None:
        return JSON_NULL
    if isinstance(obj, bool):
        return JsonBoolean(obj)
    if isinstance(obj, int):
        return JsonNumber(str(obj))
    if isinstance(obj, float):
        if not math.isfinite(obj):
            raise ValidationError(f"Non-finite number {obj!r} has no JSON representation")
        return JsonNumber(repr(obj))
    if isinstance(obj, Decimal):
        if not obj.is_finite():
            raise ValidationError(f"Non-finite number {obj!r} has no JSON representation")
        return JsonNumber(str(obj))
    if isinstance(obj, str):
        return JsonString(obj)
    if isinstance(obj, (list, tuple)):
        return JsonArray(tuple(_from_python(item) for item in obj))
    if isinstance(obj, dict):
        members = []
        for name, value in obj.items():
            if not isinstance(name, str):
                raise ValidationError(
                    "Object member names must be strings",
                    {"name": repr(name)}
                )
            members.append((name, _from_python(value)))
        return JsonObject(tuple(members))

    raise ValidationError(
        f"Value of type {type(obj).__name__} is not JSON data",
        {"type": type(obj).__name__}
    )


def to_python(value: Optional[JsonValue]) -> Any:
    """
    Convert a JsonValue tree back into plain Python data.

    Integer literals too long for ``int()`` come back as ``Decimal``.
    """
    if value is None or value.kind == JsonKind.NULL:
        return None
    if value.kind == JsonKind.BOOLEAN:
        return value.value
    if value.kind == JsonKind.NUMBER:
        if any(c in value.raw for c in ".eE"):
            return float(value.raw)
        try:
            return int(value.raw)
        except ValueError:
            return Decimal(value.raw)
    if value.kind == JsonKind.STRING:
        return value.value
    if value.kind == JsonKind.ARRAY:
        return [to_python(item) for item in value.items]
    if value.kind == JsonKind.OBJECT:
        result = {}
        for name, member in value.members:
            result.setdefault(name, to_python(member))
        return result

    raise ValueError(f"Unexpected JSON kind {value.kind}")

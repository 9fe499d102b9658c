"""Comparison functions for scalar JSON values."""

from __future__ import annotations

import re
import uuid
from datetime import date, datetime, timedelta, timezone
from decimal import Decimal
from typing import NamedTuple, Optional

from .models import ValueComparison
from .values import JsonNumber, JsonString


_ISO_DATETIME = re.compile(
    r'^(?P<date>[0-9]{4}-[0-9]{2}-[0-9]{2})'
    r'(?:T(?P<hour>[0-9]{2}):(?P<minute>[0-9]{2})'
    r'(?::(?P<second>[0-9]{2})(?:\.(?P<fraction>[0-9]{1,7}))?)?'
    r'(?P<offset>Z|[+-][0-9]{2}:[0-9]{2})?)?\Z'
)

_GUID = re.compile(
    r'^[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}\Z'
)


class ParsedDateTime(NamedTuple):
    """A parsed ISO-8601 value; offset-aware values are held in UTC."""
    value: datetime
    ticks: int  # 100ns units below the microsecond (0-9)
    has_offset: bool

    def same_instant(self, other: ParsedDateTime) -> bool:
        return (self.value, self.ticks) == (other.value, other.ticks)

    def canonical(self) -> str:
        prefix = "dto" if self.has_offset else "dt"
        return f"{prefix}:{self.value.isoformat()}:{self.ticks}"


def parse_offset(text: str) -> timezone:
    if text == "Z":
        return timezone.utc
    sign = -1 if text[0] == "-" else 1
    hours, minutes = int(text[1:3]), int(text[4:6])
    if hours > 14 or minutes > 59:
        raise ValueError(f"Offset out of range: {text}")
    return timezone(sign * timedelta(hours=hours, minutes=minutes))


def parse_datetime(text: str) -> Optional[ParsedDateTime]:
    """
    Parse an ISO-8601 extended date or date-time string.

    Accepts ``YYYY-MM-DD`` optionally followed by ``THH:MM[:SS[.fffffff]]``
    and a ``Z`` or ``+HH:MM`` offset.

    Returns:
        ParsedDateTime, or None when the text is not a date-time
    """
    match = _ISO_DATETIME.match(text)
    if not match:
        return None

    try:
        day = date.fromisoformat(match.group("date"))
        fraction = (match.group("fraction") or "").ljust(7, "0")
        ticks = int(fraction)
        value = datetime(
            day.year,
            day.month,
            day.day,
            int(match.group("hour") or 0),
            int(match.group("minute") or 0),
            int(match.group("second") or 0),
            ticks // 10,
        )
        offset = match.group("offset")
        if offset:
            value = value.replace(tzinfo=parse_offset(offset)).astimezone(timezone.utc)
    except (ValueError, OverflowError):
        return None

    return ParsedDateTime(value, ticks % 10, bool(offset))


def parse_guid(text: str) -> Optional[uuid.UUID]:
    """Parse a hyphenated (36 character) GUID/UUID, case-insensitively."""
    if not _GUID.match(text):
        return None
    return uuid.UUID(text)


def canonical_decimal(value: Decimal) -> str:
    """Exact text for a decimal that is equal for all numerically equal inputs."""
    sign, digits, exponent = value.as_tuple()
    digits = list(digits)
    if not any(digits):
        return "0"
    while digits[-1] == 0:
        digits.pop()
        exponent += 1
    return f"{'-' if sign else ''}{''.join(map(str, digits))}e{exponent}"


def strings_equal(
    left: JsonString,
    right: JsonString,
    value_comparison: ValueComparison
) -> bool:
    """
    Compare two strings.

    Exact comparison uses the literal text, escapes included. Semantic
    comparison uses the decoded text, then tries, in order, date-time with
    offset, date-time and GUID, using the first form both sides parse as.
    """
    if value_comparison == ValueComparison.EXACT:
        return left.raw_text() == right.raw_text()
    if left.value == right.value:
        return True

    left_dt = parse_datetime(left.value)
    right_dt = parse_datetime(right.value)
    if left_dt is not None and right_dt is not None:
        # an offset-aware value never equals a local one
        return left_dt.has_offset == right_dt.has_offset and left_dt.same_instant(right_dt)

    left_guid = parse_guid(left.value)
    right_guid = parse_guid(right.value)
    if left_guid is not None and right_guid is not None:
        return left_guid == right_guid

    return False


def numbers_equal(
    left: JsonNumber,
    right: JsonNumber,
    value_comparison: ValueComparison
) -> bool:
    """
    Compare two numbers.

    Exact comparison uses the literal text. Semantic comparison uses exact
    decimal values, falling back to IEEE doubles only when either side has
    no decimal value.
    """
    if left.raw == right.raw:
        return True
    if value_comparison == ValueComparison.EXACT:
        return False

    if left.decimal_value is not None and right.decimal_value is not None:
        return left.decimal_value == right.decimal_value

    if left.float_value is not None and right.float_value is not None:
        return left.float_value == right.float_value

    return False


def canonical_string(value: JsonString, value_comparison: ValueComparison) -> str:
    """Hash input for a string, consistent with ``strings_equal``."""
    if value_comparison == ValueComparison.EXACT:
        return f"raw:{value.raw_text()}"

    parsed = parse_datetime(value.value)
    if parsed is not None:
        return parsed.canonical()

    guid = parse_guid(value.value)
    if guid is not None:
        return f"guid:{guid}"

    return f"s:{value.value}"


def canonical_number(value: JsonNumber, value_comparison: ValueComparison) -> str:
    """
    Hash input for a number, consistent with ``numbers_equal``.

    Semantic hashing prefers the double: decimals that are equal are also
    equal as doubles, and the double is what equality falls back to when a
    decimal is missing.
    """
    if value_comparison == ValueComparison.EXACT:
        return f"raw:{value.raw}"
    if value.float_value is not None:
        # -0.0 and 0.0 compare equal
        return f"dbl:{value.float_value + 0.0!r}"
    if value.decimal_value is not None:
        return f"dec:{canonical_decimal(value.decimal_value)}"
    return f"raw:{value.raw}"

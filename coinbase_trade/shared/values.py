"""Value conversion helpers shared by the request and response types."""

import re
from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation
from typing import Any, Optional

# RFC3339 fractions carry 1 to 9 digits; fromisoformat wants exactly 6 on 3.10.
_FRACTION = re.compile(r"\.(\d+)")

ZERO = Decimal(0)


def parse_decimal(value: Any) -> Decimal:
    """Parse a decimal string from the API.

    Empty strings and ``None`` are read as zero, matching how the API leaves
    numeric fields blank.
    """
    if value is None or value == "":
        return ZERO
    try:
        return Decimal(str(value))
    except InvalidOperation:
        raise ValueError(f"not a decimal: {value!r}")


def format_decimal(value: Decimal) -> str:
    """Format a decimal in its canonical string form, without exponent."""
    text = format(value, "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text or "0"


def is_zero_decimal(value: Optional[Decimal]) -> bool:
    return value is None or value == ZERO


def _microseconds(match: "re.Match") -> str:
    return "." + match.group(1)[:6].ljust(6, "0")


def parse_time(value: Optional[str]) -> Optional[datetime]:
    """Parse an RFC3339 timestamp into an aware datetime."""
    if not value:
        return None
    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    text = _FRACTION.sub(_microseconds, text, count=1)
    parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def format_time(value: datetime) -> str:
    """Format a datetime as RFC3339 in UTC with second precision.

    Naive datetimes are taken to be UTC already.
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


def from_unix(value: Any) -> datetime:
    """Convert Unix seconds (int or decimal string) into an aware UTC datetime."""
    return datetime.fromtimestamp(int(value), tz=timezone.utc)


def to_unix(value: datetime) -> int:
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return int(value.timestamp())

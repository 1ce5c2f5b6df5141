"""Shared utilities used by the request and response types."""

from .values import (
    ZERO,
    parse_decimal,
    format_decimal,
    is_zero_decimal,
    parse_time,
    format_time,
    from_unix,
    to_unix,
)

__all__ = [
    "ZERO",
    "parse_decimal",
    "format_decimal",
    "is_zero_decimal",
    "parse_time",
    "format_time",
    "from_unix",
    "to_unix",
]

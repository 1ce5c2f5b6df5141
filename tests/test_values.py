"""Tests for the shared value conversion helpers."""

from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from coinbase_trade.shared import format_decimal, format_time, parse_decimal, parse_time


class TestParseTime:
    @pytest.mark.parametrize(
        "text, micros",
        [
            ("2023-02-05T16:57:32.5Z", 500000),
            ("2023-02-05T16:57:32.52962Z", 529620),
            ("2023-02-05T16:57:32.529624Z", 529624),
            ("2023-02-05T16:57:32.529624781Z", 529624),
        ],
    )
    def test_fraction_digits(self, text, micros):
        parsed = parse_time(text)

        assert parsed == datetime(2023, 2, 5, 16, 57, 32, micros, tzinfo=timezone.utc)

    def test_without_fraction(self):
        assert parse_time("2023-02-05T16:57:32Z") == datetime(2023, 2, 5, 16, 57, 32, tzinfo=timezone.utc)

    def test_offset_kept(self):
        parsed = parse_time("2023-02-05T16:57:32.25+02:00")

        assert parsed.utcoffset() == timedelta(hours=2)
        assert parsed.microsecond == 250000

    def test_empty_is_none(self):
        assert parse_time("") is None
        assert parse_time(None) is None

    def test_format_is_utc_seconds(self):
        value = datetime(2023, 2, 5, 18, 57, 32, 529624, tzinfo=timezone(timedelta(hours=2)))

        assert format_time(value) == "2023-02-05T16:57:32Z"


class TestDecimals:
    def test_blank_is_zero(self):
        assert parse_decimal("") == Decimal(0)
        assert parse_decimal(None) == Decimal(0)

    def test_invalid_raises(self):
        with pytest.raises(ValueError):
            parse_decimal("abc")

    def test_format_strips_trailing_zeros(self):
        assert format_decimal(Decimal("1.2500")) == "1.25"
        assert format_decimal(Decimal("1E+2")) == "100"

"""Tests for query parameter encoding."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal
from typing import Optional

import pytest

from coinbase_trade.api.error import EncodingError
from coinbase_trade.api.params import encode_params, query_field
from coinbase_trade.api.types import (
    ListFillsParams,
    ListOrdersParams,
    ListProductsParams,
    OrderSide,
    OrderStatus,
    OrderType,
    ProductType,
)


@dataclass
class SampleParams:
    name: str = query_field("name", "")
    count: int = query_field("count", 0)
    tags: list[str] = query_field("tag", [])
    since: Optional[datetime] = query_field("since")
    price: Decimal = query_field("price", Decimal(0))
    note: str = "not sent"
    extra: list[str] = field(default_factory=list)


class TestZeroOmission:
    def test_all_zero_encodes_empty(self):
        assert encode_params(SampleParams()) == []

    def test_list_orders_defaults_encode_empty(self):
        assert encode_params(ListOrdersParams()) == []

    @pytest.mark.parametrize(
        "params, expected",
        [
            (SampleParams(name="x"), [("name", "x")]),
            (SampleParams(count=3), [("count", "3")]),
            (SampleParams(count=-2), [("count", "-2")]),
            (SampleParams(price=Decimal("1.50")), [("price", "1.5")]),
            (
                SampleParams(since=datetime(2023, 1, 2, 3, 4, 5, tzinfo=timezone.utc)),
                [("since", "2023-01-02T03:04:05Z")],
            ),
        ],
    )
    def test_single_field_gives_single_key(self, params, expected):
        assert encode_params(params) == expected

    def test_decimal_zero_in_other_form_is_omitted(self):
        assert encode_params(SampleParams(price=Decimal("0.000"))) == []

    def test_untagged_fields_ignored(self):
        params = SampleParams(note="hello", extra=["a"])

        assert encode_params(params) == []


class TestRepeatedValues:
    def test_sequence_gives_repeated_key_in_order(self):
        assert encode_params(SampleParams(tags=["A", "B"])) == [("tag", "A"), ("tag", "B")]

    def test_enum_sequence(self):
        params = ListOrdersParams(order_status=[OrderStatus.OPEN, OrderStatus.FILLED])

        assert encode_params(params) == [("order_status", "OPEN"), ("order_status", "FILLED")]


class TestValueFormats:
    def test_enums_use_wire_value(self):
        params = ListOrdersParams(order_type=OrderType.LIMIT, order_side=OrderSide.SELL)

        assert encode_params(params) == [("order_type", "LIMIT"), ("order_side", "SELL")]

    def test_aware_time_converted_to_utc(self):
        from datetime import timedelta

        tz = timezone(timedelta(hours=2))
        params = ListFillsParams(start_sequence_timestamp=datetime(2023, 1, 1, 12, 0, tzinfo=tz))

        assert encode_params(params) == [("start_sequence_timestamp", "2023-01-01T10:00:00Z")]

    def test_field_declaration_order(self):
        params = ListProductsParams(limit=10, product_type=ProductType.SPOT)

        assert encode_params(params) == [("limit", "10"), ("product_type", "SPOT")]


class TestEncodingErrors:
    def test_none_rejected(self):
        with pytest.raises(EncodingError):
            encode_params(None)

    def test_non_dataclass_rejected(self):
        with pytest.raises(EncodingError):
            encode_params({"limit": 5})

    def test_dataclass_type_rejected(self):
        with pytest.raises(EncodingError):
            encode_params(SampleParams)

    def test_unsupported_field_type(self):
        @dataclass
        class Bad:
            flag: bool = query_field("flag", True)

        with pytest.raises(EncodingError):
            encode_params(Bad())

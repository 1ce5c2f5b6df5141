"""Transaction summary types for the Coinbase Advanced Trade API."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Optional

from ...shared import parse_decimal
from ..params import query_field
from .product import ProductType


@dataclass
class FeeTier:
    """Fee rates for the account's current volume tier."""

    pricing_tier: str = ""
    usd_from: Decimal = Decimal(0)
    usd_to: Decimal = Decimal(0)
    taker_fee_rate: Decimal = Decimal(0)
    maker_fee_rate: Decimal = Decimal(0)

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> "FeeTier":
        data = data or {}
        return cls(
            pricing_tier=data.get("pricing_tier") or "",
            usd_from=parse_decimal(data.get("usd_from")),
            usd_to=parse_decimal(data.get("usd_to")),
            taker_fee_rate=parse_decimal(data.get("taker_fee_rate")),
            maker_fee_rate=parse_decimal(data.get("maker_fee_rate")),
        )


@dataclass
class TransactionSummary:
    """Traded volume and fees over a period."""

    total_volume: Decimal = Decimal(0)
    total_fees: Decimal = Decimal(0)
    fee_tier: FeeTier = field(default_factory=FeeTier)
    advanced_trade_only_volume: Decimal = Decimal(0)
    advanced_trade_only_fees: Decimal = Decimal(0)

    @classmethod
    def from_dict(cls, data: dict) -> "TransactionSummary":
        return cls(
            total_volume=parse_decimal(data.get("total_volume")),
            total_fees=parse_decimal(data.get("total_fees")),
            fee_tier=FeeTier.from_dict(data.get("fee_tier")),
            advanced_trade_only_volume=parse_decimal(data.get("advanced_trade_only_volume")),
            advanced_trade_only_fees=parse_decimal(data.get("advanced_trade_only_fees")),
        )


@dataclass
class TransactionSummaryParams:
    """Query parameters for GET /transaction_summary."""

    start_date: Optional[datetime] = query_field("start_date")
    end_date: Optional[datetime] = query_field("end_date")
    user_native_currency: str = query_field("user_native_currency", "")
    product_type: Optional[ProductType] = query_field("product_type")

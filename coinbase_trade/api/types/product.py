"""Product and market data types for the Coinbase Advanced Trade API."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Optional

from ...shared import from_unix, parse_decimal, parse_time
from ..error import DecodeError
from ..params import query_field
from .common import ApiEnum
from .order import OrderSide


class ProductType(ApiEnum):
    UNKNOWN = "UNKNOWN_PRODUCT_TYPE"
    SPOT = "SPOT"


class Granularity(ApiEnum):
    """Candle width."""

    UNKNOWN = "UNKNOWN_GRANULARITY"
    ONE_MINUTE = "ONE_MINUTE"
    FIVE_MINUTE = "FIVE_MINUTE"
    FIFTEEN_MINUTE = "FIFTEEN_MINUTE"
    THIRTY_MINUTE = "THIRTY_MINUTE"
    ONE_HOUR = "ONE_HOUR"
    TWO_HOUR = "TWO_HOUR"
    SIX_HOUR = "SIX_HOUR"
    ONE_DAY = "ONE_DAY"


@dataclass
class Product:
    """A tradable product such as ``BTC-USD``."""

    product_id: str
    price: Decimal = Decimal(0)
    volume_24h: Decimal = Decimal(0)
    price_percentage_change_24h: str = ""
    volume_percentage_change_24h: str = ""
    base_increment: Decimal = Decimal(0)
    quote_increment: Decimal = Decimal(0)
    quote_min_size: Decimal = Decimal(0)
    quote_max_size: Decimal = Decimal(0)
    base_min_size: Decimal = Decimal(0)
    base_max_size: Decimal = Decimal(0)
    base_name: str = ""
    quote_name: str = ""
    watched: bool = False
    is_disabled: bool = False
    new: bool = False
    status: str = ""
    cancel_only: bool = False
    limit_only: bool = False
    post_only: bool = False
    trading_disabled: bool = False
    auction_mode: bool = False
    product_type: ProductType = ProductType.UNKNOWN
    quote_currency_id: str = ""
    base_currency_id: str = ""

    @classmethod
    def from_dict(cls, data: dict) -> "Product":
        try:
            return cls(
                product_id=data["product_id"],
                price=parse_decimal(data.get("price")),
                volume_24h=parse_decimal(data.get("volume_24h")),
                price_percentage_change_24h=data.get("price_percentage_change_24h") or "",
                volume_percentage_change_24h=data.get("volume_percentage_change_24h") or "",
                base_increment=parse_decimal(data.get("base_increment")),
                quote_increment=parse_decimal(data.get("quote_increment")),
                quote_min_size=parse_decimal(data.get("quote_min_size")),
                quote_max_size=parse_decimal(data.get("quote_max_size")),
                base_min_size=parse_decimal(data.get("base_min_size")),
                base_max_size=parse_decimal(data.get("base_max_size")),
                base_name=data.get("base_name") or "",
                quote_name=data.get("quote_name") or "",
                watched=data.get("watched", False),
                is_disabled=data.get("is_disabled", False),
                new=data.get("new", False),
                status=data.get("status") or "",
                cancel_only=data.get("cancel_only", False),
                limit_only=data.get("limit_only", False),
                post_only=data.get("post_only", False),
                trading_disabled=data.get("trading_disabled", False),
                auction_mode=data.get("auction_mode", False),
                product_type=ProductType(data.get("product_type") or ProductType.UNKNOWN.value),
                quote_currency_id=data.get("quote_currency_id") or "",
                base_currency_id=data.get("base_currency_id") or "",
            )
        except KeyError as e:
            raise DecodeError(f"Missing required field in Product: {e}")
        except ValueError as e:
            raise DecodeError(f"Invalid field in Product: {e}")


@dataclass
class ListProductsParams:
    """Query parameters for GET /products."""

    limit: int = query_field("limit", 0)
    product_type: Optional[ProductType] = query_field("product_type")


def parse_products(data: dict) -> list[Product]:
    return [Product.from_dict(p) for p in data.get("products") or []]


@dataclass
class Candle:
    """One OHLCV interval. ``start`` is the interval's opening time."""

    start: datetime
    low: Decimal
    high: Decimal
    open: Decimal
    close: Decimal
    volume: Decimal

    @property
    def start_unix(self) -> int:
        return int(self.start.timestamp())

    @classmethod
    def from_dict(cls, data: dict) -> "Candle":
        try:
            return cls(
                start=from_unix(data["start"]),
                low=parse_decimal(data.get("low")),
                high=parse_decimal(data.get("high")),
                open=parse_decimal(data.get("open")),
                close=parse_decimal(data.get("close")),
                volume=parse_decimal(data.get("volume")),
            )
        except KeyError as e:
            raise DecodeError(f"Missing required field in Candle: {e}")
        except ValueError as e:
            raise DecodeError(f"Invalid field in Candle: {e}")


@dataclass
class Trade:
    """A public trade from the product ticker."""

    trade_id: str
    product_id: str
    price: Decimal
    size: Decimal
    time: Optional[datetime] = None
    side: OrderSide = OrderSide.UNKNOWN

    @classmethod
    def from_dict(cls, data: dict) -> "Trade":
        try:
            return cls(
                trade_id=data["trade_id"],
                product_id=data.get("product_id", ""),
                price=parse_decimal(data.get("price")),
                size=parse_decimal(data.get("size")),
                time=parse_time(data.get("time")),
                side=OrderSide(data.get("side") or OrderSide.UNKNOWN.value),
            )
        except KeyError as e:
            raise DecodeError(f"Missing required field in Trade: {e}")
        except ValueError as e:
            raise DecodeError(f"Invalid field in Trade: {e}")


@dataclass
class MarketTrades:
    """Recent trades plus the current best bid and ask."""

    trades: list[Trade] = field(default_factory=list)
    best_bid: Decimal = Decimal(0)
    best_ask: Decimal = Decimal(0)

    @classmethod
    def from_dict(cls, data: dict) -> "MarketTrades":
        return cls(
            trades=[Trade.from_dict(t) for t in data.get("trades") or []],
            best_bid=parse_decimal(data.get("best_bid")),
            best_ask=parse_decimal(data.get("best_ask")),
        )

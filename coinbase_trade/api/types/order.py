"""Order and fill types for the Coinbase Advanced Trade API."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import ClassVar, Optional, Union

from ...shared import format_decimal, format_time, is_zero_decimal, parse_decimal, parse_time
from ..error import DecodeError, InvalidParameterError
from ..params import query_field
from .common import ApiEnum


class OrderSide(ApiEnum):
    UNKNOWN = "UNKNOWN_ORDER_SIDE"
    BUY = "BUY"
    SELL = "SELL"


class OrderStatus(ApiEnum):
    UNKNOWN = "UNKNOWN_ORDER_STATUS"
    PENDING = "PENDING"
    OPEN = "OPEN"
    FILLED = "FILLED"
    CANCELLED = "CANCELLED"
    EXPIRED = "EXPIRED"
    FAILED = "FAILED"


class TimeInForce(ApiEnum):
    UNKNOWN = "UNKNOWN_TIME_IN_FORCE"
    GOOD_UNTIL_DATE_TIME = "GOOD_UNTIL_DATE_TIME"
    GOOD_UNTIL_CANCELLED = "GOOD_UNTIL_CANCELLED"
    IMMEDIATE_OR_CANCEL = "IMMEDIATE_OR_CANCEL"
    FILL_OR_KILL = "FILL_OR_KILL"


class TriggerStatus(ApiEnum):
    UNKNOWN = "UNKNOWN_TRIGGER_STATUS"
    INVALID_ORDER_TYPE = "INVALID_ORDER_TYPE"
    STOP_PENDING = "STOP_PENDING"
    STOP_TRIGGERED = "STOP_TRIGGERED"


class OrderType(ApiEnum):
    UNKNOWN = "UNKNOWN_ORDER_TYPE"
    MARKET = "MARKET"
    LIMIT = "LIMIT"
    STOP = "STOP"
    STOP_LIMIT = "STOP_LIMIT"


class OrderConfigurationType(ApiEnum):
    UNKNOWN = "unknown_order_config_type"
    MARKET_IOC = "market_market_ioc"
    LIMIT_GTC = "limit_limit_gtc"
    LIMIT_GTD = "limit_limit_gtd"
    STOP_LIMIT_GTC = "stop_limit_stop_limit_gtc"
    STOP_LIMIT_GTD = "stop_limit_stop_limit_gtd"


class StopDirection(ApiEnum):
    UNKNOWN = "UNKNOWN_STOP_DIRECTION"
    UP = "STOP_DIRECTION_STOP_UP"
    DOWN = "STOP_DIRECTION_STOP_DOWN"


class CreateOrderFailureReason(ApiEnum):
    UNKNOWN = "UNKNOWN_FAILURE_REASON"
    UNSUPPORTED_ORDER_CONFIGURATION = "UNSUPPORTED_ORDER_CONFIGURATION"
    INVALID_SIDE = "INVALID_SIDE"
    INVALID_PRODUCT_ID = "INVALID_PRODUCT_ID"
    INVALID_SIZE_PRECISION = "INVALID_SIZE_PRECISION"
    INVALID_PRICE_PRECISION = "INVALID_PRICE_PRECISION"
    INSUFFICIENT_FUND = "INSUFFICIENT_FUND"
    INVALID_LEDGER_BALANCE = "INVALID_LEDGER_BALANCE"
    ORDER_ENTRY_DISABLED = "ORDER_ENTRY_DISABLED"
    INELIGIBLE_PAIR = "INELIGIBLE_PAIR"
    INVALID_LIMIT_PRICE_POST_ONLY = "INVALID_LIMIT_PRICE_POST_ONLY"
    INVALID_LIMIT_PRICE = "INVALID_LIMIT_PRICE"
    INVALID_NO_LIQUIDITY = "INVALID_NO_LIQUIDITY"
    INVALID_REQUEST = "INVALID_REQUEST"
    COMMANDER_REJECTED_NEW_ORDER = "COMMANDER_REJECTED_NEW_ORDER"
    INSUFFICIENT_FUNDS = "INSUFFICIENT_FUNDS"


class CancelOrderFailureReason(ApiEnum):
    UNKNOWN = "UNKNOWN_CANCEL_FAILURE_REASON"
    INVALID_CANCEL_REQUEST = "INVALID_CANCEL_REQUEST"
    UNKNOWN_CANCEL_ORDER = "UNKNOWN_CANCEL_ORDER"
    COMMANDER_REJECTED_CANCEL_ORDER = "COMMANDER_REJECTED_CANCEL_ORDER"
    DUPLICATE_CANCEL_REQUEST = "DUPLICATE_CANCEL_REQUEST"


class TradeType(ApiEnum):
    UNKNOWN = "UNKNOWN_TRADE_TYPE"
    FILL = "FILL"
    REVERSAL = "REVERSAL"
    CORRECTION = "CORRECTION"
    SYNTHETIC = "SYNTHETIC"


class LiquidityIndicator(ApiEnum):
    UNKNOWN = "UNKNOWN_LIQUIDITY_INDICATOR"
    MAKER = "MAKER"
    TAKER = "TAKER"


# =========================================================================
# Order configuration
# =========================================================================


def _positive(value: Optional[Decimal], name: str, kind: str) -> None:
    if value is None or value <= 0:
        raise InvalidParameterError(f"{kind} requires a positive {name}")


def _decimal_field(data: dict, key: str) -> Optional[Decimal]:
    if data.get(key) in (None, ""):
        return None
    return parse_decimal(data[key])


@dataclass(frozen=True)
class MarketIoc:
    """Market order, immediate-or-cancel. Exactly one of the sizes is set."""

    KEY: ClassVar[OrderConfigurationType] = OrderConfigurationType.MARKET_IOC

    quote_size: Optional[Decimal] = None
    base_size: Optional[Decimal] = None

    def __post_init__(self):
        if is_zero_decimal(self.quote_size) == is_zero_decimal(self.base_size):
            raise InvalidParameterError("market order requires exactly one of quote_size or base_size")

    def to_dict(self) -> dict:
        if not is_zero_decimal(self.quote_size):
            return {"quote_size": format_decimal(self.quote_size)}
        return {"base_size": format_decimal(self.base_size)}

    @classmethod
    def from_dict(cls, data: dict) -> "MarketIoc":
        return cls(
            quote_size=_decimal_field(data, "quote_size"),
            base_size=_decimal_field(data, "base_size"),
        )


@dataclass(frozen=True)
class LimitGtc:
    """Limit order, good until cancelled."""

    KEY: ClassVar[OrderConfigurationType] = OrderConfigurationType.LIMIT_GTC

    base_size: Decimal
    limit_price: Decimal
    post_only: bool = False

    def __post_init__(self):
        _positive(self.base_size, "base_size", "limit order")
        _positive(self.limit_price, "limit_price", "limit order")

    def to_dict(self) -> dict:
        return {
            "base_size": format_decimal(self.base_size),
            "limit_price": format_decimal(self.limit_price),
            "post_only": self.post_only,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "LimitGtc":
        return cls(
            base_size=parse_decimal(data.get("base_size")),
            limit_price=parse_decimal(data.get("limit_price")),
            post_only=data.get("post_only", False),
        )


@dataclass(frozen=True)
class LimitGtd:
    """Limit order, good until ``end_time``."""

    KEY: ClassVar[OrderConfigurationType] = OrderConfigurationType.LIMIT_GTD

    base_size: Decimal
    limit_price: Decimal
    end_time: datetime
    post_only: bool = False

    def __post_init__(self):
        _positive(self.base_size, "base_size", "limit order")
        _positive(self.limit_price, "limit_price", "limit order")
        if self.end_time is None:
            raise InvalidParameterError("good-till-date order requires end_time")

    def to_dict(self) -> dict:
        return {
            "base_size": format_decimal(self.base_size),
            "limit_price": format_decimal(self.limit_price),
            "end_time": format_time(self.end_time),
            "post_only": self.post_only,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "LimitGtd":
        return cls(
            base_size=parse_decimal(data.get("base_size")),
            limit_price=parse_decimal(data.get("limit_price")),
            end_time=parse_time(data.get("end_time")),
            post_only=data.get("post_only", False),
        )


@dataclass(frozen=True)
class StopLimitGtc:
    """Stop-limit order, good until cancelled."""

    KEY: ClassVar[OrderConfigurationType] = OrderConfigurationType.STOP_LIMIT_GTC

    base_size: Decimal
    limit_price: Decimal
    stop_price: Decimal
    stop_direction: StopDirection

    def __post_init__(self):
        _positive(self.base_size, "base_size", "stop-limit order")
        _positive(self.limit_price, "limit_price", "stop-limit order")
        _positive(self.stop_price, "stop_price", "stop-limit order")

    def to_dict(self) -> dict:
        return {
            "base_size": format_decimal(self.base_size),
            "limit_price": format_decimal(self.limit_price),
            "stop_price": format_decimal(self.stop_price),
            "stop_direction": StopDirection.strict(self.stop_direction, "stop_direction").value,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "StopLimitGtc":
        return cls(
            base_size=parse_decimal(data.get("base_size")),
            limit_price=parse_decimal(data.get("limit_price")),
            stop_price=parse_decimal(data.get("stop_price")),
            stop_direction=StopDirection(data.get("stop_direction")),
        )


@dataclass(frozen=True)
class StopLimitGtd:
    """Stop-limit order, good until ``end_time``."""

    KEY: ClassVar[OrderConfigurationType] = OrderConfigurationType.STOP_LIMIT_GTD

    base_size: Decimal
    limit_price: Decimal
    stop_price: Decimal
    stop_direction: StopDirection
    end_time: datetime

    def __post_init__(self):
        _positive(self.base_size, "base_size", "stop-limit order")
        _positive(self.limit_price, "limit_price", "stop-limit order")
        _positive(self.stop_price, "stop_price", "stop-limit order")
        if self.end_time is None:
            raise InvalidParameterError("good-till-date order requires end_time")

    def to_dict(self) -> dict:
        return {
            "base_size": format_decimal(self.base_size),
            "limit_price": format_decimal(self.limit_price),
            "stop_price": format_decimal(self.stop_price),
            "stop_direction": StopDirection.strict(self.stop_direction, "stop_direction").value,
            "end_time": format_time(self.end_time),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "StopLimitGtd":
        return cls(
            base_size=parse_decimal(data.get("base_size")),
            limit_price=parse_decimal(data.get("limit_price")),
            stop_price=parse_decimal(data.get("stop_price")),
            stop_direction=StopDirection(data.get("stop_direction")),
            end_time=parse_time(data.get("end_time")),
        )


OrderConfiguration = Union[MarketIoc, LimitGtc, LimitGtd, StopLimitGtc, StopLimitGtd]

CONFIGURATION_TYPES = {cls.KEY: cls for cls in (MarketIoc, LimitGtc, LimitGtd, StopLimitGtc, StopLimitGtd)}


def order_configuration(
    *,
    base_size: Optional[Decimal] = None,
    quote_size: Optional[Decimal] = None,
    limit_price: Optional[Decimal] = None,
    stop_price: Optional[Decimal] = None,
    stop_direction: Optional[StopDirection] = None,
    end_time: Optional[datetime] = None,
    post_only: bool = False,
    kind: Optional[Union[OrderConfigurationType, str]] = None,
) -> OrderConfiguration:
    """Build the order configuration matching the populated fields.

    Without a limit price the order is a market IOC order. With one, an end
    time makes it good-till-date and a stop price makes it stop-limit.

    Args:
        kind: The configuration the caller means to build. When given, it
            must agree with the kind derived from the fields.

    Raises:
        InvalidParameterError: If ``kind`` disagrees with the fields, or the
            fields do not make a valid order of the derived kind.
    """
    gtd = end_time is not None
    stop = not is_zero_decimal(stop_price)
    limit = not is_zero_decimal(limit_price)

    if not limit:
        derived = MarketIoc
    elif not gtd and not stop:
        derived = LimitGtc
    elif gtd and not stop:
        derived = LimitGtd
    elif not gtd and stop:
        derived = StopLimitGtc
    else:
        derived = StopLimitGtd

    if kind is not None and OrderConfigurationType.strict(kind, "kind") is not derived.KEY:
        raise InvalidParameterError(
            f"order configuration declared as {OrderConfigurationType(kind).value} "
            f"but fields describe {derived.KEY.value}"
        )

    if derived is MarketIoc:
        if stop or gtd or post_only:
            raise InvalidParameterError("stop_price, end_time and post_only need a limit_price")
        return MarketIoc(quote_size=quote_size, base_size=base_size)
    if not is_zero_decimal(quote_size):
        raise InvalidParameterError("limit orders are sized with base_size")
    if derived is LimitGtc:
        return LimitGtc(base_size=base_size, limit_price=limit_price, post_only=post_only)
    if derived is LimitGtd:
        return LimitGtd(base_size=base_size, limit_price=limit_price, end_time=end_time, post_only=post_only)
    if post_only:
        raise InvalidParameterError("stop-limit orders do not take post_only")
    if stop_direction is None:
        raise InvalidParameterError("stop-limit order requires stop_direction")
    stop_direction = StopDirection.strict(stop_direction, "stop_direction")
    if derived is StopLimitGtc:
        return StopLimitGtc(
            base_size=base_size,
            limit_price=limit_price,
            stop_price=stop_price,
            stop_direction=stop_direction,
        )
    return StopLimitGtd(
        base_size=base_size,
        limit_price=limit_price,
        stop_price=stop_price,
        stop_direction=stop_direction,
        end_time=end_time,
    )


def configuration_to_dict(config: OrderConfiguration) -> dict:
    """Wrap a configuration in the ``{kind: {...}}`` map the API expects."""
    return {config.KEY.value: config.to_dict()}


def parse_order_configuration(data: Optional[dict]) -> Optional[OrderConfiguration]:
    """Read the ``{kind: {...}}`` map sent by the API; unknown kinds give None."""
    for key, value in (data or {}).items():
        cls = CONFIGURATION_TYPES.get(OrderConfigurationType(key))
        if cls is None or not isinstance(value, dict):
            continue
        try:
            return cls.from_dict(value)
        except InvalidParameterError as e:
            raise DecodeError(f"Invalid order configuration {key}: {e.message}")
    return None


# =========================================================================
# Orders
# =========================================================================


@dataclass
class Order:
    """An order as reported by the API."""

    order_id: str
    product_id: str = ""
    side: OrderSide = OrderSide.UNKNOWN
    client_order_id: str = ""
    order_configuration: Optional[OrderConfiguration] = None
    user_id: str = ""
    status: OrderStatus = OrderStatus.UNKNOWN
    time_in_force: TimeInForce = TimeInForce.UNKNOWN
    created_time: Optional[datetime] = None
    completion_percentage: Decimal = Decimal(0)
    filled_size: Decimal = Decimal(0)
    average_filled_price: Decimal = Decimal(0)
    fee: str = ""
    number_of_fills: Decimal = Decimal(0)
    filled_value: Decimal = Decimal(0)
    pending_cancel: bool = False
    size_in_quote: bool = False
    total_fees: Decimal = Decimal(0)
    size_inclusive_of_fees: bool = False
    total_value_after_fees: Decimal = Decimal(0)
    trigger_status: TriggerStatus = TriggerStatus.UNKNOWN
    order_type: OrderType = OrderType.UNKNOWN
    reject_reason: str = ""
    settled: bool = False
    product_type: str = ""
    reject_message: str = ""
    cancel_message: str = ""

    @property
    def configuration_type(self) -> OrderConfigurationType:
        if self.order_configuration is None:
            return OrderConfigurationType.UNKNOWN
        return self.order_configuration.KEY

    @classmethod
    def from_dict(cls, data: dict) -> "Order":
        try:
            return cls(
                order_id=data["order_id"],
                product_id=data.get("product_id", ""),
                side=OrderSide(data.get("side") or OrderSide.UNKNOWN.value),
                client_order_id=data.get("client_order_id", ""),
                order_configuration=parse_order_configuration(data.get("order_configuration")),
                user_id=data.get("user_id", ""),
                status=OrderStatus(data.get("status") or OrderStatus.UNKNOWN.value),
                time_in_force=TimeInForce(data.get("time_in_force") or TimeInForce.UNKNOWN.value),
                created_time=parse_time(data.get("created_time")),
                completion_percentage=parse_decimal(data.get("completion_percentage")),
                filled_size=parse_decimal(data.get("filled_size")),
                average_filled_price=parse_decimal(data.get("average_filled_price")),
                fee=data.get("fee") or "",
                number_of_fills=parse_decimal(data.get("number_of_fills")),
                filled_value=parse_decimal(data.get("filled_value")),
                pending_cancel=data.get("pending_cancel", False),
                size_in_quote=data.get("size_in_quote", False),
                total_fees=parse_decimal(data.get("total_fees")),
                size_inclusive_of_fees=data.get("size_inclusive_of_fees", False),
                total_value_after_fees=parse_decimal(data.get("total_value_after_fees")),
                trigger_status=TriggerStatus(data.get("trigger_status") or TriggerStatus.UNKNOWN.value),
                order_type=OrderType(data.get("order_type") or OrderType.UNKNOWN.value),
                reject_reason=data.get("reject_reason") or "",
                settled=data.get("settled", False),
                product_type=data.get("product_type") or "",
                reject_message=data.get("reject_message") or "",
                cancel_message=data.get("cancel_message") or "",
            )
        except KeyError as e:
            raise DecodeError(f"Missing required field in Order: {e}")
        except ValueError as e:
            raise DecodeError(f"Invalid field in Order: {e}")


@dataclass
class CreateOrderRequest:
    """Request for POST /orders."""

    client_order_id: str
    product_id: str
    side: OrderSide
    order_configuration: OrderConfiguration

    def to_dict(self) -> dict:
        return {
            "client_order_id": self.client_order_id,
            "product_id": self.product_id,
            "side": OrderSide.strict(self.side, "side").value,
            "order_configuration": configuration_to_dict(self.order_configuration),
        }


@dataclass
class CreateOrderResponse:
    """Response for POST /orders."""

    success: bool
    order_id: str = ""
    order_configuration: Optional[OrderConfiguration] = None
    failure_reason: CreateOrderFailureReason = CreateOrderFailureReason.UNKNOWN
    error_details: str = ""

    @classmethod
    def from_dict(cls, data: dict) -> "CreateOrderResponse":
        try:
            success_response = data.get("success_response") or {}
            error_response = data.get("error_response") or {}
            return cls(
                success=data["success"],
                order_id=data.get("order_id") or success_response.get("order_id", ""),
                order_configuration=parse_order_configuration(data.get("order_configuration")),
                failure_reason=CreateOrderFailureReason(
                    error_response.get("error") or CreateOrderFailureReason.UNKNOWN.value
                ),
                error_details=error_response.get("error_details")
                or error_response.get("message")
                or "",
            )
        except KeyError as e:
            raise DecodeError(f"Missing required field in CreateOrderResponse: {e}")


@dataclass
class CancelResult:
    """Outcome for one order in a batch cancel."""

    order_id: str
    success: bool
    failure_reason: CancelOrderFailureReason = CancelOrderFailureReason.UNKNOWN

    @classmethod
    def from_dict(cls, data: dict) -> "CancelResult":
        try:
            return cls(
                order_id=data["order_id"],
                success=data.get("success", False),
                failure_reason=CancelOrderFailureReason(
                    data.get("failure_reason") or CancelOrderFailureReason.UNKNOWN.value
                ),
            )
        except KeyError as e:
            raise DecodeError(f"Missing required field in CancelResult: {e}")


@dataclass
class CancelOrdersResponse:
    """Response for POST /orders/batch_cancel."""

    results: list[CancelResult] = field(default_factory=list)

    @property
    def failures(self) -> dict[str, CancelOrderFailureReason]:
        return {r.order_id: r.failure_reason for r in self.results if not r.success}

    @property
    def cancelled(self) -> list[str]:
        return [r.order_id for r in self.results if r.success]

    @classmethod
    def from_dict(cls, data: dict) -> "CancelOrdersResponse":
        return cls(results=[CancelResult.from_dict(r) for r in data.get("results") or []])


@dataclass
class ListOrdersParams:
    """Query parameters for GET /orders/historical/batch."""

    product_id: str = query_field("product_id", "")
    order_type: Optional[OrderType] = query_field("order_type")
    order_side: Optional[OrderSide] = query_field("order_side")
    order_status: list[OrderStatus] = query_field("order_status", [])
    start_date: Optional[datetime] = query_field("start_date")
    end_date: Optional[datetime] = query_field("end_date")
    user_native_currency: str = query_field("user_native_currency", "")
    product_type: str = query_field("product_type", "")
    limit: int = query_field("limit", 0)


def parse_orders(data: dict) -> list[Order]:
    return [Order.from_dict(o) for o in data.get("orders") or []]


# =========================================================================
# Fills
# =========================================================================


@dataclass
class Fill:
    """A single execution against an order."""

    entry_id: str
    trade_id: str
    order_id: str
    product_id: str
    trade_time: Optional[datetime] = None
    trade_type: TradeType = TradeType.UNKNOWN
    price: Decimal = Decimal(0)
    size: Decimal = Decimal(0)
    commission: Decimal = Decimal(0)
    sequence_timestamp: Optional[datetime] = None
    liquidity_indicator: LiquidityIndicator = LiquidityIndicator.UNKNOWN
    size_in_quote: bool = False
    user_id: str = ""
    side: OrderSide = OrderSide.UNKNOWN

    @classmethod
    def from_dict(cls, data: dict) -> "Fill":
        try:
            return cls(
                entry_id=data["entry_id"],
                trade_id=data["trade_id"],
                order_id=data["order_id"],
                product_id=data.get("product_id", ""),
                trade_time=parse_time(data.get("trade_time")),
                trade_type=TradeType(data.get("trade_type") or TradeType.UNKNOWN.value),
                price=parse_decimal(data.get("price")),
                size=parse_decimal(data.get("size")),
                commission=parse_decimal(data.get("commission")),
                sequence_timestamp=parse_time(data.get("sequence_timestamp")),
                liquidity_indicator=LiquidityIndicator(
                    data.get("liquidity_indicator") or LiquidityIndicator.UNKNOWN.value
                ),
                size_in_quote=data.get("size_in_quote", False),
                user_id=data.get("user_id", ""),
                side=OrderSide(data.get("side") or OrderSide.UNKNOWN.value),
            )
        except KeyError as e:
            raise DecodeError(f"Missing required field in Fill: {e}")
        except ValueError as e:
            raise DecodeError(f"Invalid field in Fill: {e}")


@dataclass
class ListFillsParams:
    """Query parameters for GET /orders/historical/fills."""

    order_id: str = query_field("order_id", "")
    product_id: str = query_field("product_id", "")
    start_sequence_timestamp: Optional[datetime] = query_field("start_sequence_timestamp")
    end_sequence_timestamp: Optional[datetime] = query_field("end_sequence_timestamp")
    limit: int = query_field("limit", 0)


def parse_fills(data: dict) -> list[Fill]:
    return [Fill.from_dict(f) for f in data.get("fills") or []]

"""API type definitions for the Coinbase Advanced Trade API."""

from .common import ApiEnum

from .account import (
    Balance,
    Account,
    ListAccountsParams,
)

from .order import (
    OrderSide,
    OrderStatus,
    TimeInForce,
    TriggerStatus,
    OrderType,
    OrderConfigurationType,
    StopDirection,
    CreateOrderFailureReason,
    CancelOrderFailureReason,
    TradeType,
    LiquidityIndicator,
    MarketIoc,
    LimitGtc,
    LimitGtd,
    StopLimitGtc,
    StopLimitGtd,
    OrderConfiguration,
    order_configuration,
    configuration_to_dict,
    parse_order_configuration,
    Order,
    CreateOrderRequest,
    CreateOrderResponse,
    CancelResult,
    CancelOrdersResponse,
    ListOrdersParams,
    Fill,
    ListFillsParams,
)

from .product import (
    ProductType,
    Granularity,
    Product,
    ListProductsParams,
    Candle,
    Trade,
    MarketTrades,
)

from .summary import (
    FeeTier,
    TransactionSummary,
    TransactionSummaryParams,
)

__all__ = [
    "ApiEnum",
    # Account types
    "Balance",
    "Account",
    "ListAccountsParams",
    # Order types
    "OrderSide",
    "OrderStatus",
    "TimeInForce",
    "TriggerStatus",
    "OrderType",
    "OrderConfigurationType",
    "StopDirection",
    "CreateOrderFailureReason",
    "CancelOrderFailureReason",
    "TradeType",
    "LiquidityIndicator",
    "MarketIoc",
    "LimitGtc",
    "LimitGtd",
    "StopLimitGtc",
    "StopLimitGtd",
    "OrderConfiguration",
    "order_configuration",
    "configuration_to_dict",
    "parse_order_configuration",
    "Order",
    "CreateOrderRequest",
    "CreateOrderResponse",
    "CancelResult",
    "CancelOrdersResponse",
    "ListOrdersParams",
    "Fill",
    "ListFillsParams",
    # Product types
    "ProductType",
    "Granularity",
    "Product",
    "ListProductsParams",
    "Candle",
    "Trade",
    "MarketTrades",
    # Transaction summary types
    "FeeTier",
    "TransactionSummary",
    "TransactionSummaryParams",
]

"""REST API client module for Coinbase Advanced Trade.

This module provides the authenticated HTTP pipeline (signing, rate
spacing, response decoding, query encoding and pagination) and the
account, order, product and fee endpoints built on it.

Example:
    ```python
    from coinbase_trade.api import CoinbaseTradeClient, ListOrdersParams

    async with CoinbaseTradeClient() as client:
        orders = await client.list_orders(ListOrdersParams(product_id="BTC-USD"))
        print(f"First page has {len(orders.items)} orders")
    ```
"""

from .client import CoinbaseTradeClient, USER_AGENT

from .config import (
    ClientConfig,
    DEFAULT_HOST,
    DEFAULT_BASE_PATH,
    DEFAULT_TIMEOUT_SECS,
)

from .error import (
    CoinbaseTradeError,
    ConfigurationError,
    EncodingError,
    InvalidParameterError,
    TransportError,
    DecodeError,
    ApiError,
    BadRequestError,
    UnauthorizedError,
    ForbiddenError,
    NotFoundError,
    RateLimitedError,
    ServerError,
    UnexpectedStatusError,
    OrderRejectedError,
    CancelOrdersError,
    ErrorResponse,
)

from .rate_limit import RateGate, DEFAULT_MIN_INTERVAL

from .params import encode_params, query_field

from .response import PageInfo, decode_response

from .pagination import PaginatedList, PaginationMode

from .types import (
    # Account types
    Balance,
    Account,
    ListAccountsParams,
    # Order types
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
    Order,
    ListOrdersParams,
    Fill,
    ListFillsParams,
    # Product types
    ProductType,
    Granularity,
    Product,
    ListProductsParams,
    Candle,
    Trade,
    MarketTrades,
    # Transaction summary types
    FeeTier,
    TransactionSummary,
    TransactionSummaryParams,
)

__all__ = [
    # Client
    "CoinbaseTradeClient",
    "USER_AGENT",
    # Config
    "ClientConfig",
    "DEFAULT_HOST",
    "DEFAULT_BASE_PATH",
    "DEFAULT_TIMEOUT_SECS",
    # Errors
    "CoinbaseTradeError",
    "ConfigurationError",
    "EncodingError",
    "InvalidParameterError",
    "TransportError",
    "DecodeError",
    "ApiError",
    "BadRequestError",
    "UnauthorizedError",
    "ForbiddenError",
    "NotFoundError",
    "RateLimitedError",
    "ServerError",
    "UnexpectedStatusError",
    "OrderRejectedError",
    "CancelOrdersError",
    "ErrorResponse",
    # Pipeline
    "RateGate",
    "DEFAULT_MIN_INTERVAL",
    "encode_params",
    "query_field",
    "PageInfo",
    "decode_response",
    "PaginatedList",
    "PaginationMode",
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
    "Order",
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

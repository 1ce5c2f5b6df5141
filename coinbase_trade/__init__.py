"""Coinbase Trade - Python client for the Coinbase Advanced Trade REST API.

This package provides two main modules:
- `api`: REST client, request pipeline and resource types
- `shared`: Decimal and timestamp conversion helpers

Example:
    from coinbase_trade import CoinbaseTradeClient, ListProductsParams

    async with CoinbaseTradeClient() as client:
        products = await client.list_products(ListProductsParams(limit=50))
        while True:
            for product in products.items:
                print(product.product_id)
            if not products.has_next():
                break
            await products.next_page()
"""

__version__ = "0.1.0"

# ============================================================================
# MODULE IMPORTS
# ============================================================================

from . import api
from . import shared

# ============================================================================
# CONVENIENCE RE-EXPORTS
# ============================================================================

from .auth import sign, auth_headers

from .api import (
    # Client
    CoinbaseTradeClient,
    ClientConfig,
    PaginatedList,
    # Errors
    CoinbaseTradeError,
    ConfigurationError,
    EncodingError,
    InvalidParameterError,
    TransportError,
    DecodeError,
    ApiError,
    OrderRejectedError,
    CancelOrdersError,
    # Parameters
    ListAccountsParams,
    ListOrdersParams,
    ListFillsParams,
    ListProductsParams,
    TransactionSummaryParams,
    # Records
    Account,
    Order,
    Fill,
    Product,
    Candle,
    Trade,
    MarketTrades,
    TransactionSummary,
    # Order configuration
    OrderSide,
    StopDirection,
    Granularity,
    MarketIoc,
    LimitGtc,
    LimitGtd,
    StopLimitGtc,
    StopLimitGtd,
    order_configuration,
)

__all__ = [
    "__version__",
    "api",
    "shared",
    # Signing
    "sign",
    "auth_headers",
    # Client
    "CoinbaseTradeClient",
    "ClientConfig",
    "PaginatedList",
    # Errors
    "CoinbaseTradeError",
    "ConfigurationError",
    "EncodingError",
    "InvalidParameterError",
    "TransportError",
    "DecodeError",
    "ApiError",
    "OrderRejectedError",
    "CancelOrdersError",
    # Parameters
    "ListAccountsParams",
    "ListOrdersParams",
    "ListFillsParams",
    "ListProductsParams",
    "TransactionSummaryParams",
    # Records
    "Account",
    "Order",
    "Fill",
    "Product",
    "Candle",
    "Trade",
    "MarketTrades",
    "TransactionSummary",
    # Order configuration
    "OrderSide",
    "StopDirection",
    "Granularity",
    "MarketIoc",
    "LimitGtc",
    "LimitGtd",
    "StopLimitGtc",
    "StopLimitGtd",
    "order_configuration",
]

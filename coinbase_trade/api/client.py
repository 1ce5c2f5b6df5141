"""Coinbase Advanced Trade REST client implementation."""

import asyncio
import json
import logging
from dataclasses import replace
from datetime import datetime
from typing import Any, Callable, Optional, TypeVar
from urllib.parse import quote

import aiohttp

from ..auth import auth_headers
from ..shared import to_unix
from .config import ClientConfig
from .error import (
    CancelOrdersError,
    InvalidParameterError,
    OrderRejectedError,
    TransportError,
)
from .pagination import PaginatedList
from .params import QueryParams, encode_params
from .rate_limit import RateGate
from .response import PageInfo, decode_response
from .types import (
    Account,
    Candle,
    CancelOrdersResponse,
    CreateOrderRequest,
    CreateOrderResponse,
    Fill,
    Granularity,
    ListAccountsParams,
    ListFillsParams,
    ListOrdersParams,
    ListProductsParams,
    MarketTrades,
    Order,
    OrderConfiguration,
    OrderSide,
    Product,
    TransactionSummary,
    TransactionSummaryParams,
)
from .types.account import parse_accounts
from .types.order import parse_fills, parse_orders
from .types.product import parse_products

logger = logging.getLogger(__name__)

T = TypeVar("T")

USER_AGENT = "coinbase-trade-python/0.1.0"

GET = "GET"
POST = "POST"

LIST_ACCOUNTS_ENDPOINT = "/accounts"
GET_ACCOUNT_ENDPOINT = "/accounts/{}"
CREATE_ORDER_ENDPOINT = "/orders"
CANCEL_ORDERS_ENDPOINT = "/orders/batch_cancel"
LIST_ORDERS_ENDPOINT = "/orders/historical/batch"
LIST_FILLS_ENDPOINT = "/orders/historical/fills"
GET_ORDER_ENDPOINT = "/orders/historical/{}"
LIST_PRODUCTS_ENDPOINT = "/products"
GET_PRODUCT_ENDPOINT = "/products/{}"
GET_PRODUCT_CANDLES_ENDPOINT = "/products/{}/candles"
GET_MARKET_TRADES_ENDPOINT = "/products/{}/ticker"
GET_TRANSACTION_SUMMARY_ENDPOINT = "/transaction_summary"

# Server-side page sizes used when the caller gives none.
DEFAULT_ORDERS_LIMIT = 50
DEFAULT_PRODUCTS_LIMIT = 100

PRODUCTS_COUNT_FIELD = "num_products"


def _path_id(value: str, name: str) -> str:
    if not value or not value.strip():
        raise InvalidParameterError(f"{name} cannot be empty")
    return quote(value, safe="")


class CoinbaseTradeClient:
    """Coinbase Advanced Trade REST API client.

    Credentials come from the given config, then the ``COINBASE_*``
    environment variables, then the production defaults. Calls made through
    one client are spaced at least ``min_interval`` apart, also when several
    tasks share the client.

    Example:
        ```python
        async with CoinbaseTradeClient() as client:
            products = await client.list_products(ListProductsParams(limit=25))
            for product in products.items:
                print(product.product_id, product.price)
        ```
    """

    def __init__(
        self,
        config: Optional[ClientConfig] = None,
        session: Optional[aiohttp.ClientSession] = None,
    ):
        """Create a new client.

        Args:
            config: Optional explicit settings; empty fields are resolved
                from the environment and defaults.
            session: Optional aiohttp session to use instead of one owned by
                the client.
        """
        self._config = ClientConfig.resolve(config)
        self._timeout = aiohttp.ClientTimeout(total=self._config.timeout)
        self._headers = {
            "Accept": "application/json",
            "Content-Type": "application/json",
            "User-Agent": USER_AGENT,
        }
        self._session: Optional[aiohttp.ClientSession] = session
        self._owns_session = session is None
        self._gate = RateGate(self._config.min_interval)

    @property
    def config(self) -> ClientConfig:
        """Get the resolved configuration."""
        return self._config

    @property
    def host(self) -> str:
        return self._config.host

    @property
    def base_path(self) -> str:
        return self._config.base_path

    @property
    def rate_gate(self) -> RateGate:
        return self._gate

    async def __aenter__(self) -> "CoinbaseTradeClient":
        """Enter async context manager."""
        await self._ensure_session()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Exit async context manager."""
        await self.close()

    async def _ensure_session(self) -> aiohttp.ClientSession:
        """Ensure we have an active session."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                timeout=self._timeout,
                headers=self._headers,
            )
            self._owns_session = True
        return self._session

    async def close(self) -> None:
        """Close the HTTP session if the client created it."""
        if self._session and self._owns_session and not self._session.closed:
            await self._session.close()
        self._session = None

    # =========================================================================
    # Request pipeline
    # =========================================================================

    async def _send(
        self,
        method: str,
        endpoint: str,
        query: QueryParams,
        body: bytes,
    ) -> tuple[bytes, int]:
        """Sign and send one request, returning the raw body and status."""
        session = await self._ensure_session()
        url = f"{self._config.host}{self._config.base_path}{endpoint}"
        headers = dict(self._headers)
        headers.update(
            auth_headers(
                self._config.key,
                self._config.secret,
                method,
                self._config.base_path + endpoint,
                body,
            )
        )

        logger.debug("%s %s%s %s", method, self._config.base_path, endpoint, query)
        try:
            async with session.request(
                method,
                url,
                params=query or None,
                data=body or None,
                headers=headers,
                timeout=self._timeout,
            ) as response:
                data = await response.read()
                logger.debug("%s %s -> %d", method, endpoint, response.status)
                return data, response.status
        except asyncio.TimeoutError:
            raise TransportError(f"{method} {endpoint} timed out after {self._config.timeout}s")
        except aiohttp.ClientError as e:
            raise TransportError(f"{method} {endpoint}: {e}")

    async def request(
        self,
        method: str,
        endpoint: str,
        query: Optional[QueryParams] = None,
        body: Optional[bytes] = None,
        parse: Optional[Callable[[dict], T]] = None,
        parse_page: Optional[Callable[[dict], PageInfo]] = None,
    ) -> tuple[Optional[T], Optional[PageInfo]]:
        """Perform one rate-limited, signed exchange and decode the answer.

        Args:
            method: HTTP method.
            endpoint: Path below the configured base path.
            query: Ordered query pairs; keys may repeat.
            body: Raw JSON body, empty for reads.
            parse: Builds the result from the JSON object.
            parse_page: Builds pagination info from the same JSON object.

        Returns:
            ``(result, page)`` as produced by the two parsers.

        Raises:
            TransportError: If the exchange could not be completed.
            ApiError: If the server answered with a non-200 status.
            DecodeError: If a 200 body could not be decoded.
        """
        await self._gate.wait()
        try:
            data, status = await self._send(method, endpoint, query or [], body or b"")
        finally:
            self._gate.touch()

        return decode_response(
            data,
            status,
            parse=parse,
            parse_page=parse_page,
            credentials_missing=not self._config.has_credentials,
        )

    async def _get(self, endpoint: str, parse: Callable[[dict], T], query: Optional[QueryParams] = None) -> T:
        result, _ = await self.request(GET, endpoint, query=query, parse=parse)
        return result

    async def _post(self, endpoint: str, payload: dict, parse: Callable[[dict], T]) -> T:
        body = json.dumps(payload).encode("utf-8")
        result, _ = await self.request(POST, endpoint, body=body, parse=parse)
        return result

    async def _paginate(
        self,
        endpoint: str,
        params: Any,
        parse_items: Callable[[dict], list[T]],
        count_field: Optional[str] = None,
        limit: int = 0,
    ) -> PaginatedList[T]:
        items: PaginatedList[T] = PaginatedList(
            self,
            GET,
            endpoint,
            params,
            parse_items,
            count_field=count_field,
            limit=limit,
        )
        await items.next_page()
        return items

    # =========================================================================
    # Account endpoints
    # =========================================================================

    async def list_accounts(self, params: Optional[ListAccountsParams] = None) -> PaginatedList[Account]:
        """List brokerage accounts.

        Returns:
            PaginatedList holding the first page of accounts
        """
        return await self._paginate(LIST_ACCOUNTS_ENDPOINT, params or ListAccountsParams(), parse_accounts)

    async def get_account(self, account_uuid: str) -> Account:
        """Get one account by its UUID.

        Raises:
            InvalidParameterError: If account_uuid is empty
        """
        endpoint = GET_ACCOUNT_ENDPOINT.format(_path_id(account_uuid, "account_uuid"))
        return await self._get(endpoint, lambda data: Account.from_dict(data["account"]))

    # =========================================================================
    # Order endpoints
    # =========================================================================

    async def create_order(
        self,
        client_order_id: str,
        product_id: str,
        side: OrderSide,
        configuration: OrderConfiguration,
    ) -> Order:
        """Place a new order.

        Args:
            client_order_id: Caller-chosen unique id for idempotency
            product_id: Product to trade, e.g. ``BTC-USD``
            side: Buy or sell
            configuration: One of the order configuration variants, see
                :func:`~coinbase_trade.api.types.order_configuration`

        Returns:
            Order with the server-assigned id

        Raises:
            OrderRejectedError: If the exchange refused the order; ``reason``
                holds the failure code
            InvalidParameterError: If ``side`` is not BUY or SELL
        """
        if not product_id:
            raise InvalidParameterError("product_id cannot be empty")
        request = CreateOrderRequest(
            client_order_id=client_order_id,
            product_id=product_id,
            side=side,
            order_configuration=configuration,
        )
        response = await self._post(CREATE_ORDER_ENDPOINT, request.to_dict(), CreateOrderResponse.from_dict)

        if not response.success:
            logger.info(
                "Order %s on %s rejected: %s", client_order_id, product_id, response.failure_reason.value
            )
            raise OrderRejectedError(response.failure_reason, response.error_details or None)

        return Order(
            order_id=response.order_id,
            product_id=product_id,
            side=OrderSide.strict(side, "side"),
            client_order_id=client_order_id,
            order_configuration=response.order_configuration or configuration,
        )

    async def cancel_orders(self, order_ids: list[str]) -> list[str]:
        """Cancel a batch of orders.

        Returns:
            The ids that were cancelled

        Raises:
            CancelOrdersError: If any order was not cancelled; ``failures``
                maps each failed id to its reason
        """
        response = await self._post(
            CANCEL_ORDERS_ENDPOINT, {"order_ids": list(order_ids)}, CancelOrdersResponse.from_dict
        )
        failures = response.failures
        if failures:
            raise CancelOrdersError(failures, response.cancelled)
        return response.cancelled

    async def list_orders(self, params: Optional[ListOrdersParams] = None) -> PaginatedList[Order]:
        """List historical orders matching the given filters.

        The endpoint has no default page size, so 50 is used when
        ``params.limit`` is not positive.
        """
        params = params or ListOrdersParams()
        if params.limit <= 0:
            params = replace(params, limit=DEFAULT_ORDERS_LIMIT)
        return await self._paginate(LIST_ORDERS_ENDPOINT, params, parse_orders)

    async def list_fills(self, params: Optional[ListFillsParams] = None) -> PaginatedList[Fill]:
        """List fills matching the given filters."""
        return await self._paginate(LIST_FILLS_ENDPOINT, params or ListFillsParams(), parse_fills)

    async def get_order(self, order_id: str) -> Order:
        """Get the latest state of an order by its exchange-assigned id."""
        endpoint = GET_ORDER_ENDPOINT.format(_path_id(order_id, "order_id"))
        return await self._get(endpoint, lambda data: Order.from_dict(data["order"]))

    async def update_order(self, order: Order) -> Order:
        """Re-fetch ``order`` and return its latest state."""
        return await self.get_order(order.order_id)

    # =========================================================================
    # Product endpoints
    # =========================================================================

    async def list_products(self, params: Optional[ListProductsParams] = None) -> PaginatedList[Product]:
        """List tradable products.

        Products page by offset; the page size defaults to 100.
        """
        params = params or ListProductsParams()
        if params.limit <= 0:
            params = replace(params, limit=DEFAULT_PRODUCTS_LIMIT)
        return await self._paginate(
            LIST_PRODUCTS_ENDPOINT,
            params,
            parse_products,
            count_field=PRODUCTS_COUNT_FIELD,
            limit=params.limit,
        )

    async def get_product(self, product_id: str) -> Product:
        """Get one product by id."""
        endpoint = GET_PRODUCT_ENDPOINT.format(_path_id(product_id, "product_id"))
        return await self._get(endpoint, Product.from_dict)

    async def get_product_candles(
        self,
        product_id: str,
        start: datetime,
        end: datetime,
        granularity: Granularity,
    ) -> list[Candle]:
        """Get OHLCV candles for a product between ``start`` and ``end``.

        Raises:
            InvalidParameterError: If ``granularity`` is not a known candle width
        """
        endpoint = GET_PRODUCT_CANDLES_ENDPOINT.format(_path_id(product_id, "product_id"))
        query = [
            ("start", str(to_unix(start))),
            ("end", str(to_unix(end))),
            ("granularity", Granularity.strict(granularity, "granularity").value),
        ]
        return await self._get(
            endpoint, lambda data: [Candle.from_dict(c) for c in data.get("candles") or []], query
        )

    async def get_market_trades(self, product_id: str, limit: int) -> MarketTrades:
        """Get the last ``limit`` trades and the best bid/ask for a product."""
        endpoint = GET_MARKET_TRADES_ENDPOINT.format(_path_id(product_id, "product_id"))
        return await self._get(endpoint, MarketTrades.from_dict, [("limit", str(limit))])

    # =========================================================================
    # Fee endpoints
    # =========================================================================

    async def get_transaction_summary(
        self, params: Optional[TransactionSummaryParams] = None
    ) -> TransactionSummary:
        """Get traded volume, fees and the current fee tier."""
        query = encode_params(params or TransactionSummaryParams())
        return await self._get(GET_TRANSACTION_SUMMARY_ENDPOINT, TransactionSummary.from_dict, query)

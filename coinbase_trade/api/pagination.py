"""Paginated list results.

Every list endpoint returns a :class:`PaginatedList` already holding the
first page. Call :meth:`PaginatedList.next_page` while
:meth:`PaginatedList.has_next` is true to walk the remaining pages::

    orders = await client.list_orders(ListOrdersParams(product_id="BTC-USD"))
    while True:
        handle(orders.items)
        if not orders.has_next():
            break
        await orders.next_page()

The paging mode is chosen from the first response and kept after that:
cursor mode when the server sends a cursor, offset mode when it sends a
total count (``num_products`` on the products endpoint) instead.
"""

import logging
from enum import Enum
from typing import Any, Callable, Generic, Optional, Protocol, TypeVar

from .error import ConfigurationError
from .params import QueryParams, encode_params
from .response import PageInfo

logger = logging.getLogger(__name__)

T = TypeVar("T")


class PaginationMode(str, Enum):
    CURSOR = "cursor"
    OFFSET = "offset"


class Requester(Protocol):
    async def request(
        self,
        method: str,
        endpoint: str,
        query: Optional[QueryParams] = None,
        body: Optional[bytes] = None,
        parse: Optional[Callable[[dict], Any]] = None,
        parse_page: Optional[Callable[[dict], PageInfo]] = None,
    ) -> tuple[Any, Optional[PageInfo]]:
        ...


class PaginatedList(Generic[T]):
    """One page of results plus the state needed to fetch the next one.

    Not safe for concurrent ``next_page`` calls on the same instance.
    """

    def __init__(
        self,
        client: Requester,
        method: str,
        endpoint: str,
        params: Any,
        parse_items: Callable[[dict], list[T]],
        count_field: Optional[str] = None,
        limit: int = 0,
    ):
        self.items: list[T] = []
        self._client = client
        self._method = method
        self._endpoint = endpoint
        self._params = params
        self._parse_items = parse_items
        self._count_field = count_field
        self._limit = limit

        self._mode: Optional[PaginationMode] = None
        self._end = False
        self._cursor = ""
        self._offset = 0
        self._pages = 0

    def __iter__(self):
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)

    def __repr__(self) -> str:
        return (
            f"PaginatedList(endpoint={self._endpoint!r}, items={len(self.items)}, "
            f"pages={self._pages}, mode={self._mode}, end={self._end})"
        )

    @property
    def mode(self) -> Optional[PaginationMode]:
        return self._mode

    @property
    def pages_fetched(self) -> int:
        return self._pages

    def has_next(self) -> bool:
        """True while another page may be fetched."""
        return not self._end

    def _query(self) -> QueryParams:
        query = encode_params(self._params)
        if self._mode is PaginationMode.CURSOR and self._cursor:
            query.append(("cursor", self._cursor))
        elif self._mode is PaginationMode.OFFSET and self._offset > 0:
            query.append(("offset", str(self._offset)))
        return query

    def _select_mode(self, page: PageInfo) -> PaginationMode:
        if page.cursor:
            return PaginationMode.CURSOR
        if self._count_field and page.total_count is not None:
            if self._limit <= 0:
                raise ConfigurationError("no limit specified for offset pagination")
            return PaginationMode.OFFSET
        return PaginationMode.CURSOR

    async def next_page(self) -> list[T]:
        """Fetch the next page into :attr:`items`.

        Returns the new items, or an empty list without any request once the
        list is exhausted.

        Raises:
            ConfigurationError: If the endpoint pages by offset and no
                positive limit was given.
        """
        if self._end:
            return []

        items, page = await self._client.request(
            self._method,
            self._endpoint,
            query=self._query(),
            parse=self._parse_items,
            parse_page=lambda data: PageInfo.from_dict(data, self._count_field),
        )
        page = page or PageInfo()

        if self._mode is None:
            self._mode = self._select_mode(page)

        if self._mode is PaginationMode.OFFSET:
            self._offset += self._limit
            self._end = self._offset >= (page.total_count or 0)
        else:
            self._cursor = page.cursor
            self._end = not page.has_next
            if page.has_next and not page.cursor:
                logger.warning(
                    "%s reported more results without a cursor; stopping", self._endpoint
                )
                self._end = True

        self._pages += 1
        self.items = items or []
        return self.items

    async def collect(self) -> list[T]:
        """Fetch every remaining page and return all items seen from here on."""
        collected = list(self.items)
        while self.has_next():
            collected.extend(await self.next_page())
        return collected

"""
Live tests against the Coinbase Advanced Trade API.

Read-only: nothing here places or cancels orders.

To run:
    COINBASE_LIVE_TESTS=1 COINBASE_KEY=... COINBASE_SECRET=... pytest tests/test_live.py -v -s
"""

import pytest

from coinbase_trade import CoinbaseTradeClient, ListAccountsParams, ListProductsParams


@pytest.mark.asyncio
class TestLive:
    async def test_products_and_accounts(self):
        async with CoinbaseTradeClient() as client:
            products = await client.list_products(ListProductsParams(limit=5))
            assert products.items
            print(f"First product: {products.items[0].product_id}")

            if products.has_next():
                await products.next_page()
                assert products.items

            product = await client.get_product(products.items[0].product_id)
            assert product.product_id == products.items[0].product_id

            accounts = await client.list_accounts(ListAccountsParams(limit=10))
            print(f"Accounts on first page: {len(accounts.items)}")

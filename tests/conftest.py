"""Pytest configuration and shared fixtures."""

import asyncio
import logging
from typing import Any, Dict, List, Tuple

import pytest
import pytest_asyncio
from aiohttp import web
from aiohttp.test_utils import TestServer

from lcx_market_data.client import PublicRestClient
from lcx_market_data.config.settings import PublicRestClientConfig


SAMPLE_PAIR = {
    'Id': '6f1d1c4e-2b6d-4f0c-9a53-1c2a3b4d5e6f',
    'Symbol': 'LCX/USDC',
    'Base': 'LCX',
    'Quote': 'USDC',
    'Precision': {'Amount': 2, 'Price': 4, 'Total': 4},
    'Orderprecision': {'Amount': 2, 'Price': 4, 'Total': 4},
    'MinOrder': {'Base': 10, 'Quote': 1},
    'MaxOrder': {'Base': 1000000, 'Quote': 100000},
    'Status': True,
    'CreatedAt': '2021-04-10T16:31:46.863+05:30',
    'UpdatedAt': '2023-11-02T09:12:01.004+00:00',
    'ListingPrice': 0.03,
    'Mode': 'LIVE',
}

SAMPLE_TICKER = {
    'bestAsk': 0.1501,
    'bestBid': 0.1499,
    'change': 1.35,
    'chart': [
        {'Time': 1699999200, 'Close': 0.1482},
        {'Time': 1700002800, 'Close': 0.15},
    ],
    'equivalent': 0.15,
    'high': 0.1533,
    'last24Price': 0.148,
    'lastPrice': 0.15,
    'lastUpdated': 1700002812345,
    'low': 0.1461,
    'symbol': 'LCX/USDC',
    'usdVolume': 12345.67,
    'volume': 82304.5,
}

SAMPLE_KLINE = {
    'open': 0.1492,
    'high': 0.1505,
    'low': 0.149,
    'close': 0.15,
    'volume': 5230.0,
    'pair': 'LCX/USDC',
    'timeframe': '1',
    'timestamp': 1700002800,
}

SAMPLE_ORDERBOOK = {
    'buy': [[0.1499, 1200.0], [0.1498, 800.5]],
    'sell': [[0.1501, 500.0], [0.1502, 2500.0]],
}

SAMPLE_TRADES = [
    [120.5, 0.1502, 'BUY', 1700002811000],
    [40.0, 0.1499, 'SELL', 1700002805000],
]


def envelope(data: Any, count: bool = False) -> Dict[str, Any]:
    body = {'status': 'success', 'message': 'Successfully Api response', 'data': data}
    if count:
        body['count'] = len(data)
    return body


DEFAULT_RESPONSES = {
    '/api/book': (200, envelope(SAMPLE_ORDERBOOK)),
    '/api/trades': (200, envelope(SAMPLE_TRADES, count=True)),
    '/api/pairs': (200, envelope([SAMPLE_PAIR], count=True)),
    '/api/pair': (200, envelope(SAMPLE_PAIR)),
    '/api/tickers': (200, envelope({'LCX/USDC': SAMPLE_TICKER})),
    '/api/ticker': (200, envelope(SAMPLE_TICKER)),
    '/v1/market/kline': (200, envelope([SAMPLE_KLINE], count=True)),
}


class FakeExchange:
    """Local aiohttp app standing in for an LCX host; records every request."""

    def __init__(self, responses: Dict[str, Tuple[int, Any]]):
        self.responses = dict(responses)
        self.requests: List[Dict[str, Any]] = []
        self.delay = 0.0
        self.url = ""

        self.app = web.Application()
        self.app.router.add_get('/{tail:.*}', self.handle)

    async def handle(self, request: web.Request) -> web.StreamResponse:
        self.requests.append({
            'path': request.path,
            'query': dict(request.query),
            'raw_query': request.query_string,
            'headers': dict(request.headers),
        })

        if self.delay:
            await asyncio.sleep(self.delay)

        status, body = self.responses.get(
            request.path, (404, {'status': 'error', 'message': 'Not Found'})
        )
        if isinstance(body, str):
            return web.Response(text=body, status=status)
        return web.json_response(body, status=status)


async def _serve(exchange: FakeExchange):
    server = TestServer(exchange.app)
    await server.start_server()
    exchange.url = str(server.make_url('/'))
    return server


@pytest_asyncio.fixture
async def fake_exchange():
    """Main API host."""
    exchange = FakeExchange(DEFAULT_RESPONSES)
    server = await _serve(exchange)
    yield exchange
    await server.close()


@pytest_asyncio.fixture
async def kline_exchange():
    """Dedicated kline host."""
    exchange = FakeExchange(DEFAULT_RESPONSES)
    server = await _serve(exchange)
    yield exchange
    await server.close()


@pytest.fixture
def client_config(fake_exchange, kline_exchange) -> PublicRestClientConfig:
    return PublicRestClientConfig(base_url=fake_exchange.url, kline_url=kline_exchange.url)


@pytest_asyncio.fixture
async def client(client_config):
    async with PublicRestClient(client_config) as rest_client:
        yield rest_client


@pytest.fixture
def restore_root_logger():
    """setup_logging replaces root handlers; put them back afterwards."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield root
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)

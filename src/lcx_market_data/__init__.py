"""
LCX Market Data - typed async client for the LCX exchange public REST API.

Covers order books, klines, trades, trading pairs and tickers.
"""

from .client import PublicRestClient
from .config.settings import PublicRestClientConfig
from .exceptions import UnexpectedStatusError
from .models import (
    ApiResponse,
    Kline,
    KlineRequestParams,
    KlineTimeframe,
    OrderbookData,
    OrderbookLevel,
    OrderbookRequestParams,
    OrderSide,
    Pair,
    PairOrderLimit,
    PairPrecision,
    PairRequestParams,
    Ticker,
    TickerChartPoint,
    TickerRequestParams,
    Trade,
    TradeRequestParams,
)

__version__ = "1.0.0"

__all__ = [
    "ApiResponse",
    "Kline",
    "KlineRequestParams",
    "KlineTimeframe",
    "OrderbookData",
    "OrderbookLevel",
    "OrderbookRequestParams",
    "OrderSide",
    "Pair",
    "PairOrderLimit",
    "PairPrecision",
    "PairRequestParams",
    "PublicRestClient",
    "PublicRestClientConfig",
    "Ticker",
    "TickerChartPoint",
    "TickerRequestParams",
    "Trade",
    "TradeRequestParams",
    "UnexpectedStatusError",
]

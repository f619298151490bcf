"""LCX REST client for public market-data endpoints."""

import asyncio
import logging
from typing import Any, Dict, Mapping, Optional, Type, TypeVar, Union

import aiohttp
from pydantic import ValidationError

from .config.settings import PublicRestClientConfig
from .exceptions import UnexpectedStatusError
from .models import (
    ApiResponse,
    KlineData,
    KlineRequestParams,
    OrderbookData,
    OrderbookRequestParams,
    PairData,
    PairRequestParams,
    PairsData,
    RequestParams,
    TickerData,
    TickerRequestParams,
    TickersData,
    TradeData,
    TradeRequestParams,
)

logger = logging.getLogger(__name__)

P = TypeVar('P', bound=RequestParams)

JSON_HEADERS = {"Content-Type": "application/json"}


def _join_url(base_url: str, path: str) -> str:
    return f"{base_url.rstrip('/')}/{path.lstrip('/')}"


def _coerce_params(params: Union[P, Mapping[str, Any]], model: Type[P]) -> P:
    if isinstance(params, model):
        return params
    return model.model_validate(params)


class PublicRestClient:
    """Rest client for public endpoints.

    Every call issues exactly one GET and returns the parsed
    :class:`ApiResponse` envelope. When ``config.parse_responses`` is false
    the decoded JSON dict is returned as-is instead. Any status other than
    200 raises :class:`UnexpectedStatusError` with the raw response attached.

    Transport configuration is passed through: hand over an existing
    ``aiohttp.ClientSession`` (left open on close), or ``ClientSession``
    keyword arguments for the session this client creates and owns.
    """

    def __init__(
        self,
        config: Optional[PublicRestClientConfig] = None,
        session: Optional[aiohttp.ClientSession] = None,
        **session_kwargs: Any,
    ):
        self.config = config or PublicRestClientConfig()
        self.base_url = self.config.base_url
        self.kline_url = self.config.kline_url

        self.session = session
        self._owns_session = session is None
        self._session_kwargs = session_kwargs

    async def __aenter__(self):
        """Async context manager entry."""
        self._ensure_session()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.close()

    def _ensure_session(self) -> aiohttp.ClientSession:
        if self.session is None or (self._owns_session and self.session.closed):
            kwargs = dict(self._session_kwargs)
            if self.config.request_timeout_seconds is not None and 'timeout' not in kwargs:
                kwargs['timeout'] = aiohttp.ClientTimeout(total=self.config.request_timeout_seconds)
            self.session = aiohttp.ClientSession(**kwargs)
            self._owns_session = True
        return self.session

    async def close(self) -> None:
        """Close the underlying session if this client created it."""
        if self._owns_session and self.session is not None and not self.session.closed:
            await self.session.close()
        if self._owns_session:
            self.session = None

    async def _get(
        self,
        base_url: str,
        path: str,
        params: Optional[RequestParams],
        data_type: Any,
    ) -> Union[ApiResponse, Dict[str, Any]]:
        url = _join_url(base_url, path)
        query = params.to_query() if params is not None else None
        session = self._ensure_session()

        logger.debug(f"GET {url} params={query}")

        try:
            async with session.get(url, params=query, headers=JSON_HEADERS) as response:
                if response.status != 200:
                    body = await response.text()
                    logger.error(f"GET {url} returned HTTP {response.status}")
                    raise UnexpectedStatusError(response, body)
                payload = await response.json(content_type=None)
        except UnexpectedStatusError:
            raise
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.error(f"GET {url} failed: {e!r}")
            raise

        if not self.config.parse_responses:
            return payload
        try:
            return ApiResponse[data_type].model_validate(payload)
        except ValidationError as e:
            logger.error(f"GET {url} returned a malformed envelope: {e}")
            raise

    async def _get_with_base_url(self, path: str, params: Optional[RequestParams], data_type: Any):
        return await self._get(self.base_url, path, params, data_type)

    async def _get_with_kline_url(self, path: str, params: Optional[RequestParams], data_type: Any):
        return await self._get(self.kline_url, path, params, data_type)

    async def get_orderbook(
        self, params: Union[OrderbookRequestParams, Mapping[str, Any]]
    ) -> ApiResponse[OrderbookData]:
        """Get the complete order book for a market (``/api/book``)."""
        params = _coerce_params(params, OrderbookRequestParams)
        return await self._get_with_base_url("/api/book", params, OrderbookData)

    async def get_kline(
        self, params: Union[KlineRequestParams, Mapping[str, Any]]
    ) -> ApiResponse[KlineData]:
        """
        Get OHLCV candles for a market (``/v1/market/kline``).

        Candles cover ``params.from_`` to ``params.to`` (UTC seconds) at the
        requested resolution. Served from the dedicated kline host.
        """
        params = _coerce_params(params, KlineRequestParams)
        return await self._get_with_kline_url("/v1/market/kline", params, KlineData)

    async def get_trades(
        self, params: Union[TradeRequestParams, Mapping[str, Any]]
    ) -> ApiResponse[TradeData]:
        """Get past public trades, one page of 100 per ``offset`` (``/api/trades``)."""
        params = _coerce_params(params, TradeRequestParams)
        return await self._get_with_base_url("/api/trades", params, TradeData)

    async def get_pairs(self) -> ApiResponse[PairsData]:
        """Get details of all trading pairs (``/api/pairs``)."""
        return await self._get_with_base_url("/api/pairs", None, PairsData)

    async def get_pair(
        self, params: Union[PairRequestParams, Mapping[str, Any]]
    ) -> ApiResponse[PairData]:
        """Get details of a single trading pair (``/api/pair``)."""
        params = _coerce_params(params, PairRequestParams)
        return await self._get_with_base_url("/api/pair", params, PairData)

    async def get_tickers(self) -> ApiResponse[TickersData]:
        """Get the market overview for every pair, keyed by symbol (``/api/tickers``)."""
        return await self._get_with_base_url("/api/tickers", None, TickersData)

    async def get_ticker(
        self, params: Union[TickerRequestParams, Mapping[str, Any]]
    ) -> ApiResponse[TickerData]:
        """Get the market overview for a single pair (``/api/ticker``)."""
        params = _coerce_params(params, TickerRequestParams)
        return await self._get_with_base_url("/api/ticker", params, TickerData)

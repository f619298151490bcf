"""Typed request and response shapes for the LCX public market-data API.

Response entities are tolerant: every field may be missing or null, unknown
fields are kept as extras, and enum-typed values outside the known members
are kept as plain strings. Request records pass caller values through as-is.
"""

from datetime import datetime
from enum import Enum
from typing import Annotated, Dict, Generic, List, NamedTuple, Optional, TypeVar, Union

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, TypeAdapter


class KlineTimeframe(str, Enum):
    """All supported kline timeframes."""
    MINUTE_1 = "1"
    MINUTE_3 = "3"
    MINUTE_5 = "5"
    MINUTE_15 = "15"
    MINUTE_30 = "30"
    MINUTE_45 = "45"
    HOUR_1 = "60"
    HOUR_2 = "120"
    HOUR_3 = "180"
    HOUR_4 = "240"
    DAY_1 = "1D"
    WEEK_1 = "1W"
    MONTH_1 = "1M"


class OrderSide(str, Enum):
    BUY = "BUY"
    SELL = "SELL"


def _known_or_raw(parse):
    """Convert values ``parse`` understands, keep anything else unchanged."""
    def convert(value):
        try:
            return parse(value)
        except (ValueError, TypeError):
            return value
    return BeforeValidator(convert)


Timeframe = Annotated[Union[KlineTimeframe, str], _known_or_raw(KlineTimeframe)]
Side = Annotated[Union[OrderSide, str], _known_or_raw(OrderSide)]
DateTime = Annotated[Union[datetime, str], _known_or_raw(TypeAdapter(datetime).validate_python)]
Number = Union[int, float]


class _Snapshot(BaseModel):
    """Read-only exchange payload; unknown fields are kept as extras."""
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="allow")


class Trade(NamedTuple):
    """Fixed-position trade record: ``[qty, price, makerSide, timestampMs]``."""
    quantity: Optional[float] = None
    price: Optional[float] = None
    maker_side: Optional[Side] = None  # side of the filled opposing limit order
    timestamp_ms: Optional[Number] = None


class OrderbookLevel(NamedTuple):
    price: Optional[float] = None
    quantity: Optional[float] = None


class OrderbookData(_Snapshot):
    """Orderbook endpoint response data."""
    buy: Optional[List[OrderbookLevel]] = Field(default_factory=list, description="Bids")
    sell: Optional[List[OrderbookLevel]] = Field(default_factory=list, description="Asks")


class Kline(_Snapshot):
    open: Optional[float] = None
    high: Optional[float] = None
    low: Optional[float] = None
    close: Optional[float] = None
    volume: Optional[float] = None
    pair: Optional[str] = None
    timeframe: Optional[Timeframe] = None
    timestamp: Optional[Number] = None


class PairPrecision(_Snapshot):
    amount: Optional[float] = Field(default=None, alias="Amount")
    price: Optional[float] = Field(default=None, alias="Price")
    total: Optional[float] = Field(default=None, alias="Total")


class PairOrderLimit(_Snapshot):
    base: Optional[float] = Field(default=None, alias="Base")
    quote: Optional[float] = Field(default=None, alias="Quote")


class Pair(_Snapshot):
    """Trading pair as listed by the exchange."""
    id: Optional[str] = Field(default=None, alias="Id")
    symbol: Optional[str] = Field(default=None, alias="Symbol")
    base: Optional[str] = Field(default=None, alias="Base")
    quote: Optional[str] = Field(default=None, alias="Quote")
    precision: Optional[PairPrecision] = Field(default=None, alias="Precision")
    order_precision: Optional[PairPrecision] = Field(default=None, alias="Orderprecision")
    min_order: Optional[PairOrderLimit] = Field(default=None, alias="MinOrder")
    max_order: Optional[PairOrderLimit] = Field(default=None, alias="MaxOrder")
    status: Optional[bool] = Field(default=None, alias="Status", description="Whether the pair is active")
    created_at: Optional[DateTime] = Field(default=None, alias="CreatedAt")
    updated_at: Optional[DateTime] = Field(default=None, alias="UpdatedAt")
    listing_price: Optional[float] = Field(default=None, alias="ListingPrice")
    mode: Optional[str] = Field(default=None, alias="Mode", description="Trading mode")


class TickerChartPoint(_Snapshot):
    time: Optional[Number] = Field(default=None, alias="Time")
    close: Optional[float] = Field(default=None, alias="Close")


class Ticker(_Snapshot):
    """24h market overview for a single pair."""
    best_ask: Optional[float] = Field(default=None, alias="bestAsk")
    best_bid: Optional[float] = Field(default=None, alias="bestBid")
    change: Optional[float] = None
    chart: Optional[List[TickerChartPoint]] = Field(default_factory=list)
    equivalent: Optional[float] = None
    high: Optional[float] = None
    last_24_price: Optional[float] = Field(default=None, alias="last24Price")
    last_price: Optional[float] = Field(default=None, alias="lastPrice")
    last_updated: Optional[Number] = Field(default=None, alias="lastUpdated")
    low: Optional[float] = None
    symbol: Optional[str] = None
    usd_volume: Optional[float] = Field(default=None, alias="usdVolume")
    volume: Optional[float] = None


KlineData = List[Kline]
TradeData = List[Trade]
PairsData = List[Pair]
PairData = Pair
TickersData = Dict[str, Ticker]
TickerData = Ticker

DataT = TypeVar("DataT")


class ApiResponse(BaseModel, Generic[DataT]):
    """Envelope returned by every public endpoint."""
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="allow")

    status: Optional[str] = Field(default=None, description="Response status, 'success' on success")
    message: Optional[str] = Field(default="", description="Response message")
    count: Optional[int] = Field(default=None, description="Length of data when data is a list")
    total_count: Optional[int] = Field(default=None, alias="totalCount")
    data: Optional[DataT] = None

    @property
    def ok(self) -> bool:
        return self.status == "success"


# Request parameter records. The dumped form (by alias, extras included) is
# sent as the query string.

class RequestParams(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="allow")

    def to_query(self) -> Dict[str, object]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class OrderbookRequestParams(RequestParams):
    pair: str = Field(description="Name of the pair, e.g. 'LCX/ETH'")


class KlineRequestParams(RequestParams):
    pair: str
    resolution: Timeframe
    from_: Number = Field(alias="from", description="From time, UTC timestamp in seconds")
    to: Number = Field(description="To time, UTC timestamp in seconds")


class TradeRequestParams(RequestParams):
    pair: str
    offset: int = Field(default=1, description="Page index, first page = 1, fixed page size = 100")


class PairRequestParams(RequestParams):
    pair: str


class TickerRequestParams(RequestParams):
    pair: str

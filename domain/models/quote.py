from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class SourceDescriptor:
    name: str  # Selects the provider implementation
    identifier: str  # Opaque source key reported to clients


@dataclass(frozen=True)
class PricePair:
    buy_price: float
    sell_price: float

    @classmethod
    def sentinel(cls) -> "PricePair":
        return cls(buy_price=0.0, sell_price=0.0)


@dataclass(frozen=True)
class Quote:
    buy_price: float
    sell_price: float
    source: str


@dataclass(frozen=True)
class AveragePair:
    average_buy_price: float
    average_sell_price: float


@dataclass(frozen=True)
class SlippageEntry:
    buy_price_slippage: float
    sell_price_slippage: float
    source: str


@dataclass(frozen=True)
class QuoteBundle:
    currency: str
    quotes: tuple[Quote, ...]
    average: AveragePair
    slippage: tuple[SlippageEntry, ...]
    created_at: float  # Cache clock reading when stored
    fetched_at: datetime  # Wall-clock time the aggregation run started


@dataclass(frozen=True)
class PersistedQuoteRecord:
    currency: str
    source: str
    buy_price: float
    sell_price: float
    timestamp: datetime


@dataclass(frozen=True)
class CacheMirrorRecord:
    currency: str
    data: str  # JSON encoded bundle
    timestamp: datetime

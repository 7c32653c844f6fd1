import json
import logging
from dataclasses import asdict
from datetime import UTC, datetime

from application.services.quote_aggregator import QuoteAggregator
from application.services.statistics import compute_average, compute_slippage
from domain.models.quote import AveragePair, CacheMirrorRecord, Quote, QuoteBundle, SlippageEntry
from infrastructure.cache.quote_cache import QuoteCache
from infrastructure.persistence.sink import QuoteRecordSink
from infrastructure.providers.registry import SourceRegistry

logger = logging.getLogger(__name__)


class QuoteService:
    """Serves the quotes, average and slippage views for a currency.

    Quotes are always fetched fresh. Average and slippage come from the
    cache while it is fresh and are recomputed together on a miss. Concurrent
    misses for one currency may each recompute; the last write wins.
    """

    def __init__(
        self,
        registry: SourceRegistry,
        aggregator: QuoteAggregator,
        cache: QuoteCache,
        sink: QuoteRecordSink,
    ):
        self.registry = registry
        self.aggregator = aggregator
        self.cache = cache
        self.sink = sink

    async def get_quotes(self, currency: str) -> list[Quote]:
        return await self.aggregator.aggregate(currency)

    async def get_average(self, currency: str) -> AveragePair:
        bundle = await self._get_bundle(currency)
        return bundle.average

    async def get_slippage(self, currency: str) -> list[SlippageEntry]:
        bundle = await self._get_bundle(currency)
        return list(bundle.slippage)

    def get_supported_currencies(self) -> list[str]:
        return self.registry.supported_currencies()

    async def _get_bundle(self, currency: str) -> QuoteBundle:
        cached = self.cache.get(currency)
        if cached is not None:
            return cached

        fetched_at = datetime.now(UTC)
        quotes = await self.aggregator.aggregate(currency)
        average = compute_average(quotes)
        slippage = compute_slippage(quotes, average)

        bundle = self.cache.put(currency, quotes, average, slippage, fetched_at=fetched_at)
        self._mirror(bundle)
        return bundle

    def _mirror(self, bundle: QuoteBundle) -> None:
        data = {
            "quotes": [asdict(q) for q in bundle.quotes],
            "average": asdict(bundle.average),
            "slippage": [asdict(s) for s in bundle.slippage],
            "fetched_at": bundle.fetched_at.isoformat(),
        }
        record = CacheMirrorRecord(
            currency=bundle.currency,
            data=json.dumps(data),
            timestamp=datetime.now(UTC),
        )
        try:
            self.sink.submit(record)
        except Exception as e:
            logger.error(f"Failed to hand cache mirror for {bundle.currency} to persistence: {e}")

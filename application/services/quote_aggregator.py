import logging
import time
from datetime import UTC, datetime

from domain.models.quote import PersistedQuoteRecord, Quote
from infrastructure.persistence.sink import QuoteRecordSink
from infrastructure.providers.registry import SourceRegistry

logger = logging.getLogger(__name__)


class QuoteAggregator:
    def __init__(self, registry: SourceRegistry, sink: QuoteRecordSink):
        self.registry = registry
        self.sink = sink

    async def aggregate(self, currency: str) -> list[Quote]:
        """Collect one quote per registered source, in registry order.

        Providers are awaited one after another. Every result is handed to
        the sink without waiting for the write.
        """
        sources = self.registry.providers_for(currency)
        start_time = time.time()

        quotes: list[Quote] = []
        for registered in sources:
            prices = await registered.provider.fetch(registered.descriptor)
            quote = Quote(
                buy_price=prices.buy_price,
                sell_price=prices.sell_price,
                source=registered.descriptor.identifier,
            )
            quotes.append(quote)
            self._persist(currency, quote)

        duration_ms = (time.time() - start_time) * 1000
        logger.info(
            f"Aggregated {len(quotes)} quotes for {currency} ({duration_ms:.2f}ms)",
            extra={
                "extra_data": {
                    "currency": currency,
                    "sources": [q.source for q in quotes],
                    "duration_ms": duration_ms,
                }
            },
        )
        return quotes

    def _persist(self, currency: str, quote: Quote) -> None:
        record = PersistedQuoteRecord(
            currency=currency,
            source=quote.source,
            buy_price=quote.buy_price,
            sell_price=quote.sell_price,
            timestamp=datetime.now(UTC),
        )
        try:
            self.sink.submit(record)
        except Exception as e:
            logger.error(f"Failed to hand quote from {quote.source} to persistence: {e}")

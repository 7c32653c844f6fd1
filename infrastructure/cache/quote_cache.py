import logging
import time
from collections.abc import Callable, Sequence
from datetime import UTC, datetime, timedelta

from domain.models.quote import AveragePair, Quote, QuoteBundle, SlippageEntry

logger = logging.getLogger(__name__)


class QuoteCache:
    """In-process cache of the latest quote bundle per currency.

    An entry is served only while it is younger than ``freshness_window``;
    older entries stay in place until the next ``put`` overwrites them.
    """

    def __init__(
        self,
        freshness_window: timedelta = timedelta(seconds=1),
        clock: Callable[[], float] = time.monotonic,
    ):
        self.freshness_window = freshness_window
        self._clock = clock
        self._entries: dict[str, QuoteBundle] = {}

    def get(self, currency: str) -> QuoteBundle | None:
        bundle = self._entries.get(currency)
        if bundle is None:
            logger.debug(f"Cache get for {currency}: MISS (empty)")
            return None

        age = self._clock() - bundle.created_at
        if age >= self.freshness_window.total_seconds():
            logger.debug(f"Cache get for {currency}: MISS (stale, age {age:.3f}s)")
            return None

        logger.debug(f"Cache get for {currency}: HIT (age {age:.3f}s)")
        return bundle

    def put(
        self,
        currency: str,
        quotes: Sequence[Quote],
        average: AveragePair,
        slippage: Sequence[SlippageEntry],
        fetched_at: datetime | None = None,
    ) -> QuoteBundle:
        bundle = QuoteBundle(
            currency=currency,
            quotes=tuple(quotes),
            average=average,
            slippage=tuple(slippage),
            created_at=self._clock(),
            fetched_at=fetched_at or datetime.now(UTC),
        )
        # Whole-entry swap; readers see the old bundle or the new one.
        self._entries[currency] = bundle
        return bundle

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)

"""
Shared test configuration and fixtures.
"""

from collections.abc import Sequence
from datetime import timedelta
from unittest.mock import MagicMock

import pytest

from domain.models.quote import PricePair, SourceDescriptor
from infrastructure.cache.quote_cache import QuoteCache
from infrastructure.persistence.sink import QuoteRecordSink
from infrastructure.providers.base import QuoteProvider
from infrastructure.providers.registry import SourceRegistry


class StaticQuoteProvider(QuoteProvider):
    """Returns scripted prices in order, repeating the last one.

    An exception in the script is raised instead of returned.
    """

    def __init__(self, name: str, script: Sequence[PricePair | Exception], timeout: float = 1.0):
        super().__init__(name=name, timeout=timeout)
        self.script = list(script)
        self.calls = 0

    async def _fetch_prices(self, descriptor: SourceDescriptor) -> PricePair:
        item = self.script[min(self.calls, len(self.script) - 1)]
        self.calls += 1
        if isinstance(item, Exception):
            raise item
        return item


class FakeClock:
    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def source_url(currency: str, index: int) -> str:
    return f"https://{currency.lower()}-source-{index}.example"


@pytest.fixture
def make_registry():
    """Build a registry from {currency: [price script per source]}.

    Each script is a (buy, sell) tuple, a PricePair, an exception, or a list
    of those returned on successive calls.
    """
    def _make(scripts: dict[str, list]) -> SourceRegistry:
        sources = {}
        providers = {}
        for currency, per_source in scripts.items():
            descriptors = []
            for index, script in enumerate(per_source):
                name = f"{currency}-provider-{index}"
                if not isinstance(script, list):
                    script = [script]
                script = [PricePair(*item) if isinstance(item, tuple) else item for item in script]
                providers[name] = StaticQuoteProvider(name, script)
                descriptors.append(SourceDescriptor(name=name, identifier=source_url(currency, index)))
            sources[currency] = descriptors
        return SourceRegistry(sources=sources, providers=providers)

    return _make


@pytest.fixture
def fake_clock():
    return FakeClock()


@pytest.fixture
def quote_cache(fake_clock):
    return QuoteCache(freshness_window=timedelta(seconds=1), clock=fake_clock)


@pytest.fixture
def mock_sink():
    return MagicMock(spec=QuoteRecordSink)

import json
from datetime import UTC, datetime

import pytest

from application.services.quote_aggregator import QuoteAggregator
from application.services.quote_service import QuoteService
from domain.exceptions.quote import DegenerateAverageError, UnsupportedCurrencyError
from domain.models.quote import AveragePair, CacheMirrorRecord, PersistedQuoteRecord


@pytest.fixture
def build_service(make_registry, quote_cache, mock_sink):
    def _build(scripts: dict[str, list]) -> QuoteService:
        registry = make_registry(scripts)
        aggregator = QuoteAggregator(registry=registry, sink=mock_sink)
        return QuoteService(registry=registry, aggregator=aggregator, cache=quote_cache, sink=mock_sink)

    return _build


def mirror_records(mock_sink) -> list[CacheMirrorRecord]:
    return [
        c.args[0] for c in mock_sink.submit.call_args_list
        if isinstance(c.args[0], CacheMirrorRecord)
    ]


class TestQuotesView:
    @pytest.mark.asyncio
    async def test_quotes_are_always_fetched_fresh(self, build_service):
        service = build_service({"BRL": [[(5.20, 5.30), (5.40, 5.50)]]})

        first = await service.get_quotes("BRL")
        second = await service.get_quotes("BRL")

        assert first[0].buy_price == 5.20
        assert second[0].buy_price == 5.40

    @pytest.mark.asyncio
    async def test_quotes_do_not_populate_cache(self, build_service, quote_cache):
        service = build_service({"BRL": [(5.20, 5.30)]})

        await service.get_quotes("BRL")

        assert quote_cache.get("BRL") is None

    @pytest.mark.asyncio
    async def test_quotes_bypass_a_fresh_cache_entry(self, build_service):
        service = build_service({"BRL": [[(5.20, 5.30), (5.40, 5.50)]]})

        await service.get_average("BRL")
        quotes = await service.get_quotes("BRL")

        assert quotes[0].buy_price == 5.40


class TestCachedViews:
    @pytest.mark.asyncio
    async def test_average_of_identical_providers(self, build_service):
        service = build_service({"BRL": [(5.20, 5.30)] * 3})

        average = await service.get_average("BRL")
        slippage = await service.get_slippage("BRL")

        assert average.average_buy_price == pytest.approx(5.20)
        assert average.average_sell_price == pytest.approx(5.30)
        assert len(slippage) == 3
        for entry in slippage:
            assert entry.buy_price_slippage == pytest.approx(0.0, abs=1e-9)
            assert entry.sell_price_slippage == pytest.approx(0.0, abs=1e-9)

    @pytest.mark.asyncio
    async def test_average_served_from_cache_within_window(self, build_service, fake_clock):
        service = build_service({"BRL": [[(5.20, 5.30), (9.00, 9.10)]]})

        first = await service.get_average("BRL")
        fake_clock.advance(0.5)
        second = await service.get_average("BRL")

        assert first == second == AveragePair(average_buy_price=5.20, average_sell_price=5.30)

    @pytest.mark.asyncio
    async def test_average_and_slippage_share_one_bundle(self, build_service):
        service = build_service({"ARS": [[(900, 920), (1, 1)], [(910, 925), (1, 1)], [(920, 930), (1, 1)]]})

        average = await service.get_average("ARS")
        slippage = await service.get_slippage("ARS")

        assert average == AveragePair(average_buy_price=910.0, average_sell_price=925.0)
        assert slippage[0].buy_price_slippage == pytest.approx(-1.0989, abs=1e-4)

    @pytest.mark.asyncio
    async def test_average_recomputed_after_expiry(self, build_service, fake_clock):
        service = build_service({"BRL": [[(5.20, 5.30), (6.00, 6.10)]]})

        first = await service.get_average("BRL")
        fake_clock.advance(1.0)
        second = await service.get_average("BRL")

        assert first.average_buy_price == 5.20
        assert second.average_buy_price == 6.00

    @pytest.mark.asyncio
    async def test_miss_submits_cache_mirror(self, build_service, mock_sink):
        service = build_service({"BRL": [(5.20, 5.30), (5.40, 5.50)]})

        await service.get_slippage("BRL")
        await service.get_slippage("BRL")

        mirrors = mirror_records(mock_sink)
        assert len(mirrors) == 1
        assert mirrors[0].currency == "BRL"
        data = json.loads(mirrors[0].data)
        assert set(data) == {"quotes", "average", "slippage", "fetched_at"}
        assert data["average"]["average_buy_price"] == pytest.approx(5.30)
        assert len(data["slippage"]) == 2

    @pytest.mark.asyncio
    async def test_miss_persists_each_quote(self, build_service, mock_sink):
        service = build_service({"BRL": [(5.20, 5.30), (5.40, 5.50)]})

        await service.get_average("BRL")

        records = [
            c.args[0] for c in mock_sink.submit.call_args_list
            if isinstance(c.args[0], PersistedQuoteRecord)
        ]
        assert len(records) == 2


class TestFailures:
    @pytest.mark.asyncio
    async def test_unsupported_currency_raises_for_every_view(self, build_service):
        service = build_service({"BRL": [(5.20, 5.30)]})

        for view in (service.get_quotes, service.get_average, service.get_slippage):
            with pytest.raises(UnsupportedCurrencyError):
                await view("XYZ")

    @pytest.mark.asyncio
    async def test_all_sentinel_quotes_raise_degenerate_average(self, build_service, quote_cache):
        service = build_service({"BRL": [RuntimeError("down"), RuntimeError("down")]})

        with pytest.raises(DegenerateAverageError):
            await service.get_slippage("BRL")

        assert quote_cache.get("BRL") is None

    @pytest.mark.asyncio
    async def test_supported_currencies(self, build_service):
        service = build_service({"ARS": [(1, 2)], "BRL": [(1, 2)]})

        assert service.get_supported_currencies() == ["ARS", "BRL"]

    @pytest.mark.asyncio
    async def test_all_sentinel_quotes_fail_average_too(self, build_service, quote_cache, mock_sink):
        service = build_service({"BRL": [RuntimeError("down"), RuntimeError("down")]})

        with pytest.raises(DegenerateAverageError):
            await service.get_average("BRL")

        assert quote_cache.get("BRL") is None
        assert mirror_records(mock_sink) == []


class TestBundleTimestamps:
    @pytest.mark.asyncio
    async def test_fetched_at_is_taken_before_aggregation(self, build_service, quote_cache):
        service = build_service({"BRL": [(5.20, 5.30)]})
        original_aggregate = service.aggregator.aggregate
        seen_during_aggregation = []

        async def recording_aggregate(currency):
            seen_during_aggregation.append(datetime.now(UTC))
            return await original_aggregate(currency)

        service.aggregator.aggregate = recording_aggregate
        before = datetime.now(UTC)
        await service.get_average("BRL")

        bundle = quote_cache.get("BRL")
        assert before <= bundle.fetched_at <= seen_during_aggregation[0]

    @pytest.mark.asyncio
    async def test_mirror_carries_aggregation_time(self, build_service, quote_cache, mock_sink):
        service = build_service({"BRL": [(5.20, 5.30)]})

        await service.get_slippage("BRL")

        data = json.loads(mirror_records(mock_sink)[0].data)
        assert data["fetched_at"] == quote_cache.get("BRL").fetched_at.isoformat()

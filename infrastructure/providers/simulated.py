import random

from domain.models.quote import PricePair, SourceDescriptor
from infrastructure.providers.base import QuoteProvider

# name -> (base buy, base sell, variation width)
SIMULATED_BASELINES: dict[str, tuple[float, float, float]] = {
	'Ambito': (905.50, 915.50, 2.0),
	'DolarHoy': (900.00, 920.00, 4.0),
	'Cronista': (910.00, 925.00, 6.0),
	'Wise': (5.20, 5.30, 0.1),
	'Nubank': (5.15, 5.25, 0.1),
	'Nomad Global': (5.18, 5.28, 0.1),
}


class SimulatedQuoteProvider(QuoteProvider):
	"""Stand-in for scraping a quote page.

	Both sides move by the same jitter, drawn uniformly from
	``[-variation / 2, variation / 2)`` and rounded to cents.
	"""

	def __init__(
		self,
		name: str,
		base_buy: float,
		base_sell: float,
		variation: float,
		rng: random.Random | None = None,
		timeout: float = 5.0,
	):
		super().__init__(name=name, timeout=timeout)
		self.base_buy = base_buy
		self.base_sell = base_sell
		self.variation = variation
		self._rng = rng or random.Random()

	async def _fetch_prices(self, descriptor: SourceDescriptor) -> PricePair:
		jitter = (self._rng.random() - 0.5) * self.variation
		return PricePair(
			buy_price=round(self.base_buy + jitter, 2),
			sell_price=round(self.base_sell + jitter, 2),
		)


def build_simulated_providers(
	rng: random.Random | None = None, timeout: float = 5.0
) -> dict[str, QuoteProvider]:
	rng = rng or random.Random()
	return {
		name: SimulatedQuoteProvider(name, buy, sell, variation, rng=rng, timeout=timeout)
		for name, (buy, sell, variation) in SIMULATED_BASELINES.items()
	}

import logging
import random
from collections.abc import Mapping, Sequence
from dataclasses import dataclass

from config.sources import SOURCES
from domain.exceptions.quote import RegistryConfigurationError, UnsupportedCurrencyError
from domain.models.quote import SourceDescriptor
from infrastructure.providers.base import QuoteProvider
from infrastructure.providers.simulated import build_simulated_providers

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RegisteredSource:
	descriptor: SourceDescriptor
	provider: QuoteProvider


class SourceRegistry:
	"""Maps a currency code to its ordered list of quote sources.

	Provider names are resolved once here, so a request never dispatches on a
	source name string.
	"""

	def __init__(
		self,
		sources: Mapping[str, Sequence[SourceDescriptor]],
		providers: Mapping[str, QuoteProvider],
	):
		self._providers = dict(providers)
		self._sources: dict[str, tuple[RegisteredSource, ...]] = {}

		for currency, descriptors in sources.items():
			resolved = []
			for descriptor in descriptors:
				provider = self._providers.get(descriptor.name)
				if provider is None:
					raise RegistryConfigurationError(
						f'No provider named {descriptor.name!r} for currency {currency}'
					)
				resolved.append(RegisteredSource(descriptor=descriptor, provider=provider))
			self._sources[currency] = tuple(resolved)

	def providers_for(self, currency: str) -> list[RegisteredSource]:
		registered = self._sources.get(currency)
		if not registered:
			raise UnsupportedCurrencyError(currency)
		return list(registered)

	def supported_currencies(self) -> list[str]:
		return [currency for currency, registered in self._sources.items() if registered]


def build_default_registry(
	rng: random.Random | None = None, provider_timeout: float = 5.0
) -> SourceRegistry:
	registry = SourceRegistry(
		sources=SOURCES,
		providers=build_simulated_providers(rng=rng, timeout=provider_timeout),
	)
	logger.info(f'Source registry ready for {", ".join(registry.supported_currencies())}')
	return registry

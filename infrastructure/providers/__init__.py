from .base import QuoteProvider
from .registry import RegisteredSource, SourceRegistry, build_default_registry
from .simulated import SimulatedQuoteProvider, build_simulated_providers

__all__ = [
	'QuoteProvider',
	'RegisteredSource',
	'SimulatedQuoteProvider',
	'SourceRegistry',
	'build_default_registry',
	'build_simulated_providers',
]

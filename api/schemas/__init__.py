from .responses import (
	AverageResponse,
	ErrorResponse,
	QuoteResponse,
	SlippageResponse,
	SupportedCurrenciesResponse,
	WelcomeResponse,
)

__all__ = [
	'AverageResponse',
	'ErrorResponse',
	'QuoteResponse',
	'SlippageResponse',
	'SupportedCurrenciesResponse',
	'WelcomeResponse',
]

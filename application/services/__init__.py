from .quote_aggregator import QuoteAggregator
from .quote_service import QuoteService
from .statistics import compute_average, compute_slippage

__all__ = ['QuoteAggregator', 'QuoteService', 'compute_average', 'compute_slippage']

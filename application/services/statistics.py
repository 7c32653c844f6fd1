from collections.abc import Sequence

from domain.exceptions.quote import DegenerateAverageError, EmptyQuoteSetError
from domain.models.quote import AveragePair, Quote, SlippageEntry


def compute_average(quotes: Sequence[Quote]) -> AveragePair:
    if not quotes:
        raise EmptyQuoteSetError()

    count = len(quotes)
    return AveragePair(
        average_buy_price=sum(q.buy_price for q in quotes) / count,
        average_sell_price=sum(q.sell_price for q in quotes) / count,
    )


def compute_slippage(quotes: Sequence[Quote], average: AveragePair) -> list[SlippageEntry]:
    """Percentage deviation of each quote from ``average``, in input order.

    Values are not rounded. A zero average on either side is rejected, which
    happens when every provider returned its sentinel quote.
    """
    if average.average_buy_price == 0:
        raise DegenerateAverageError("buy")
    if average.average_sell_price == 0:
        raise DegenerateAverageError("sell")

    return [
        SlippageEntry(
            buy_price_slippage=_percent_deviation(q.buy_price, average.average_buy_price),
            sell_price_slippage=_percent_deviation(q.sell_price, average.average_sell_price),
            source=q.source,
        )
        for q in quotes
    ]


def _percent_deviation(price: float, average: float) -> float:
    return (price - average) / average * 100

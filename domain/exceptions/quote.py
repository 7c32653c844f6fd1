class QuoteException(Exception):
    pass


class UnsupportedCurrencyError(QuoteException):
    def __init__(self, currency: str):
        self.currency = currency
        super().__init__(f"Currency {currency} not supported")


class EmptyQuoteSetError(QuoteException):
    def __init__(self, message: str = "Cannot compute an average from an empty quote set"):
        super().__init__(message)


class DegenerateAverageError(QuoteException):
    def __init__(self, side: str):
        self.side = side
        super().__init__(f"Average {side} price is zero, slippage is undefined")


class RegistryConfigurationError(QuoteException):
    pass

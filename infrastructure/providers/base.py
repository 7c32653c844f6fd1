import asyncio
import logging
from abc import ABC, abstractmethod

from domain.models.quote import PricePair, SourceDescriptor

logger = logging.getLogger(__name__)


class QuoteProvider(ABC):
    """A base class for quote providers, handling the failure policy.

    Subclasses implement ``_fetch_prices``. ``fetch`` never raises: a timeout
    or any error inside the provider yields ``PricePair.sentinel()`` so one
    broken source degrades the aggregate instead of aborting the request.
    """

    def __init__(self, name: str, timeout: float = 5.0):
        self._name = name
        self.timeout = timeout

    @property
    def name(self) -> str:
        return self._name

    @abstractmethod
    async def _fetch_prices(self, descriptor: SourceDescriptor) -> PricePair:
        ...

    async def fetch(self, descriptor: SourceDescriptor) -> PricePair:
        try:
            return await asyncio.wait_for(self._fetch_prices(descriptor), timeout=self.timeout)
        except TimeoutError:
            error_message = f"timed out after {self.timeout}s"
        except Exception as e:
            error_message = f"{e.__class__.__name__}: {e}"

        logger.warning(
            f"Provider {self.name} failed, using sentinel quote: {error_message}",
            extra={
                "extra_data": {
                    "provider": self.name,
                    "source": descriptor.identifier,
                    "error_message": error_message,
                }
            },
        )
        return PricePair.sentinel()

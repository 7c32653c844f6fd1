import logging
from datetime import timedelta
from typing import Annotated

from fastapi import Depends

from application.services import QuoteAggregator, QuoteService
from config.settings import Settings, get_settings
from infrastructure.cache.quote_cache import QuoteCache
from infrastructure.persistence.database import Database
from infrastructure.persistence.sink import QuoteRecordSink
from infrastructure.providers import SourceRegistry, build_default_registry

logger = logging.getLogger(__name__)


class AppDependencies:
	"""Container for application-wide singleton dependencies."""

	registry: SourceRegistry | None = None
	cache: QuoteCache | None = None
	db: Database | None = None
	sink: QuoteRecordSink | None = None


deps = AppDependencies()


def init_dependencies(settings: Settings) -> None:
	"""Initialize all singleton dependencies. Called at app startup."""
	logger.info('Initializing dependencies...')

	deps.registry = build_default_registry(provider_timeout=settings.PROVIDER_TIMEOUT_SECONDS)
	deps.cache = QuoteCache(freshness_window=timedelta(seconds=settings.CACHE_FRESHNESS_SECONDS))
	deps.db = Database(settings.DATABASE_URL)
	deps.sink = QuoteRecordSink(deps.db, max_queue_size=settings.PERSISTENCE_QUEUE_SIZE)

	logger.info('Dependencies initialized')


async def start_dependencies() -> None:
	if deps.db is None or deps.sink is None:
		raise RuntimeError('Dependencies not initialized. Call init_dependencies() first.')

	await deps.db.create_tables()
	logger.info('Database tables created')
	deps.sink.start()


async def cleanup_dependencies(settings: Settings) -> None:
	logger.info('Cleaning up dependencies...')

	try:
		if deps.sink:
			await deps.sink.close(timeout=settings.PERSISTENCE_SHUTDOWN_TIMEOUT_SECONDS)
	finally:
		if deps.db:
			await deps.db.close()
			logger.info('Database connection closed')

	deps.registry = deps.cache = deps.db = deps.sink = None
	logger.info('Cleanup complete')


def get_registry() -> SourceRegistry:
	if deps.registry is None:
		raise RuntimeError('Source registry not initialized')
	return deps.registry


def get_quote_cache() -> QuoteCache:
	if deps.cache is None:
		raise RuntimeError('Quote cache not initialized')
	return deps.cache


def get_record_sink() -> QuoteRecordSink:
	if deps.sink is None:
		raise RuntimeError('Persistence sink not initialized')
	return deps.sink


def get_currency(
	settings: Annotated[Settings, Depends(get_settings)],
	currency: str | None = None,
) -> str:
	code = (currency or '').strip().upper()
	return code or settings.DEFAULT_CURRENCY


def get_quote_aggregator(
	registry: Annotated[SourceRegistry, Depends(get_registry)],
	sink: Annotated[QuoteRecordSink, Depends(get_record_sink)],
) -> QuoteAggregator:
	return QuoteAggregator(registry=registry, sink=sink)


def get_quote_service(
	registry: Annotated[SourceRegistry, Depends(get_registry)],
	aggregator: Annotated[QuoteAggregator, Depends(get_quote_aggregator)],
	cache: Annotated[QuoteCache, Depends(get_quote_cache)],
	sink: Annotated[QuoteRecordSink, Depends(get_record_sink)],
) -> QuoteService:
	return QuoteService(registry=registry, aggregator=aggregator, cache=cache, sink=sink)

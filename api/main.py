import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.dependencies import cleanup_dependencies, init_dependencies, start_dependencies
from api.error_handlers import register_exception_handlers
from api.routes import quotes
from config.settings import get_settings
from infrastructure.monitoring.logger import configure_logging

settings = get_settings()

configure_logging(settings)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
	logger.info('Starting Currency Quote Aggregator API...')

	init_dependencies(settings)
	try:
		await start_dependencies()
		logger.info('Application ready')

		yield

		logger.info('Shutting down...')
	finally:
		await cleanup_dependencies(settings)


app = FastAPI(title=settings.APP_NAME, debug=settings.DEBUG, lifespan=lifespan)

app.add_middleware(
	CORSMiddleware,
	allow_origins=settings.CORS_ORIGINS,
	allow_methods=['GET'],
	allow_headers=['*'],
)

app.include_router(quotes.router)
register_exception_handlers(app)


if __name__ == '__main__':
	import uvicorn

	logger.info(f'Starting server on {settings.HOST}:{settings.PORT}')

	uvicorn.run(
		'api.main:app',
		host=settings.HOST,
		port=settings.PORT,
		reload=settings.DEBUG,
		log_level=settings.LOG_LEVEL.lower(),
	)

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from domain.exceptions.quote import QuoteException, UnsupportedCurrencyError

logger = logging.getLogger(__name__)


def register_exception_handlers(app: FastAPI) -> None:
	@app.exception_handler(UnsupportedCurrencyError)
	async def unsupported_currency_handler(request: Request, exc: UnsupportedCurrencyError):
		logger.warning(f'Error in {request.url.path}: {exc}')
		return JSONResponse(status_code=500, content={'error': str(exc)})

	@app.exception_handler(QuoteException)
	async def quote_error_handler(request: Request, exc: QuoteException):
		logger.error(f'Error in {request.url.path}: {exc}')
		return JSONResponse(status_code=500, content={'error': str(exc)})

	@app.exception_handler(Exception)
	async def global_exception_handler(request: Request, exc: Exception):
		logger.error(f'Unhandled exception in {request.url.path}: {exc}', exc_info=True)
		return JSONResponse(status_code=500, content={'error': 'Internal server error'})

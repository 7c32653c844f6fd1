import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Request, status

from api.dependencies import get_currency, get_quote_service
from api.schemas import (
	AverageResponse,
	ErrorResponse,
	QuoteResponse,
	SlippageResponse,
	SupportedCurrenciesResponse,
	WelcomeResponse,
)
from application.services import QuoteService

logger = logging.getLogger(__name__)

router = APIRouter(tags=['quotes'])

ERROR_RESPONSES = {status.HTTP_500_INTERNAL_SERVER_ERROR: {'model': ErrorResponse}}


@router.get(
	'/welcome',
	response_model=WelcomeResponse,
	status_code=status.HTTP_200_OK,
	summary='Welcome message',
)
async def welcome(request: Request) -> WelcomeResponse:
	logger.info(f'Request received: {request.method} {request.url.path}')
	return WelcomeResponse(message='Welcome to the Currency Exchange API!')


@router.get(
	'/quotes',
	response_model=list[QuoteResponse],
	status_code=status.HTTP_200_OK,
	responses=ERROR_RESPONSES,
	summary='Current quote from every source',
)
async def get_quotes(
	currency: Annotated[str, Depends(get_currency)],
	service: Annotated[QuoteService, Depends(get_quote_service)],
) -> list[QuoteResponse]:
	quotes = await service.get_quotes(currency)
	return [QuoteResponse.model_validate(q) for q in quotes]


@router.get(
	'/average',
	response_model=AverageResponse,
	status_code=status.HTTP_200_OK,
	responses=ERROR_RESPONSES,
	summary='Average buy and sell price across sources',
)
async def get_average(
	currency: Annotated[str, Depends(get_currency)],
	service: Annotated[QuoteService, Depends(get_quote_service)],
) -> AverageResponse:
	average = await service.get_average(currency)
	return AverageResponse.model_validate(average)


@router.get(
	'/slippage',
	response_model=list[SlippageResponse],
	status_code=status.HTTP_200_OK,
	responses=ERROR_RESPONSES,
	summary='Deviation of each source from the average',
)
async def get_slippage(
	currency: Annotated[str, Depends(get_currency)],
	service: Annotated[QuoteService, Depends(get_quote_service)],
) -> list[SlippageResponse]:
	slippage = await service.get_slippage(currency)
	return [SlippageResponse.model_validate(s) for s in slippage]


@router.get(
	'/currencies',
	response_model=SupportedCurrenciesResponse,
	status_code=status.HTTP_200_OK,
	summary='List supported currencies',
)
async def get_supported_currencies(
	service: Annotated[QuoteService, Depends(get_quote_service)],
) -> SupportedCurrenciesResponse:
	return SupportedCurrenciesResponse(currencies=service.get_supported_currencies())

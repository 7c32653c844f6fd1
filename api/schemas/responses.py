from pydantic import BaseModel, ConfigDict, Field


class WelcomeResponse(BaseModel):
	message: str


class QuoteResponse(BaseModel):
	buy_price: float = Field(..., description='Price the source buys the currency at')
	sell_price: float = Field(..., description='Price the source sells the currency at')
	source: str = Field(..., description='Source identifier')

	model_config = ConfigDict(
		from_attributes=True,
		json_schema_extra={
			'example': {
				'buy_price': 5.21,
				'sell_price': 5.31,
				'source': 'https://wise.com/es/currency-converter/brl-to-usd-rate',
			}
		},
	)


class AverageResponse(BaseModel):
	average_buy_price: float = Field(..., description='Mean buy price across sources')
	average_sell_price: float = Field(..., description='Mean sell price across sources')

	model_config = ConfigDict(
		from_attributes=True,
		json_schema_extra={'example': {'average_buy_price': 5.18, 'average_sell_price': 5.28}},
	)


class SlippageResponse(BaseModel):
	buy_price_slippage: float = Field(..., description='Buy price deviation from the average, in percent')
	sell_price_slippage: float = Field(..., description='Sell price deviation from the average, in percent')
	source: str = Field(..., description='Source identifier')

	model_config = ConfigDict(
		from_attributes=True,
		json_schema_extra={
			'example': {
				'buy_price_slippage': 0.58,
				'sell_price_slippage': 0.38,
				'source': 'https://www.nomadglobal.com',
			}
		},
	)


class SupportedCurrenciesResponse(BaseModel):
	currencies: list[str] = Field(description='List of currency codes')

	model_config = ConfigDict(json_schema_extra={'examples': [{'currencies': ['ARS', 'BRL']}]})


class ErrorResponse(BaseModel):
	error: str = Field(..., description='Human readable error message')

from .requests import ConversionRequest
from .responses import ConversionResponse, HealthResponse, RatesResponse, SupportedCurrenciesResponse

__all__ = [
	'ConversionRequest',
	'ConversionResponse',
	'HealthResponse',
	'RatesResponse',
	'SupportedCurrenciesResponse',
]

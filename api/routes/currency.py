from typing import Annotated

from fastapi import APIRouter, Depends, Path, Query, status

from api.dependencies import get_conversion_service
from api.schemas import ConversionRequest, ConversionResponse, RatesResponse, SupportedCurrenciesResponse
from application.services import ConversionService

router = APIRouter(prefix='/api', tags=['currency'])

CurrencyCode = Annotated[str, Path(min_length=3, max_length=5)]


@router.get(
	'/convert',
	response_model=ConversionResponse,
	status_code=status.HTTP_200_OK,
	summary='Convert currency amount',
)
async def convert_currency_query(
	from_currency: Annotated[str, Query(alias='from', min_length=3, max_length=5)],
	to_currency: Annotated[str, Query(alias='to', min_length=3, max_length=5)],
	value: Annotated[float, Query(description='Amount of the source currency')],
	service: Annotated[ConversionService, Depends(get_conversion_service)],
) -> ConversionResponse:
	result, lookup = await service.convert(from_currency.upper(), to_currency.upper(), value)
	return ConversionResponse.from_result(result, lookup)


@router.post(
	'/convert',
	response_model=ConversionResponse,
	status_code=status.HTTP_200_OK,
	summary='Convert currency amount (JSON body)',
)
async def convert_currency(
	request: ConversionRequest,
	service: Annotated[ConversionService, Depends(get_conversion_service)],
) -> ConversionResponse:
	result, lookup = await service.convert(request.from_currency, request.to_currency, request.amount)
	return ConversionResponse.from_result(result, lookup)


@router.get(
	'/convert/{from_currency}/{to_currency}/{amount}',
	response_model=ConversionResponse,
	status_code=status.HTTP_200_OK,
	summary='Convert currency amount (path form)',
)
async def convert_currency_path(
	from_currency: CurrencyCode,
	to_currency: CurrencyCode,
	amount: float,
	service: Annotated[ConversionService, Depends(get_conversion_service)],
) -> ConversionResponse:
	result, lookup = await service.convert(from_currency.upper(), to_currency.upper(), amount)
	return ConversionResponse.from_result(result, lookup)


@router.get(
	'/rates',
	response_model=RatesResponse,
	status_code=status.HTTP_200_OK,
	summary='Current rate snapshot',
)
async def get_rates(
	service: Annotated[ConversionService, Depends(get_conversion_service)],
) -> RatesResponse:
	lookup = await service.latest()
	return RatesResponse.from_lookup(lookup)


@router.get(
	'/currencies',
	response_model=SupportedCurrenciesResponse,
	status_code=status.HTTP_200_OK,
	summary='List currencies in the current snapshot',
)
async def get_supported_currencies(
	service: Annotated[ConversionService, Depends(get_conversion_service)],
) -> SupportedCurrenciesResponse:
	lookup = await service.latest()
	return SupportedCurrenciesResponse(currencies=lookup.snapshot.currencies)

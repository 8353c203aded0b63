from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict, Field

from domain.models.rates import CacheStatus, ConversionResult, RateLookup


def _as_datetime(epoch_seconds: float) -> datetime:
	return datetime.fromtimestamp(epoch_seconds, tz=UTC)


class ConversionResponse(BaseModel):
	from_currency: str = Field(..., description='Source currency code')
	to_currency: str = Field(..., description='Target currency code')
	amount: float = Field(..., description='Original amount requested')
	converted_amount: float = Field(..., description='Converted amount, rounded half-up to 2 decimals')
	unrounded_amount: float = Field(..., description='Converted amount before rounding')
	exchange_rate: float = Field(..., description='Units of to_currency per unit of from_currency')
	base: str = Field(..., description='Base currency of the rate snapshot')
	timestamp: datetime = Field(..., description='When the rates were fetched')
	as_of: str = Field(..., description='Rate date reported by the provider')
	degraded: bool = Field(False, description='True when the last refresh failed and older rates were used')

	model_config = ConfigDict(
		json_schema_extra={
			'example': {
				'from_currency': 'USD',
				'to_currency': 'GBP',
				'amount': 120.0,
				'converted_amount': 90.0,
				'unrounded_amount': 90.0,
				'exchange_rate': 0.75,
				'base': 'EUR',
				'timestamp': '2025-09-27T10:30:00Z',
				'as_of': '2025-09-27',
				'degraded': False,
			}
		}
	)

	@classmethod
	def from_result(cls, result: ConversionResult, lookup: RateLookup) -> 'ConversionResponse':
		return cls(
			from_currency=result.from_currency,
			to_currency=result.to_currency,
			amount=result.amount,
			converted_amount=result.value,
			unrounded_amount=result.raw_value,
			exchange_rate=result.rate,
			base=result.base,
			timestamp=_as_datetime(result.fetched_at),
			as_of=result.as_of,
			degraded=lookup.degraded,
		)


class RatesResponse(BaseModel):
	base: str = Field(..., description='Currency all rates are relative to')
	as_of: str = Field(..., description='Rate date reported by the provider')
	timestamp: datetime = Field(..., description='When the rates were fetched')
	degraded: bool = Field(False, description='True when the last refresh failed')
	rates: dict[str, float] = Field(..., description='Units of each currency per unit of base')

	@classmethod
	def from_lookup(cls, lookup: RateLookup) -> 'RatesResponse':
		snapshot = lookup.snapshot
		return cls(
			base=snapshot.base,
			as_of=snapshot.as_of,
			timestamp=_as_datetime(snapshot.fetched_at),
			degraded=lookup.degraded,
			rates=dict(snapshot.rates),
		)


class SupportedCurrenciesResponse(BaseModel):
	currencies: list[str] = Field(description='List of currency codes')

	model_config = ConfigDict(json_schema_extra={'examples': [{'currencies': ['EUR', 'GBP', 'JPY', 'USD']}]})


class HealthResponse(BaseModel):
	status: str = Field(..., description='healthy, degraded or unhealthy')
	timestamp: datetime
	has_snapshot: bool
	is_stale: bool
	refreshing: bool
	age_seconds: float | None = None
	staleness_seconds: float
	refresh_count: int
	failure_count: int
	last_error: str | None = None
	currency_count: int = 0

	@classmethod
	def from_status(cls, cache_status: CacheStatus) -> 'HealthResponse':
		if not cache_status.has_snapshot:
			overall = 'unhealthy'
		elif cache_status.is_stale or cache_status.last_error:
			overall = 'degraded'
		else:
			overall = 'healthy'

		return cls(
			status=overall,
			timestamp=datetime.now(UTC),
			has_snapshot=cache_status.has_snapshot,
			is_stale=cache_status.is_stale,
			refreshing=cache_status.refreshing,
			age_seconds=cache_status.age_seconds,
			staleness_seconds=cache_status.staleness_seconds,
			refresh_count=cache_status.refresh_count,
			failure_count=cache_status.failure_count,
			last_error=cache_status.last_error,
			currency_count=len(cache_status.currencies),
		)

import logging

from application.services.converter import Converter
from domain.models.rates import ConversionResult, RateLookup
from infrastructure.cache.rate_cache import RateCache

logger = logging.getLogger(__name__)


class ConversionService:
	def __init__(self, rate_cache: RateCache, converter: Converter | None = None):
		self.rate_cache = rate_cache
		self.converter = converter or Converter()

	async def latest(self) -> RateLookup:
		return await self.rate_cache.get_current()

	async def convert(self, from_currency: str, to_currency: str, amount: float) -> tuple[ConversionResult, RateLookup]:
		lookup = await self.rate_cache.get_current()
		if lookup.degraded:
			logger.warning(f'Converting {from_currency}->{to_currency} with stale rates from {lookup.snapshot.as_of}')

		result = self.converter.convert(lookup.snapshot, from_currency, to_currency, amount)
		return result, lookup

import logging
from typing import Annotated

from fastapi import Depends

from application.services import ConversionService, Converter
from config.settings import Settings, get_settings
from domain.exceptions.currency import FetchError, ParseError
from infrastructure.cache.rate_cache import RateCache
from infrastructure.parsers import SnapshotParser
from infrastructure.providers import FixerIOProvider, RateProvider

logger = logging.getLogger(__name__)


class AppDependencies:
	"""Container for application-wide singleton dependencies."""

	provider: RateProvider | None = None
	rate_cache: RateCache | None = None
	converter: Converter | None = None


deps = AppDependencies()


def build_rate_cache(settings: Settings, provider: RateProvider) -> RateCache:
	api_key = settings.load_api_key()
	if not api_key:
		logger.warning('No Fixer.io API key configured; rate refreshes will be rejected upstream')

	return RateCache(
		provider=provider,
		parser=SnapshotParser(),
		credential=api_key,
		staleness=settings.RATE_STALENESS_SECONDS,
		fetch_timeout=settings.FETCH_TIMEOUT_SECONDS,
		failure_cooldown=settings.REFRESH_FAILURE_COOLDOWN_SECONDS,
		serve_stale_while_refreshing=settings.SERVE_STALE_WHILE_REFRESHING,
		retry_attempts=settings.FETCH_RETRY_ATTEMPTS,
		retry_backoff=settings.FETCH_RETRY_BACKOFF_SECONDS,
	)


def init_dependencies() -> None:
	"""Initialize all singleton dependencies. Called at app startup."""
	logger.info('Initializing dependencies...')
	settings = get_settings()

	deps.provider = FixerIOProvider(
		timeout=settings.FETCH_TIMEOUT_SECONDS,
		base_url=settings.FIXERIO_BASE_URL,
	)
	deps.rate_cache = build_rate_cache(settings, deps.provider)
	deps.converter = Converter()
	logger.info('Dependencies initialized')


async def cleanup_dependencies() -> None:
	logger.info('Cleaning up dependencies...')

	if deps.provider:
		await deps.provider.close()

	logger.info('Cleanup complete')


async def bootstrap() -> None:
	"""Warm the rate cache. A failure here is logged; requests will retry the fetch."""
	logger.info('Bootstrapping application...')

	if deps.rate_cache is None:
		raise RuntimeError('Dependencies not initialized. Call init_dependencies() first.')

	try:
		snapshot = await deps.rate_cache.refresh()
		logger.info(f'Loaded {len(snapshot.rates)} rates (base {snapshot.base}, {snapshot.as_of})')
	except (FetchError, ParseError) as e:
		logger.warning(f'Initial rate fetch failed, starting without rates: {e}')

	logger.info('Bootstrap complete')


def get_rate_cache() -> RateCache:
	if deps.rate_cache is None:
		raise RuntimeError('Rate cache not initialized')
	return deps.rate_cache


def get_converter() -> Converter:
	return deps.converter or Converter()


def get_conversion_service(
	rate_cache: Annotated[RateCache, Depends(get_rate_cache)],
	converter: Annotated[Converter, Depends(get_converter)],
) -> ConversionService:
	return ConversionService(rate_cache=rate_cache, converter=converter)

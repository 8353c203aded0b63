import logging
from typing import Annotated

from fastapi import APIRouter, Depends

from api.dependencies import get_rate_cache
from api.schemas import HealthResponse
from infrastructure.cache.rate_cache import RateCache

logger = logging.getLogger(__name__)

router = APIRouter(prefix='/api', tags=['health'])


@router.get(
	'/health',
	response_model=HealthResponse,
	summary='Rate cache health',
	description='Report snapshot age, refresh counters and the last refresh error',
)
async def health_check(rate_cache: Annotated[RateCache, Depends(get_rate_cache)]) -> HealthResponse:
	health = HealthResponse.from_status(rate_cache.status())
	if health.status != 'healthy':
		logger.warning(f'Health check: {health.status} (last error: {health.last_error})')
	return health

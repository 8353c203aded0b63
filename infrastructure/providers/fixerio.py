import logging

import httpx

from domain.exceptions.currency import FetchError

logger = logging.getLogger(__name__)


class FixerIOProvider:
	BASE_URL = 'http://data.fixer.io/api'

	def __init__(
		self,
		client: httpx.AsyncClient | None = None,
		timeout: float = 10,
		base_url: str | None = None,
	):
		self.base_url = (base_url or self.BASE_URL).rstrip('/')
		self._client = client or httpx.AsyncClient(timeout=httpx.Timeout(timeout))

	@property
	def name(self) -> str:
		return 'fixerio'

	async def fetch(self, credential: str) -> bytes:
		url = f'{self.base_url}/latest'

		try:
			response = await self._client.get(url, params={'access_key': credential})
			response.raise_for_status()
		except httpx.HTTPStatusError as e:
			raise FetchError(
				f'Fixer.io HTTP error {e.response.status_code}: {e.response.text[:200]}'
			) from e
		except httpx.RequestError as e:
			raise FetchError(f'Fixer.io request failed: {e.__class__.__name__}') from e

		body = response.content
		if not body or not body.strip():
			raise FetchError('Fixer.io returned an empty response')

		logger.debug(f'Fetched {len(body)} bytes from {self.name}')
		return body

	async def close(self) -> None:
		await self._client.aclose()

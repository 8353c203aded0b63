from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
	FIXERIO_API_KEY: str = ''
	FIXERIO_API_KEY_FILE: str = 'key.txt'
	FIXERIO_BASE_URL: str = 'http://data.fixer.io/api'

	# Rate cache
	RATE_STALENESS_SECONDS: float = Field(default=3600, gt=0)
	FETCH_TIMEOUT_SECONDS: float = Field(default=10, gt=0)
	FETCH_RETRY_ATTEMPTS: int = Field(default=1, ge=1)
	FETCH_RETRY_BACKOFF_SECONDS: float = Field(default=1, ge=0)
	REFRESH_FAILURE_COOLDOWN_SECONDS: float = Field(default=60, ge=0)
	SERVE_STALE_WHILE_REFRESHING: bool = False

	# Application
	APP_NAME: str = 'Currency Converter API'
	DEBUG: bool = False
	LOG_LEVEL: str = 'INFO'
	LOG_JSON: bool = False
	HOST: str = '0.0.0.0'
	PORT: int = 8080

	model_config = SettingsConfigDict(env_file='.env', case_sensitive=False, extra='ignore')

	def load_api_key(self) -> str:
		"""Key from the environment wins; otherwise read the key file if it exists."""
		if self.FIXERIO_API_KEY:
			return self.FIXERIO_API_KEY.strip()
		key_file = Path(self.FIXERIO_API_KEY_FILE)
		if key_file.is_file():
			return key_file.read_text(encoding='utf-8').strip()
		return ''


@lru_cache
def get_settings() -> Settings:
	return Settings()

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
	DATABASE_URL: str = 'sqlite+aiosqlite:///./currency.db'

	DEFAULT_CURRENCY: str = 'BRL'

	# Seconds a cached average/slippage bundle stays fresh
	CACHE_FRESHNESS_SECONDS: float = 1.0
	PROVIDER_TIMEOUT_SECONDS: float = 5.0

	PERSISTENCE_QUEUE_SIZE: int = 1000
	PERSISTENCE_SHUTDOWN_TIMEOUT_SECONDS: float = 5.0

	# Logging
	LOG_LEVEL: str = 'INFO'
	LOG_JSON: bool = False
	LOG_DIRECTORY: str = ''

	# Application
	APP_NAME: str = 'Currency Quote Aggregator API'
	DEBUG: bool = False
	HOST: str = '0.0.0.0'
	PORT: int = 3000
	CORS_ORIGINS: list[str] = ['*']

	model_config = SettingsConfigDict(env_file='.env', case_sensitive=False, extra='ignore')


@lru_cache
def get_settings() -> Settings:
	return Settings()

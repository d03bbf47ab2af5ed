from pathlib import Path
from typing import List

from pydantic import SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


_PROJECT_ROOT = Path(__file__).resolve().parents[3]
_ENV_PATH = _PROJECT_ROOT / '.env'
_ENV_FILE = _ENV_PATH if _ENV_PATH.exists() else (_PROJECT_ROOT / '.env.example')


def _split_csv(v: str | List[str]) -> List[str]:
    if isinstance(v, str) and not v.startswith('['):
        return [i.strip() for i in v.split(',') if i.strip()]
    elif isinstance(v, list):
        return v
    return []


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=str(_ENV_FILE),
        env_ignore_empty=True,
        extra='ignore',
    )

    PROJECT_NAME: str = 'Popcorn Booking'
    VERSION: str = '0.1.0'
    DEBUG: bool = True  # Set to False in production

    # CORS
    BACKEND_CORS_ORIGINS: List[str] = []  # add your frontend URL here

    @field_validator('BACKEND_CORS_ORIGINS', 'ADMIN_USER_IDS', mode='before')
    @classmethod
    def assemble_csv_list(cls, v: str | List[str]) -> List[str]:
        return _split_csv(v)

    # Identity provider (JWT issued by the external auth service)
    IDENTITY_JWKS_URL: str = ''  # RS256 via JWKS when set, otherwise HS256 with IDENTITY_JWT_SECRET
    IDENTITY_JWT_SECRET: SecretStr = SecretStr('test_identity_secret_change_in_production')
    IDENTITY_JWT_ALGORITHM: str = 'HS256'
    IDENTITY_JWT_AUDIENCE: str = ''
    IDENTITY_WEBHOOK_SECRET: SecretStr = SecretStr('test_webhook_secret')
    ADMIN_USER_IDS: List[str] = []

    # PostgreSQL
    POSTGRES_SERVER: str = 'localhost'
    POSTGRES_PORT: int = 5432
    POSTGRES_USER: str = 'postgres'
    POSTGRES_PASSWORD: SecretStr = SecretStr('postgres')
    POSTGRES_DB: str = 'popcorn_booking'

    DB_POOL_SIZE: int = 10
    DB_POOL_MAX_OVERFLOW: int = 5
    DB_POOL_TIMEOUT: int = 10  # seconds to wait for a pooled connection
    DB_POOL_RECYCLE: int = 3600
    DB_POOL_PRE_PING: bool = True

    @property
    def DATABASE_URL_ASYNC(self) -> str:
        return (
            f'postgresql+asyncpg://{self.POSTGRES_USER}:'
            f'{self.POSTGRES_PASSWORD.get_secret_value()}@'
            f'{self.POSTGRES_SERVER}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}'
        )

    # Kvrocks Configuration (Redis protocol + Kvrocks storage)
    KVROCKS_HOST: str = 'localhost'
    KVROCKS_PORT: int = 6666
    KVROCKS_DB: int = 0
    KVROCKS_PASSWORD: str = ''
    KVROCKS_KEY_PREFIX: str = ''  # test isolation
    REDIS_DECODE_RESPONSES: bool = True

    # Kvrocks Connection Pool Configuration
    KVROCKS_POOL_MAX_CONNECTIONS: int = 50
    KVROCKS_POOL_SOCKET_TIMEOUT: int = 5  # Socket read/write timeout (seconds)
    KVROCKS_POOL_SOCKET_CONNECT_TIMEOUT: int = 5  # Connection timeout (seconds)
    KVROCKS_POOL_SOCKET_KEEPALIVE: bool = True
    KVROCKS_POOL_HEALTH_CHECK_INTERVAL: int = 30

    # Booking hold window
    BOOKING_HOLD_SECONDS: int = 600

    # Deferred task worker
    DEFERRED_TASK_WORKER_ENABLED: bool = True
    DEFERRED_TASK_POLL_INTERVAL_SECONDS: float = 1.0
    DEFERRED_TASK_BATCH_SIZE: int = 20
    DEFERRED_TASK_VISIBILITY_TIMEOUT_SECONDS: int = 60
    DEFERRED_TASK_RETRY_BASE_SECONDS: int = 5
    DEFERRED_TASK_RETRY_MAX_SECONDS: int = 300

    # Show reminders
    SHOW_REMINDER_INTERVAL_SECONDS: int = 8 * 60 * 60

    # Movie metadata provider (TMDB)
    TMDB_API_BASE_URL: str = 'https://api.themoviedb.org/3'
    TMDB_API_KEY: SecretStr = SecretStr('')
    TMDB_TIMEOUT_SECONDS: float = 10.0
    TMDB_MAX_RETRIES: int = 6
    TMDB_RETRY_INITIAL_DELAY_SECONDS: float = 0.5

    # Email
    EMAIL_SENDER_ADDRESS: str = 'no-reply@popcorn-booking.local'


settings = Settings()  # type: ignore
